"""
Progress reporting for the pipeline stages.

Listeners are called synchronously on the thread running the stage: one
on_start call, then on_progress calls with a strictly increasing count.
"""

from __future__ import annotations

from typing import Protocol


class ProgressListener(Protocol):
    def on_start(self, total: int, items: list[str]) -> None: ...

    def on_progress(self, loaded: int, name: str) -> None: ...


class NullProgress:
    """Listener that ignores every update."""

    def on_start(self, total: int, items: list[str]) -> None:
        pass

    def on_progress(self, loaded: int, name: str) -> None:
        pass
