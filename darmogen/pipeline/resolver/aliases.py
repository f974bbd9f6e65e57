"""
Import alias expansion.

Alias targets are templates that may reference other parser configuration
fields, e.g. {"src": "{cwd}"} or {"@lib": "{root}/libs"}.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

_FIELD_PATTERN = re.compile(r"\{([^{}]+)\}")


def dot_get(obj: Any, path: str) -> Any:
    """Look up a dotted path in nested dicts or attributes.

    Returns None as soon as a segment is missing.
    """
    for part in path.split("."):
        if obj is None:
            return None
        if isinstance(obj, dict):
            obj = obj.get(part)
        else:
            obj = getattr(obj, part, None)
    return obj


class AliasTable:
    """Alias prefixes with their expanded target paths."""

    def __init__(self, aliases: dict[str, str], context: Any):
        """
        Expand every alias template once.

        Args:
            aliases: Alias prefix -> target template
            context: Object the {field.path} placeholders are looked up in
        """
        self._aliases: dict[str, str] = {name: self._expand(template, context) for name, template in aliases.items()}

    @staticmethod
    def _expand(template: str, context: Any) -> str:
        def replace(match: re.Match) -> str:
            value = dot_get(context, match.group(1))
            return "" if value is None else str(value)

        return _FIELD_PATTERN.sub(replace, template)

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield (prefix, target) pairs in configuration order."""
        yield from self._aliases.items()

    def __getitem__(self, name: str) -> str:
        return self._aliases[name]

    def __len__(self) -> int:
        return len(self._aliases)
