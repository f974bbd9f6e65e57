"""
Atomic file writer for generated models.

A model file is either written completely or not at all.
"""

from __future__ import annotations

import os
import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import OutputValidationError

_CLASS_PATTERN = re.compile(r"^\s*(abstract\s+)?class\s+\w+", re.MULTILINE)

_LINE_COMMENT_PATTERN = re.compile(r"^\s*//.*$", re.MULTILINE)


def validate_dart(content: str) -> None:
    """Structural check of generated Dart code.

    Raises:
        OutputValidationError: If no class is declared or braces are unbalanced
            outside of line comments
    """
    if not _CLASS_PATTERN.search(content):
        raise OutputValidationError("Generated Dart code has no class declaration")

    code = _LINE_COMMENT_PATTERN.sub("", content)
    open_braces = code.count("{")
    close_braces = code.count("}")
    if open_braces != close_braces:
        raise OutputValidationError(f"Generated Dart code has unbalanced braces: {open_braces} open, {close_braces} close")


class AtomicWriter:
    """Writes files through a temporary sibling and an atomic rename.

    An interrupted or rejected write never leaves the target file in an
    incomplete state.
    """

    def __init__(self, validate: Callable[[str], None] | None = None):
        """
        Initialize the writer.

        Args:
            validate: Validation function for the content, validate_dart by default
        """
        self._validate = validate or validate_dart

    def write(self, path: str | Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        if validate:
            self._validate(content)

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(temp_path, path)
        except Exception:
            # Clean up temp file on any error
            temp_path.unlink(missing_ok=True)
            raise
