"""
Writer module.

Provides atomic file writes for generated models.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter, validate_dart

__all__ = [
    "AtomicWriter",
    "validate_dart",
]
