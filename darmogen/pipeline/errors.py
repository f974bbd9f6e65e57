"""
Error types raised by the darmogen pipeline.

Configuration errors are fatal for the whole run. Missing source files,
resolution failures and emission errors are isolated per item and aggregated
by the stage that produced them.
"""

from __future__ import annotations


class DarmogenError(Exception):
    """Base class for all darmogen errors."""

    pass


class ConfigurationError(DarmogenError):
    """Raised when the configuration cannot drive a run.

    This happens when:
    - No entity identification rule is configured
    - More than one identification rule is configured
    - A formatter cannot be built from its configured value
    """

    pass


class MissingSourceFileError(DarmogenError):
    """Raised when a discovered source file cannot be read."""

    def __init__(self, path: str):
        super().__init__(f"File not found: {path}")
        self.path = path


class EmissionError(DarmogenError):
    """Raised when a Dart model cannot be generated or written."""

    def __init__(self, entity_name: str, target_file: str, reason: str):
        super().__init__(f"Could not generate '{entity_name}' ({target_file}): {reason}")
        self.entity_name = entity_name
        self.target_file = target_file
        self.reason = reason


class OutputValidationError(DarmogenError):
    """Raised when generated Dart code fails structural validation."""

    pass


class SourceResolutionError(DarmogenError):
    """Raised when the entities of a readable source file cannot be resolved."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not resolve {path}: {reason}")
        self.path = path
        self.reason = reason
