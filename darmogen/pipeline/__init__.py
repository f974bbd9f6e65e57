"""
Pipeline - TypeScript entities to Dart models.

1. Phase 1 (Resolver): Parse entity files, resolve imports and inheritance
   across files, and build one flat entity model per entity
2. Phase 2 (Emitter): Map types, render Dart model classes and assemble
   their imports
3. Phase 3 (Writer): Write every model atomically
"""

from __future__ import annotations

from .errors import (
    ConfigurationError,
    DarmogenError,
    EmissionError,
    MissingSourceFileError,
    OutputValidationError,
    SourceResolutionError,
)
from .config import (
    DEFAULT_CONFIG_FILENAME,
    DarmogenConfig,
    EntityIdentifier,
    FormatterConfig,
    GeneratorConfig,
    ParserConfig,
    load_config,
)
from .progress import NullProgress, ProgressListener
from .resolver import EntityParser, ParseResult
from .emitter import DartModelGenerator, GenerationResult
from .runner import RunResult, run_pipeline

__all__ = [
    "DarmogenError",
    "ConfigurationError",
    "MissingSourceFileError",
    "SourceResolutionError",
    "EmissionError",
    "OutputValidationError",
    "DEFAULT_CONFIG_FILENAME",
    "DarmogenConfig",
    "ParserConfig",
    "GeneratorConfig",
    "EntityIdentifier",
    "FormatterConfig",
    "load_config",
    "ProgressListener",
    "NullProgress",
    "EntityParser",
    "ParseResult",
    "DartModelGenerator",
    "GenerationResult",
    "RunResult",
    "run_pipeline",
]
