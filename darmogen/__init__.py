"""darmogen - Dart model generator

Generates Dart model classes, with JSON serialization, from the entity
classes of a TypeScript (TypeORM / NestJS) code base. Entities are resolved
across files, including inherited properties and cross-entity relations.
"""

__version__ = "1.0.0"

from .pipeline import (
    ConfigurationError,
    DarmogenConfig,
    DarmogenError,
    DartModelGenerator,
    EntityParser,
    GeneratorConfig,
    ParserConfig,
    load_config,
    run_pipeline,
)

__all__ = [
    "DarmogenConfig",
    "ParserConfig",
    "GeneratorConfig",
    "load_config",
    "EntityParser",
    "DartModelGenerator",
    "run_pipeline",
    "DarmogenError",
    "ConfigurationError",
]
