"""
Emitter module.

Contains Dart type mapping, model emission, import assembly and the model
generator.
"""

from __future__ import annotations

from .dart_entity import DartEntity
from .dart_model import DartModelEmitter
from .generator import DartModelGenerator, GenerationResult
from .imports import ImportAssembler
from .type_mapper import DartTypeMapper

__all__ = [
    "DartEntity",
    "DartTypeMapper",
    "DartModelEmitter",
    "ImportAssembler",
    "DartModelGenerator",
    "GenerationResult",
]
