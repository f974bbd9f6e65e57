"""
Resolver module.

Contains alias and module resolution, the source cache, entity
classification, inheritance resolution and property extraction.
"""

from __future__ import annotations

from .aliases import AliasTable
from .classifier import EntityClassifier
from .inheritance import InheritanceResolver
from .ir_nodes import (
    EntityClass,
    EntityModel,
    Field,
    ImportedSource,
    SourceEntity,
    TypeDescriptor,
    TypeKind,
)
from .module_resolver import ModuleResolver
from .parser import EntityParser, ParseResult
from .properties import PropertyExtractor
from .source_cache import SourceCache

__all__ = [
    "AliasTable",
    "ModuleResolver",
    "SourceCache",
    "EntityClassifier",
    "InheritanceResolver",
    "PropertyExtractor",
    "EntityParser",
    "ParseResult",
    "EntityClass",
    "ImportedSource",
    "TypeDescriptor",
    "TypeKind",
    "Field",
    "EntityModel",
    "SourceEntity",
]
