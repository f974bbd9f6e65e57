"""
TypeScript to Dart type mapping.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from ..resolver.ir_nodes import TypeDescriptor, TypeKind
from .dart_entity import DartEntity

logger = logging.getLogger(__name__)


class DartTypeMapper:
    """Maps field type descriptors to Dart type names.

    Every entity reference met while mapping is recorded in the lazy imports
    of the entity being generated.
    """

    DATE_TYPES = {"Date"}

    NUMERIC_TYPES = {"Number", "BigInt"}

    # Type mapping from TypeScript primitives to Dart types
    TYPE_MAP = {
        "String": "String",
        "Boolean": "bool",
        "Any": "dynamic",
        "Unknown": "dynamic",
        "Object": "dynamic",
        "Symbol": "dynamic",
        "Void": "dynamic",
        "Never": "dynamic",
        "Null": "dynamic",
        "Undefined": "dynamic",
    }

    ANY_TYPE = "dynamic"

    def __init__(self, entities: list[DartEntity], name_formatter: Callable[[str], str]):
        """
        Initialize the mapper.

        Args:
            entities: Every entity of the run
            name_formatter: Formatter applied to entity class names
        """
        self.entities = entities
        self.name_formatter = name_formatter
        self._by_name: dict[str, DartEntity] = {}
        for entity in entities:
            self._by_name.setdefault(entity.name, entity)

    def find_entity(self, name: str) -> DartEntity | None:
        return self._by_name.get(name)

    def find_entity_by_path(self, path: str, name: str | None = None) -> DartEntity | None:
        """Find an entity declared in a source file, preferring the given name."""
        path = os.path.normpath(path)
        candidates = [entity for entity in self.entities if os.path.normpath(entity.path) == path]
        for entity in candidates:
            if entity.name == name:
                return entity
        return candidates[0] if candidates else None

    def class_name(self, entity: DartEntity) -> str:
        return self.name_formatter(entity.name)

    def relation(self, entity: DartEntity, descriptor: TypeDescriptor | None) -> DartEntity | None:
        """Entity referenced by a descriptor, recorded as a lazy import."""
        if descriptor is None or descriptor.kind != TypeKind.REFERENCE:
            return None
        relation = self.find_entity(descriptor.name)
        if relation is not None:
            entity.add_lazy_import(relation)
        return relation

    def map_type(self, entity: DartEntity, descriptor: TypeDescriptor) -> str:
        """
        Translate a field type to a Dart type.

        Args:
            entity: Entity being generated
            descriptor: Type of one of its fields

        Returns:
            Dart type name
        """
        if descriptor.name in self.DATE_TYPES:
            return "DateTime"

        if descriptor.name in self.NUMERIC_TYPES:
            return "int"

        if descriptor.kind == TypeKind.ARRAY:
            if descriptor.element is None:
                return f"List<{self.ANY_TYPE}>"
            return f"List<{self.map_type(entity, descriptor.element)}>"

        if descriptor.kind == TypeKind.INDEXED_ACCESS:
            if descriptor.index_type is None:
                return self.ANY_TYPE
            return self.map_type(entity, descriptor.index_type)

        if descriptor.kind == TypeKind.REFERENCE:
            relation = self.relation(entity, descriptor)
            if relation is not None:
                return self.class_name(relation)
            logger.debug("Unknown type '%s' in %s, using %s", descriptor.name, entity.name, self.ANY_TYPE)
            return self.ANY_TYPE

        if descriptor.kind == TypeKind.UNKNOWN:
            return self.ANY_TYPE

        return self.TYPE_MAP.get(descriptor.name, descriptor.name)
