"""
Inheritance resolver.

Follows the heritage clauses of a class across files and returns its
ancestors, nearest first.
"""

from __future__ import annotations

import logging

from .ir_nodes import EntityClass
from .source_cache import SourceCache

logger = logging.getLogger(__name__)


class InheritanceResolver:
    """Resolves the ancestor chain of a class."""

    def __init__(self, cache: SourceCache):
        self.cache = cache

    def resolve_ancestors(self, entity_class: EntityClass) -> list[EntityClass]:
        """
        Return the ancestors of a class.

        Each heritage reference contributes the referenced class followed by
        its own ancestors. References that cannot be resolved (unknown file,
        unknown class) contribute nothing. Cycles stop at the first class
        seen twice.

        Args:
            entity_class: The class to resolve

        Returns:
            De-duplicated list of ancestor classes
        """
        visited = {(entity_class.source_path, entity_class.name)}
        return self._resolve(entity_class, visited)

    def _resolve(self, entity_class: EntityClass, visited: set[tuple[str, str]]) -> list[EntityClass]:
        ancestors: list[EntityClass] = []
        for name in entity_class.heritage:
            parent = self.find_class(entity_class, name)
            if parent is None:
                continue

            key = (parent.source_path, parent.name)
            if key in visited:
                continue
            visited.add(key)

            ancestors.append(parent)
            ancestors.extend(self._resolve(parent, visited))
        return ancestors

    def find_class(self, entity_class: EntityClass, name: str) -> EntityClass | None:
        """Look up a class name from the file declaring entity_class."""
        source = self.cache.import_source(entity_class.source_path)
        if source is None:
            return None

        filepath = source.imports.get(name, source.filepath)
        target = self.cache.import_source(filepath)
        if target is None or name not in target.elements:
            logger.debug("Heritage '%s' of %s not found in %s", name, entity_class.name, filepath)
            return None
        return target.elements[name]
