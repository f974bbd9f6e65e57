"""
Import assembly for generated Dart models.
"""

from __future__ import annotations

import os
from pathlib import PurePath

from ..config import GeneratorConfig
from .dart_entity import DartEntity
from .type_mapper import DartTypeMapper


class ImportAssembler:
    """Collects the header lines and imports of one generated model.

    Order: configured header blocks, configured global imports, imports of
    entities named by field origins, then lazy imports collected during
    emission. Duplicates and imports of the entity's own file are dropped.
    """

    def __init__(self, config: GeneratorConfig, mapper: DartTypeMapper):
        self.config = config
        self.mapper = mapper

    def headers(self, entity: DartEntity) -> list[str]:
        """
        Return the header lines of an entity file.

        Must run after the entity body was generated, so that its lazy
        imports are known.
        """
        lines = list(self.config.headers)
        targets: list[str] = []

        for imp in self.config.imports:
            targets.append(os.path.normpath(os.path.join(self.config.out, imp)))

        for field in entity.model.fields:
            relative_path = field.type.relative_path
            if not relative_path:
                continue
            relation = self.mapper.find_entity_by_path(relative_path, field.type.name)
            if relation is not None:
                targets.append(relation.target_file)

        for related in entity.lazy_imports.values():
            targets.append(related.target_file)

        for target in targets:
            if target == entity.target_file:
                continue
            lines.append(self.import_statement(entity, target))

        return list(dict.fromkeys(lines))

    @staticmethod
    def import_statement(entity: DartEntity, target_file: str) -> str:
        """Relative import of target_file from the entity's file."""
        relative = os.path.relpath(target_file, os.path.dirname(entity.target_file))
        return f"import '{PurePath(relative).as_posix()}';"
