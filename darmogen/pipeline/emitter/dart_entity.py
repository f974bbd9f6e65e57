"""
Dart emission model.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..resolver.ir_nodes import EntityModel


@dataclass(eq=False)
class DartEntity:
    """An entity decorated with its output location.

    lazy_imports collects, in discovery order, the entities referenced while
    the model body is generated. It is written by the entity's own emission
    and read by its own import assembly.
    """

    # Source file relative to the parser cwd
    path: str = ""
    name: str = ""
    model: EntityModel = field(default_factory=EntityModel)

    # Absolute path of the generated Dart file
    target_file: str = ""

    # Entity name -> entity
    lazy_imports: dict[str, DartEntity] = field(default_factory=dict, repr=False)

    def add_lazy_import(self, entity: DartEntity) -> None:
        self.lazy_imports.setdefault(entity.name, entity)
