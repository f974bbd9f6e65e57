"""
Resolved entity model.

These nodes describe TypeScript sources after parsing: the cached source
files, the classes they declare, and the flattened entity models built
from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tree_sitter import Node, Tree


class TypeKind(Enum):
    """Kind of a field type."""

    PRIMITIVE = "primitive"  # string, number, boolean, any...
    REFERENCE = "reference"  # Date, User, Promise<User>
    ARRAY = "array"  # T[], Array<T>
    INDEXED_ACCESS = "indexed_access"  # T['key']
    UNKNOWN = "unknown"  # object literal, function, tuple...


@dataclass
class TypeDescriptor:
    """Type of one entity field."""

    kind: TypeKind = TypeKind.PRIMITIVE

    # "String", "Number", "ArrayType", "IndexedAccessType" or a class name
    name: str = ""

    # For ARRAY
    element: TypeDescriptor | None = None

    # For INDEXED_ACCESS
    object_type: TypeDescriptor | None = None
    index_type: TypeDescriptor | None = None

    # For generic REFERENCE types
    type_arguments: list[TypeDescriptor] = field(default_factory=list)

    # Absolute path of the file defining the type, when imported
    import_file: str | None = None

    # import_file relative to the parser cwd
    relative_path: str | None = None

    node: Node | None = field(default=None, compare=False, repr=False)


@dataclass(eq=False)
class EntityClass:
    """A top-level class declared in a source file."""

    name: str = ""

    # Key of the owning ImportedSource in the source cache
    source_path: str = ""

    node: Node | None = field(default=None, repr=False)

    # Decorator identifiers, e.g. ["Entity"]
    decorators: list[str] = field(default_factory=list)

    # Names after "extends"
    extends: list[str] = field(default_factory=list)

    # Names after "implements"
    implements: list[str] = field(default_factory=list)

    is_entity: bool = False

    @property
    def heritage(self) -> list[str]:
        """All heritage references, in declaration order."""
        return self.extends + self.implements


@dataclass(eq=False)
class ImportedSource:
    """One parsed source file."""

    filepath: str = ""
    tree: Tree | None = field(default=None, repr=False)

    # Local name -> absolute path of the exporting file
    imports: dict[str, str] = field(default_factory=dict)

    # Class name -> class, for every top-level class
    elements: dict[str, EntityClass] = field(default_factory=dict)

    @property
    def entities(self) -> list[EntityClass]:
        return [element for element in self.elements.values() if element.is_entity]


@dataclass
class Field:
    """An exposed property of an entity."""

    name: str = ""
    type: TypeDescriptor = field(default_factory=TypeDescriptor)

    # Class declaring the property (the entity itself or an ancestor)
    declared_in: str = ""

    node: Node | None = field(default=None, compare=False, repr=False)


@dataclass
class EntityModel:
    """A resolved entity with its flattened, de-duplicated fields."""

    name: str = ""
    fields: list[Field] = field(default_factory=list)


@dataclass
class SourceEntity:
    """An entity model together with its source location."""

    # Source file relative to the parser cwd
    path: str = ""
    name: str = ""
    model: EntityModel = field(default_factory=EntityModel)
