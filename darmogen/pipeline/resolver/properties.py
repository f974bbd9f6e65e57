"""
Property extractor.

Builds the flat field list of an entity from its own properties and those of
its ancestors, reducing every declared type to a TypeDescriptor.
"""

from __future__ import annotations

import logging
import os

from tree_sitter import Node

from . import typescript as ts
from .inheritance import InheritanceResolver
from .ir_nodes import EntityClass, Field, ImportedSource, TypeDescriptor, TypeKind
from .source_cache import SourceCache

logger = logging.getLogger(__name__)

# Predefined TypeScript keywords -> descriptor names
KEYWORD_NAMES = {
    "string": "String",
    "number": "Number",
    "boolean": "Boolean",
    "any": "Any",
    "unknown": "Unknown",
    "object": "Object",
    "bigint": "BigInt",
    "symbol": "Symbol",
    "void": "Void",
    "never": "Never",
    "undefined": "Undefined",
    "null": "Null",
}

# Literal node types -> underlying primitive
LITERAL_NAMES = {
    "string": "String",
    "template_string": "String",
    "number": "Number",
    "unary_expression": "Number",
    "true": "Boolean",
    "false": "Boolean",
    "null": "Null",
    "undefined": "Undefined",
}

NULLISH = {"Null", "Undefined"}

ARRAY_GENERICS = {"Array", "ReadonlyArray"}


class PropertyExtractor:
    """Extracts the visible fields of an entity."""

    def __init__(
        self,
        cache: SourceCache,
        inheritance: InheritanceResolver,
        cwd: str,
        exclude_decorator: str = "Exclude",
        require_field_decorator: bool = True,
    ):
        """
        Initialize the extractor.

        Args:
            cache: Shared source cache
            inheritance: Resolver for ancestor classes
            cwd: Source root, origin paths are made relative to it
            exclude_decorator: Decorator hiding a property
            require_field_decorator: Skip properties without any decorator
        """
        self.cache = cache
        self.inheritance = inheritance
        self.cwd = cwd
        self.exclude_decorator = exclude_decorator
        self.require_field_decorator = require_field_decorator

    def extract_fields(self, entity_class: EntityClass) -> list[Field]:
        """
        Return the fields of an entity.

        The entity's own properties come first, then those of its ancestors,
        nearest first. When a name appears twice the first occurrence wins,
        so a property redeclared in a subclass shadows the inherited one.
        """
        classes = [entity_class] + self.inheritance.resolve_ancestors(entity_class)

        fields: dict[str, Field] = {}
        for declaring in classes:
            source = self.cache.import_source(declaring.source_path)
            if source is None:
                continue
            for member in ts.class_fields(declaring.node):
                field = self._extract_field(member, declaring, source)
                if field is not None and field.name not in fields:
                    fields[field.name] = field
        return list(fields.values())

    def is_visible(self, member: Node) -> bool:
        names = [ts.decorator_name(decorator) for decorator in ts.decorators_of(member)]
        if not names:
            return not self.require_field_decorator
        return self.exclude_decorator not in names

    def _extract_field(self, member: Node, declaring: EntityClass, source: ImportedSource) -> Field | None:
        if not self.is_visible(member):
            return None

        name = ts.node_text(member.child_by_field_name("name")).strip("'\"")
        annotation = member.child_by_field_name("type")
        type_node = annotation.named_children[0] if annotation is not None and annotation.named_children else None

        return Field(
            name=name,
            type=self.describe(type_node, source),
            declared_in=declaring.name,
            node=member,
        )

    def describe(self, node: Node | None, source: ImportedSource) -> TypeDescriptor:
        """Reduce a type node to a TypeDescriptor."""
        if node is None:
            return TypeDescriptor(kind=TypeKind.PRIMITIVE, name="Any")

        if node.type in ("parenthesized_type", "readonly_type"):
            return self.describe(node.named_children[0], source)

        if node.type == "union_type":
            variants = [self.describe(variant, source) for variant in self._union_variants(node)]
            for variant in variants:
                if variant.name not in NULLISH:
                    return variant
            return variants[0]

        if node.type == "literal_type":
            literal = node.named_children[0]
            return TypeDescriptor(kind=TypeKind.PRIMITIVE, name=LITERAL_NAMES.get(literal.type, "Any"), node=literal)

        if node.type == "predefined_type":
            text = ts.node_text(node)
            return TypeDescriptor(kind=TypeKind.PRIMITIVE, name=KEYWORD_NAMES.get(text, text.capitalize()), node=node)

        if node.type == "array_type":
            element = self.describe(node.named_children[0], source)
            return TypeDescriptor(kind=TypeKind.ARRAY, name="ArrayType", element=element, node=node)

        if node.type == "lookup_type":
            object_node, index_node = node.named_children[0], node.named_children[1]
            return TypeDescriptor(
                kind=TypeKind.INDEXED_ACCESS,
                name="IndexedAccessType",
                object_type=self.describe(object_node, source),
                index_type=self.describe(index_node, source),
                node=node,
            )

        if node.type == "generic_type":
            name = self._reference_name(node.child_by_field_name("name"))
            arguments_node = node.child_by_field_name("type_arguments")
            arguments = [self.describe(argument, source) for argument in arguments_node.named_children] if arguments_node is not None else []
            if name in ARRAY_GENERICS and len(arguments) == 1:
                return TypeDescriptor(kind=TypeKind.ARRAY, name="ArrayType", element=arguments[0], node=node)
            return self._reference(name, source, node, arguments)

        if node.type in ("type_identifier", "nested_type_identifier"):
            return self._reference(self._reference_name(node), source, node)

        logger.debug("Unsupported type '%s' in %s", node.type, source.filepath)
        return TypeDescriptor(kind=TypeKind.UNKNOWN, name=node.type, node=node)

    def _union_variants(self, node: Node) -> list[Node]:
        variants = []
        for child in node.named_children:
            if child.type == "union_type":
                variants.extend(self._union_variants(child))
            else:
                variants.append(child)
        return variants

    @staticmethod
    def _reference_name(node: Node) -> str:
        # "orm.User" is looked up as "User"
        if node.type == "nested_type_identifier":
            return ts.node_text(node.named_children[-1])
        return ts.node_text(node)

    def _reference(self, name: str, source: ImportedSource, node: Node, arguments: list[TypeDescriptor] | None = None) -> TypeDescriptor:
        import_file = source.imports.get(name)
        return TypeDescriptor(
            kind=TypeKind.REFERENCE,
            name=name,
            type_arguments=arguments or [],
            import_file=import_file,
            relative_path=os.path.relpath(import_file, self.cwd) if import_file else None,
            node=node,
        )
