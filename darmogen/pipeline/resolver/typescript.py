"""
tree-sitter helpers for TypeScript sources.

Wraps the node shapes of the tree-sitter-typescript grammar that the
resolver needs: top-level classes, decorators, heritage clauses, imports
and class properties.
"""

from __future__ import annotations

from collections.abc import Iterator

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser, Tree

TS_LANGUAGE = Language(ts_typescript.language_typescript())

CLASS_DECLARATIONS = ("class_declaration", "abstract_class_declaration")


def parse_typescript(code: str) -> Tree:
    """Parse TypeScript code.

    Parsers are not shared between threads, a new one is built per call.
    """
    parser = Parser(TS_LANGUAGE)
    return parser.parse(bytes(code, "utf8"))


def node_text(node: Node | None) -> str:
    if node is None:
        return ""
    return node.text.decode("utf8")


def string_value(node: Node) -> str:
    """Value of a string literal node, without quotes."""
    return node_text(node)[1:-1]


def iter_top_level_classes(root: Node) -> Iterator[tuple[Node, Node | None]]:
    """Yield (class node, enclosing export statement or None)."""
    for child in root.named_children:
        if child.type in CLASS_DECLARATIONS:
            yield child, None
        elif child.type == "export_statement":
            declaration = child.child_by_field_name("declaration")
            if declaration is not None and declaration.type in CLASS_DECLARATIONS:
                yield declaration, child


def decorator_name(decorator: Node) -> str:
    """Identifier of a decorator.

    "@Entity()" and "@Entity" give "Entity", "@orm.Entity()" gives "Entity".
    """
    expression = decorator.named_children[0] if decorator.named_children else None
    if expression is not None and expression.type == "call_expression":
        expression = expression.child_by_field_name("function")
    if expression is not None and expression.type == "member_expression":
        expression = expression.child_by_field_name("property")
    return node_text(expression)


def decorators_of(node: Node) -> list[Node]:
    """Decorators attached to a declaration.

    Depending on the construct, the grammar puts decorators either inside the
    declaration or right before it among its siblings.
    """
    preceding = []
    sibling = node.prev_named_sibling
    while sibling is not None and sibling.type == "decorator":
        preceding.append(sibling)
        sibling = sibling.prev_named_sibling
    preceding.reverse()
    return preceding + [child for child in node.children if child.type == "decorator"]


def class_decorator_names(class_node: Node, export_node: Node | None = None) -> list[str]:
    decorators = decorators_of(class_node)
    if export_node is not None:
        seen = {decorator.start_byte for decorator in decorators}
        decorators = [d for d in decorators_of(export_node) if d.start_byte not in seen] + decorators
    return [decorator_name(decorator) for decorator in decorators]


def _type_name(node: Node) -> str:
    """Name of an expression or type used in a heritage clause."""
    if node.type == "generic_type":
        node = node.child_by_field_name("name") or node
    if node.type in ("member_expression", "nested_type_identifier"):
        return node_text(node.named_children[-1])
    return node_text(node)


def heritage_names(class_node: Node) -> tuple[list[str], list[str]]:
    """Return (extends names, implements names) of a class."""
    extends: list[str] = []
    implements: list[str] = []
    for heritage in class_node.children:
        if heritage.type != "class_heritage":
            continue
        for clause in heritage.named_children:
            if clause.type == "extends_clause":
                values = clause.children_by_field_name("value")
                extends.extend(_type_name(value) for value in values)
            elif clause.type == "implements_clause":
                implements.extend(_type_name(t) for t in clause.named_children)
    return extends, implements


def class_name(class_node: Node) -> str:
    return node_text(class_node.child_by_field_name("name"))


def class_fields(class_node: Node) -> Iterator[Node]:
    """Yield the property declarations of a class body."""
    body = class_node.child_by_field_name("body")
    if body is None:
        return
    for member in body.named_children:
        if member.type == "public_field_definition":
            yield member


def iter_imports(root: Node) -> Iterator[tuple[str, list[str]]]:
    """Yield (module specifier, local names) for each import declaration."""
    for child in root.named_children:
        if child.type != "import_statement":
            continue
        source = child.child_by_field_name("source")
        if source is None:
            continue

        names: list[str] = []
        for clause in child.named_children:
            if clause.type == "import_clause":
                names.extend(_import_clause_names(clause))
        yield string_value(source), names


def _import_clause_names(clause: Node) -> list[str]:
    names = []
    for part in clause.named_children:
        if part.type == "identifier":
            # Default import
            names.append(node_text(part))
        elif part.type == "namespace_import":
            names.extend(node_text(n) for n in part.named_children if n.type == "identifier")
        elif part.type == "named_imports":
            for specifier in part.named_children:
                if specifier.type != "import_specifier":
                    continue
                local = specifier.child_by_field_name("alias") or specifier.child_by_field_name("name")
                names.append(node_text(local))
    return names
