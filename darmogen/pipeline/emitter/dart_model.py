"""
Dart model emitter.

Phase 2 of the pipeline: renders one Dart model class per entity, with its
fields, constructor, toJson serializer and fromJson factory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from ... import __version__
from ...utils import Formatter, camel, make_formatter
from ..config import GeneratorConfig
from ..resolver.ir_nodes import Field, TypeDescriptor, TypeKind
from .dart_entity import DartEntity
from .imports import ImportAssembler
from .type_mapper import DartTypeMapper

TEMPLATE_LANG = "dart"

FILE_EXTENSION = "dart"

DEFAULT_NAME_FORMAT = "pascal"


def _is_date(descriptor: TypeDescriptor | None) -> bool:
    return descriptor is not None and descriptor.name in DartTypeMapper.DATE_TYPES


class DartModelEmitter:
    """Generates the source of Dart models.

    The emitter needs the complete entity set: any field may reference any
    other entity.
    """

    def __init__(self, entities: list[DartEntity], config: GeneratorConfig, name_formatter: Formatter | None = None):
        """
        Initialize the emitter.

        Args:
            entities: Every entity of the run, already decorated with target files
            config: Generator configuration
            name_formatter: Class name formatter, built from the configuration when None

        Raises:
            ConfigurationError: If the name formatter cannot be built
        """
        self.entities = entities
        self.config = config
        self.name_formatter = name_formatter or make_formatter(config.formatters.name, default=DEFAULT_NAME_FORMAT)
        self.mapper = DartTypeMapper(entities, self.name_formatter)
        self.imports = ImportAssembler(config, self.mapper)
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            keep_trailing_newline=True,
            lstrip_blocks=True,
            trim_blocks=True,
        )
        self.prefix_template = self.jinja_env.get_template(f"prefix.{FILE_EXTENSION}.jinja2")
        self.class_template = self.jinja_env.get_template(f"class.{FILE_EXTENSION}.jinja2")

    def emit(self, entity: DartEntity) -> str:
        """
        Generate the Dart source of an entity.

        The class body is rendered first: the lazy imports it discovers are
        needed by the header.
        """
        body = self.class_template.render(self._prepare_class_context(entity))

        prefix = self.prefix_template.render(
            generation_comment=self._generation_comment(),
            headers=self.imports.headers(entity),
        )
        if not prefix:
            return body
        return prefix + "\n" + body

    def _generation_comment(self) -> str:
        if not self.config.add_generation_comment:
            return ""
        return f"Generated by darmogen {__version__}. Do not edit by hand."

    def _prepare_class_context(self, entity: DartEntity) -> dict[str, Any]:
        fields = [self._prepare_field_context(entity, field) for field in entity.model.fields]
        return {
            "CLASS_NAME": self.name_formatter(entity.name),
            "EXTENDS": self.config.base_class,
            "ID_FIELD": self.config.id_field,
            "fields": fields,
            "constructor_fields": [field for field in fields if field["name"] != self.config.id_field],
        }

    def _prepare_field_context(self, entity: DartEntity, field: Field) -> dict[str, Any]:
        return {
            "name": field.name,
            "type": self.mapper.map_type(entity, field.type),
            "to_json": self.to_json(entity, field),
            "from_json": self.from_json(entity, field),
        }

    def to_json(self, entity: DartEntity, field: Field) -> str:
        """Expression serializing a field in toJson."""
        name = field.name
        descriptor = field.type

        if descriptor.name in DartTypeMapper.DATE_TYPES:
            return f"{name}?.toIso8601String()"

        if descriptor.kind == TypeKind.ARRAY:
            relation = self.mapper.relation(entity, descriptor.element)
            if relation is not None:
                item = camel(relation.name)
                return f"{name}?.map(({item}) => {item}.toJson())?.toList()"
            if _is_date(descriptor.element):
                return f"{name}?.map((date) => date?.toIso8601String())?.toList()"
            return name

        if self.mapper.relation(entity, descriptor) is not None:
            return f"{name}?.toJson()"

        return name

    def from_json(self, entity: DartEntity, field: Field) -> str:
        """Expression rebuilding a field in fromJson."""
        exp = f"json['{field.name}']"
        descriptor = field.type

        if descriptor.name in DartTypeMapper.DATE_TYPES:
            return f"DateTime.tryParse({exp} ?? '')"

        if descriptor.kind == TypeKind.ARRAY:
            relation = self.mapper.relation(entity, descriptor.element)
            if relation is not None:
                return f"({exp} as List<dynamic>)?.map((data) => {self.mapper.class_name(relation)}.fromJson(data))?.toList()"
            if _is_date(descriptor.element):
                return f"({exp} as List<dynamic>)?.map((data) => DateTime.tryParse(data ?? ''))?.toList()"

            element = self.mapper.map_type(entity, descriptor.element) if descriptor.element is not None else DartTypeMapper.ANY_TYPE
            return f"({exp} as List<dynamic>)?.cast<{element}>()"

        relation = self.mapper.relation(entity, descriptor)
        if relation is not None:
            return f"{self.mapper.class_name(relation)}.fromJson({exp})"

        return exp
