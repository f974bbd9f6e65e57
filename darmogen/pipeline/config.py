"""
Configuration for the darmogen pipeline.

The parser section drives entity resolution (source root, aliases, entity
identification). The generator section drives Dart emission (output
directory, imports, headers, name formatters).
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigurationError

DEFAULT_CONFIG_FILENAME = "darmogen.json"


@dataclass
class EntityIdentifier:
    """Rule used to decide which classes are entities.

    Exactly one of the attributes must be set.
    """

    # Decorator name, e.g. "Entity" for @Entity()
    decorator: str | None = None

    # Base class name, e.g. "BaseEntity"
    extends: str | None = None

    # Implemented interface name
    implements: str | None = None

    def active_rules(self) -> list[tuple[str, str]]:
        return [(k, v) for k, v in (("decorator", self.decorator), ("extends", self.extends), ("implements", self.implements)) if v]


@dataclass
class ParserConfig:
    """Configuration for the TypeScript entity parser."""

    # Import prefix -> path template, e.g. {"src": "{cwd}"}
    aliases: dict[str, str] = field(default_factory=dict)

    # Directory scanned for entity files
    cwd: str = "."

    # Package root, node_modules lives beneath it
    root: str = ".."

    # Suffix identifying candidate entity files
    ext: str = ".entity.ts"

    # Suffix appended to import specifiers
    module_suffix: str = ".ts"

    identifier: EntityIdentifier = field(default_factory=EntityIdentifier)

    # Properties carrying this decorator are not exposed
    exclude_decorator: str = "Exclude"

    # Skip properties without any decorator (TypeORM columns are always decorated)
    require_field_decorator: bool = True

    # Worker threads for file resolution (None = executor default)
    workers: int | None = None

    @staticmethod
    def from_dict(d: dict) -> ParserConfig:
        """Create a parser config from a dictionary."""
        config = ParserConfig()
        for k, v in d.items():
            if k == "identifier" and isinstance(v, dict):
                config.identifier = EntityIdentifier(**v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "aliases": dict(self.aliases),
            "cwd": self.cwd,
            "root": self.root,
            "ext": self.ext,
            "module_suffix": self.module_suffix,
            "identifier": {
                "decorator": self.identifier.decorator,
                "extends": self.identifier.extends,
                "implements": self.identifier.implements,
            },
            "exclude_decorator": self.exclude_decorator,
            "require_field_decorator": self.require_field_decorator,
            "workers": self.workers,
        }


@dataclass
class FormatterConfig:
    """Name formatters for generated classes and files.

    Each value is a callable, a casing name ("pascal", "camel", "kebab",
    "snake"), a template such as "{kebab}.model.dart" or a "module:function"
    import path. None selects the default.
    """

    name: str | Callable[[str], str] | None = None
    filename: str | Callable[[str], str] | None = None


@dataclass
class GeneratorConfig:
    """Configuration for the Dart model generator."""

    # Output directory
    out: str = "./models"

    # Dart files imported by every model, relative to out
    imports: list[str] = field(default_factory=list)

    # Raw text blocks prepended to every model
    headers: list[str] = field(default_factory=list)

    # Base class of every generated model, owns the identity field
    base_class: str = "Model"

    # Identity field handed to the base class constructor
    id_field: str = "id"

    # Add "generated code" comment at top of file
    add_generation_comment: bool = True

    formatters: FormatterConfig = field(default_factory=FormatterConfig)

    # Worker threads for emission (None = executor default)
    workers: int | None = None

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a generator config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "formatters" and isinstance(v, dict):
                config.formatters = FormatterConfig(**v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary. Callable formatters are kept as is."""
        return {
            "out": self.out,
            "imports": list(self.imports),
            "headers": list(self.headers),
            "base_class": self.base_class,
            "id_field": self.id_field,
            "add_generation_comment": self.add_generation_comment,
            "formatters": {
                "name": self.formatters.name,
                "filename": self.formatters.filename,
            },
            "workers": self.workers,
        }


@dataclass
class DarmogenConfig:
    """Complete configuration of a run."""

    parser: ParserConfig = field(default_factory=ParserConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)

    @staticmethod
    def from_dict(d: dict) -> DarmogenConfig:
        """Create a config from a dictionary."""
        return DarmogenConfig(
            parser=ParserConfig.from_dict(d.get("parser", {})),
            generator=GeneratorConfig.from_dict(d.get("generator", {})),
        )

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "parser": self.parser.to_dict(),
            "generator": self.generator.to_dict(),
        }

    def resolve_paths(self, base_dir: str | Path) -> DarmogenConfig:
        """Make cwd, root and out absolute.

        cwd and out are relative to base_dir, root is relative to cwd.
        """
        base_dir = os.path.abspath(base_dir)
        self.parser.cwd = os.path.normpath(os.path.join(base_dir, self.parser.cwd))
        self.parser.root = os.path.normpath(os.path.join(self.parser.cwd, self.parser.root))
        self.generator.out = os.path.normpath(os.path.join(base_dir, self.generator.out))
        return self


def load_config(path: str | Path) -> DarmogenConfig:
    """Load a JSON config file and resolve its paths against its directory.

    Raises:
        ConfigurationError: If the file is missing or is not valid JSON
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f'Could not find "{path}" options file.')

    try:
        with open(path, encoding="utf-8") as f:
            data: dict[str, Any] = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid options file {path}: {e}") from e

    return DarmogenConfig.from_dict(data).resolve_paths(path.parent)
