"""
Entity parser.

Phase 1 of the pipeline: discover entity files under the source root,
resolve their classes and build one SourceEntity per entity.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from ..config import ParserConfig
from ..errors import DarmogenError, MissingSourceFileError, SourceResolutionError
from ..progress import NullProgress, ProgressListener
from .aliases import AliasTable
from .classifier import EntityClassifier
from .inheritance import InheritanceResolver
from .ir_nodes import EntityModel, ImportedSource, SourceEntity
from .module_resolver import ModuleResolver
from .properties import PropertyExtractor
from .source_cache import SourceCache

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Entities resolved from the source tree, and the files that failed."""

    entities: list[SourceEntity] = field(default_factory=list)
    errors: list[DarmogenError] = field(default_factory=list)


class EntityParser:
    """Resolves the entities of a TypeScript source tree."""

    def __init__(self, config: ParserConfig, progress: ProgressListener | None = None):
        """
        Initialize the parser.

        Args:
            config: Parser configuration, with absolute cwd and root
            progress: Optional progress listener

        Raises:
            ConfigurationError: If the entity identifier is not usable
        """
        self.config = config
        self.progress = progress or NullProgress()

        self.classifier = EntityClassifier(config.identifier)
        self.aliases = AliasTable(config.aliases, config)
        self.resolver = ModuleResolver(self.aliases, config.cwd, config.root, config.module_suffix)
        self.cache = SourceCache(self.resolver, self.classifier)
        self.inheritance = InheritanceResolver(self.cache)
        self.properties = PropertyExtractor(
            self.cache,
            self.inheritance,
            config.cwd,
            exclude_decorator=config.exclude_decorator,
            require_field_decorator=config.require_field_decorator,
        )

    def discover(self) -> list[str]:
        """Return the candidate files, relative to cwd, in sorted order."""
        root = Path(self.config.cwd)
        files = [str(path.relative_to(root)) for path in root.rglob(f"*{self.config.ext}") if path.is_file()]
        return sorted(files)

    def parse(self, files: list[str] | None = None) -> ParseResult:
        """
        Resolve every entity of the given files.

        Files are resolved in parallel. A file that cannot be read or resolved
        is reported in the result errors and does not stop the others. Entities
        keep the order of the files.

        Args:
            files: Files relative to cwd, discovered when None

        Returns:
            ParseResult with entities and per-file errors
        """
        if files is None:
            files = self.discover()

        self.progress.on_start(len(files), files)

        per_file: dict[str, list[SourceEntity]] = {}
        result = ParseResult()

        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            futures = {executor.submit(self.parse_file, filepath): filepath for filepath in files}
            for loaded, future in enumerate(as_completed(futures), start=1):
                filepath = futures[future]
                try:
                    per_file[filepath] = future.result()
                except MissingSourceFileError as e:
                    logger.warning("%s", e)
                    result.errors.append(e)
                    per_file[filepath] = []
                except Exception as e:
                    error = SourceResolutionError(os.path.join(self.config.cwd, filepath), str(e))
                    logger.warning("%s", error)
                    result.errors.append(error)
                    per_file[filepath] = []
                self.progress.on_progress(loaded, ", ".join(entity.name for entity in per_file[filepath]))

        for filepath in files:
            result.entities.extend(per_file[filepath])
        result.errors.sort(key=lambda e: e.path)
        return result

    def parse_file(self, filepath: str) -> list[SourceEntity]:
        """
        Resolve the entities declared in one file.

        Raises:
            MissingSourceFileError: If the file cannot be read
        """
        fullpath = os.path.join(self.config.cwd, filepath)
        source = self.cache.import_source(fullpath)
        if source is None:
            raise MissingSourceFileError(fullpath)

        return [SourceEntity(path=filepath, name=model.name, model=model) for model in self.extract_models(source)]

    def extract_models(self, source: ImportedSource) -> list[EntityModel]:
        return [EntityModel(name=entity.name, fields=self.properties.extract_fields(entity)) for entity in source.entities]
