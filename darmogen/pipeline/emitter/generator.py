"""
Dart model generator.

Decorates resolved entities with their output files, emits every model and
writes it to disk.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from ...utils import make_formatter
from ..config import GeneratorConfig
from ..errors import EmissionError
from ..progress import NullProgress, ProgressListener
from ..resolver.ir_nodes import SourceEntity
from ..writer import AtomicWriter
from .dart_entity import DartEntity
from .dart_model import DEFAULT_NAME_FORMAT, DartModelEmitter

logger = logging.getLogger(__name__)

DEFAULT_FILENAME_FORMAT = "{kebab}.dart"


@dataclass
class GenerationResult:
    """Written models, and the entities that could not be generated."""

    written: list[DartEntity] = field(default_factory=list)
    errors: list[EmissionError] = field(default_factory=list)


class DartModelGenerator:
    """Generates and writes the Dart models of a set of entities."""

    def __init__(
        self,
        config: GeneratorConfig,
        progress: ProgressListener | None = None,
        writer: AtomicWriter | None = None,
    ):
        """
        Initialize the generator.

        Args:
            config: Generator configuration, with an absolute out directory
            progress: Optional progress listener
            writer: File writer, an AtomicWriter by default

        Raises:
            ConfigurationError: If a formatter cannot be built
        """
        self.config = config
        self.progress = progress or NullProgress()
        self.writer = writer or AtomicWriter()
        self.filename_formatter = make_formatter(config.formatters.filename, default=DEFAULT_FILENAME_FORMAT)
        self.name_formatter = make_formatter(config.formatters.name, default=DEFAULT_NAME_FORMAT)

    def target_file(self, entity: SourceEntity) -> str:
        """Output file of an entity, mirroring its source directory."""
        filename = self.filename_formatter(entity.name)
        return os.path.normpath(os.path.join(self.config.out, os.path.dirname(entity.path), filename))

    def decorate(self, entities: list[SourceEntity]) -> list[DartEntity]:
        return [
            DartEntity(
                path=entity.path,
                name=entity.name,
                model=entity.model,
                target_file=self.target_file(entity),
            )
            for entity in entities
        ]

    def generate(self, entities: list[SourceEntity]) -> GenerationResult:
        """
        Generate and write one model per entity.

        Every entity is decorated before any is emitted. Entities are emitted
        in parallel; a failure is reported in the result errors and does not
        stop the others.

        Args:
            entities: Complete list of resolved entities

        Returns:
            GenerationResult with written entities and per-entity errors
        """
        dart_entities = self.decorate(entities)
        emitter = DartModelEmitter(dart_entities, self.config, name_formatter=self.name_formatter)

        self.progress.on_start(len(dart_entities), [entity.name for entity in dart_entities])

        result = GenerationResult()
        written: set[int] = set()

        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            futures = {executor.submit(self.write_entity, emitter, entity): index for index, entity in enumerate(dart_entities)}
            for loaded, future in enumerate(as_completed(futures), start=1):
                index = futures[future]
                entity = dart_entities[index]
                try:
                    future.result()
                    written.add(index)
                except EmissionError as e:
                    logger.warning("%s", e)
                    result.errors.append(e)
                self.progress.on_progress(loaded, entity.name)

        result.written = [entity for index, entity in enumerate(dart_entities) if index in written]
        result.errors.sort(key=lambda e: e.target_file)
        return result

    def write_entity(self, emitter: DartModelEmitter, entity: DartEntity) -> DartEntity:
        """
        Emit one entity and write it.

        Raises:
            EmissionError: If the model cannot be rendered, is invalid or cannot be written
        """
        try:
            content = emitter.emit(entity)
            self.writer.write(entity.target_file, content)
        except Exception as e:
            raise EmissionError(entity.name, entity.target_file, str(e)) from e
        logger.debug("Wrote %s", entity.target_file)
        return entity
