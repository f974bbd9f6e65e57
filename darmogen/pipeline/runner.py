"""
Two-stage pipeline: resolve entities, then generate their Dart models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .config import DarmogenConfig
from .emitter import DartModelGenerator, GenerationResult
from .progress import ProgressListener
from .resolver import EntityParser, ParseResult


@dataclass
class RunResult:
    parsed: ParseResult = field(default_factory=ParseResult)
    generated: GenerationResult = field(default_factory=GenerationResult)

    @property
    def ok(self) -> bool:
        return not self.parsed.errors and not self.generated.errors


def run_pipeline(
    config: DarmogenConfig,
    parser_progress: ProgressListener | None = None,
    generator_progress: ProgressListener | None = None,
) -> RunResult:
    """
    Run both stages.

    Both stages are built before any file is read, so configuration errors
    abort the run early. Generation only starts once every entity is
    resolved.

    Raises:
        ConfigurationError: If the configuration is not usable
    """
    parser = EntityParser(config.parser, progress=parser_progress)
    generator = DartModelGenerator(config.generator, progress=generator_progress)

    parsed = parser.parse()
    generated = generator.generate(parsed.entities)
    return RunResult(parsed=parsed, generated=generated)
