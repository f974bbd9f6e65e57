from __future__ import annotations

from pathlib import Path

import pytest

from darmogen.pipeline import EntityIdentifier, EntityParser, FormatterConfig, GeneratorConfig, ParserConfig


def write_files(base: Path, files: dict[str, str]) -> None:
    """Write a {relative path: content} mapping under base."""
    for relative, content in files.items():
        path = base / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def src_dir(tmp_path: Path) -> Path:
    path = tmp_path / "src"
    path.mkdir()
    return path


@pytest.fixture
def parser_config(tmp_path: Path, src_dir: Path) -> ParserConfig:
    return ParserConfig(
        aliases={"src": "{cwd}"},
        cwd=str(src_dir),
        root=str(tmp_path),
        identifier=EntityIdentifier(decorator="Entity"),
    )


@pytest.fixture
def generator_config(tmp_path: Path) -> GeneratorConfig:
    return GeneratorConfig(
        out=str(tmp_path / "models"),
        add_generation_comment=False,
        formatters=FormatterConfig(filename="{kebab}.model.dart"),
    )


@pytest.fixture
def make_parser(parser_config: ParserConfig, src_dir: Path):
    """Write TypeScript files under src and return an EntityParser."""

    def factory(files: dict[str, str], **overrides) -> EntityParser:
        write_files(src_dir, files)
        for key, value in overrides.items():
            setattr(parser_config, key, value)
        return EntityParser(parser_config)

    return factory


@pytest.fixture
def write_src(src_dir: Path):
    """Write TypeScript files under src."""

    def writer(files: dict[str, str]) -> Path:
        write_files(src_dir, files)
        return src_dir

    return writer


@pytest.fixture
def write_tree(tmp_path: Path):
    """Write files under tmp_path."""

    def writer(files: dict[str, str]) -> Path:
        write_files(tmp_path, files)
        return tmp_path

    return writer
