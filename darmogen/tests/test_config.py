import json
import os

import pytest

from darmogen.pipeline import ConfigurationError, DarmogenConfig, ParserConfig, load_config


def test_from_dict_builds_nested_config():
    config = DarmogenConfig.from_dict(
        {
            "parser": {
                "aliases": {"src": "{cwd}"},
                "identifier": {"decorator": "Entity"},
                "ext": ".model.ts",
                "unknown_key": True,
            },
            "generator": {
                "out": "./lib/models",
                "imports": ["./rest.dart"],
                "formatters": {"filename": "{kebab}.model.dart"},
            },
        }
    )

    assert config.parser.aliases == {"src": "{cwd}"}
    assert config.parser.identifier.decorator == "Entity"
    assert config.parser.ext == ".model.ts"
    assert not hasattr(config.parser, "unknown_key")
    assert config.generator.imports == ["./rest.dart"]
    assert config.generator.formatters.filename == "{kebab}.model.dart"
    assert config.generator.formatters.name is None


def test_to_dict_round_trips():
    config = DarmogenConfig.from_dict({"parser": {"identifier": {"extends": "BaseEntity"}}})
    assert DarmogenConfig.from_dict(config.to_dict()) == config


def test_defaults():
    config = ParserConfig()
    assert config.ext == ".entity.ts"
    assert config.exclude_decorator == "Exclude"
    assert config.require_field_decorator is True
    assert config.identifier.active_rules() == []


def test_load_config_resolves_paths(tmp_path):
    path = tmp_path / "darmogen.json"
    path.write_text(
        json.dumps(
            {
                "parser": {"cwd": "backend/src", "root": "../", "identifier": {"decorator": "Entity"}},
                "generator": {"out": "./models"},
            }
        )
    )

    config = load_config(path)

    assert config.parser.cwd == os.path.join(str(tmp_path), "backend", "src")
    assert config.parser.root == os.path.join(str(tmp_path), "backend")
    assert config.generator.out == os.path.join(str(tmp_path), "models")


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Could not find"):
        load_config(tmp_path / "darmogen.json")


def test_load_config_invalid_json(tmp_path):
    path = tmp_path / "darmogen.json"
    path.write_text("{not json")
    with pytest.raises(ConfigurationError, match="Invalid options file"):
        load_config(path)
