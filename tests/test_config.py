"""Tests for configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from injection_gen.codegen.core.config import (
    DEFAULT_INJECTION_PACKAGE,
    ConfigError,
    ConfigManager,
    GeneratorConfig,
)


def test_defaults() -> None:
    config = ConfigManager().get_config()

    assert config.plural_exceptions == {"Endpoints": "Endpoints"}
    assert config.naming_exceptions == {}
    assert config.injection_package == DEFAULT_INJECTION_PACKAGE
    assert config.warn_unknown_tags


def test_defaults_are_not_shared_between_configs() -> None:
    manager = ConfigManager()
    first = manager.get_config()
    first.plural_exceptions["Foo"] = "Foos"

    assert "Foo" not in manager.get_config().plural_exceptions


def test_file_then_overrides(tmp_path: Path) -> None:
    path = tmp_path / "gen.json"
    path.write_text(
        json.dumps(
            {
                "naming_exceptions": {"k8s.io/api/events/v1.EventEvent": "EventResource"},
                "injection_package": "example.com/injection",
                "header": "generated",
            }
        ),
        encoding="utf-8",
    )

    config = ConfigManager().get_config(
        custom_config={"injection_package": "example.com/other"}, config_file=path
    )

    assert config.naming_exceptions == {"k8s.io/api/events/v1.EventEvent": "EventResource"}
    assert config.injection_package == "example.com/other"
    assert config.custom == {"header": "generated"}


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        ConfigManager().get_config(config_file=tmp_path / "absent.json")


def test_non_json_suffix(tmp_path: Path) -> None:
    path = tmp_path / "gen.yaml"
    path.write_text("{}", encoding="utf-8")

    with pytest.raises(ConfigError):
        ConfigManager().get_config(config_file=path)


def test_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "gen.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        ConfigManager().get_config(config_file=path)


def test_table_must_be_mapping() -> None:
    with pytest.raises(ConfigError):
        ConfigManager().get_config(custom_config={"naming_exceptions": ["x"]})


def test_save_and_reload(tmp_path: Path) -> None:
    manager = ConfigManager()
    config = GeneratorConfig(naming_exceptions={"a.io/v1.FooFoo": "Bars"})
    path = tmp_path / "saved.json"

    manager.save_config(config, path)
    reloaded = manager.get_config(config_file=path)

    assert reloaded.naming_exceptions == {"a.io/v1.FooFoo": "Bars"}


def test_validate_config() -> None:
    config = GeneratorConfig(
        naming_exceptions={"Widget": "Widgets", "a.io/v1.FooFoo": "not valid"},
        controller_package="",
    )

    warnings = ConfigManager().validate_config(config)

    assert any("'Widget'" in w and "never match" in w for w in warnings)
    assert any("not valid" in w for w in warnings)
    assert "controller_package must not be empty" in warnings
