import os
from pathlib import Path

import pytest
from jlview.config import (
    ConfigError,
    apply_env,
    load_config,
    locate_yaml,
    parse_config,
    read_env,
)
from jlview.context import Context
from jlview.raw_message import RawMessage
from jlview.registry import DEFAULT_FIELD_STRINGERS


def test_defaults() -> None:
    config = parse_config(None)

    assert config.fields.as_dict() == DEFAULT_FIELD_STRINGERS
    assert config.context == Context(color=True, truncate=True, max_width=0)


def test_fields_are_merged() -> None:
    config = parse_config({"fields": {"severity": "level", "level": "default"}})

    assert config.fields.as_dict()["severity"] == "level"
    assert config.fields.as_dict()["error"] == "error"
    ctx = config.context
    assert config.fields.render(ctx, "severity", RawMessage(b'"CRITICAL"')) == "CRIT"
    assert config.fields.render(ctx, "level", RawMessage(b'"CRITICAL"')) == "CRITICAL"


@pytest.mark.parametrize(
    "definition",
    [
        {"fields": {"level": "nope"}},
        {"fields": {"level": 1}},
        {"options": {"colour": False}},
        {"options": {"max_width": "wide"}},
        {"unknown": True},
        ["not", "a", "mapping"],
    ],
)
def test_invalid_config(definition: object) -> None:
    with pytest.raises(ConfigError):
        parse_config(definition)


def test_apply_env() -> None:
    options = {"color": True, "truncate": True, "max_width": 0}

    assert apply_env(options, {}) == options
    assert apply_env(options, {"NO_COLOR": "1"})["color"] is False
    assert apply_env(options, {"NO_COLOR": ""})["color"] is True
    assert apply_env(options, {"JLVIEW_COLOR": "off"})["color"] is False
    assert apply_env(options, {"JLVIEW_TRUNCATE": "no"})["truncate"] is False
    assert apply_env(options, {"JLVIEW_MAX_WIDTH": "120"})["max_width"] == 120
    assert options["color"] is True


@pytest.mark.parametrize(
    "env",
    [
        {"JLVIEW_COLOR": "maybe"},
        {"JLVIEW_MAX_WIDTH": "wide"},
    ],
)
def test_apply_env_invalid(env: dict[str, str]) -> None:
    with pytest.raises(ConfigError):
        apply_env({}, env)


def test_env_overrides_file(tmp_path: Path) -> None:
    config_file = tmp_path / "jlview.yaml"
    config_file.write_text("options:\n  color: true\n  max_width: 10\n")

    config = load_config(str(config_file), env={"NO_COLOR": "yes"})

    assert config.context == Context(color=False, truncate=True, max_width=10)


def test_load_config(tmp_path: Path) -> None:
    config_file = tmp_path / "custom.yml"
    config_file.write_text(
        """
fields:
  err: error
  where: extra
options:
  truncate: false
"""
    )

    config = load_config(str(config_file), env={})

    assert config.fields.as_dict()["err"] == "error"
    assert config.fields.as_dict()["where"] == "extra"
    assert config.context.truncate is False


def test_load_empty_file(tmp_path: Path) -> None:
    config_file = tmp_path / "jlview.yaml"
    config_file.write_text("")

    config = load_config(str(config_file), env={})

    assert config.fields.as_dict() == DEFAULT_FIELD_STRINGERS


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(str(tmp_path / "nope.yaml"), env={})


def test_load_invalid_yaml(tmp_path: Path) -> None:
    config_file = tmp_path / "jlview.yaml"
    config_file.write_text("fields: [unclosed\n")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(str(config_file), env={})


def test_load_without_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    config = load_config(env={})

    assert config.fields.as_dict() == DEFAULT_FIELD_STRINGERS


def test_locate_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert locate_yaml() is None

    (tmp_path / ".jlview").mkdir()
    (tmp_path / ".jlview" / "jlview.yml").write_text("")
    assert locate_yaml() == ".jlview/jlview.yml"

    (tmp_path / "jlview.yaml").write_text("")
    assert locate_yaml() == "jlview.yaml"


def test_read_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("JLVIEW_TRUNCATE", "yes")
    monkeypatch.delenv("JLVIEW_MAX_WIDTH", raising=False)
    (tmp_path / ".env").write_text("JLVIEW_MAX_WIDTH=42\nJLVIEW_TRUNCATE=no\n")

    env = read_env()

    assert env["JLVIEW_MAX_WIDTH"] == "42"
    assert env["JLVIEW_TRUNCATE"] == "yes"
    assert env["PATH"] == os.environ["PATH"]
