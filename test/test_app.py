import logging
from pathlib import Path

import pytest
from click.testing import CliRunner
from jlview.__main__ import PROJECT_VERSION
from jlview.app import jlview_cli


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    for name in ("NO_COLOR", "JLVIEW_COLOR", "JLVIEW_TRUNCATE", "JLVIEW_MAX_WIDTH"):
        monkeypatch.delenv(name, raising=False)

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def invoke(*args: str, input: str | None = None):
    return CliRunner().invoke(jlview_cli, list(args), input=input)


def test_render_with_stringer() -> None:
    result = invoke("render", "-s", "level", '"WARNING"')

    assert result.exit_code == 0
    assert result.output == "WARN\n"


def test_render_with_field() -> None:
    result = invoke("render", "--field", "extra", '{"class": "Foo", "line": 42}')

    assert result.exit_code == 0
    assert result.output == "Foo:42\n"


def test_render_unmapped_field() -> None:
    result = invoke("render", "--field", "msg", '{"a": 1}')

    assert result.exit_code == 0
    assert result.output == "{'a': 1}\n"


def test_render_from_stdin() -> None:
    result = invoke("render", "-s", "trace", input='["x", "y"]\n')

    assert result.exit_code == 0
    assert result.output == "\nx\ny\n"


def test_render_text() -> None:
    result = invoke("render", "--text", "-s", "level", '"WARNING"')

    assert result.exit_code == 0
    assert result.output == "\n"

    result = invoke("render", "--text", "plain text")
    assert result.output == "plain text\n"


def test_render_unknown_stringer() -> None:
    result = invoke("render", "-s", "nope", "1")

    assert result.exit_code == 1
    assert "Stringer 'nope' not found." in result.output


def test_render_stringer_and_field() -> None:
    result = invoke("render", "-s", "level", "--field", "level", "1")

    assert result.exit_code == 1
    assert "either --stringer or --field" in result.output


def test_list(tmp_path: Path) -> None:
    (tmp_path / "jlview.yaml").write_text("fields:\n  severity: level\n")

    result = invoke("list")

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "STRINGERS"
    assert "  exception" in lines
    assert "severity   level" in lines
    assert "extra      extra" in lines


def test_config_file_option(tmp_path: Path) -> None:
    config_file = tmp_path / "custom.yaml"
    config_file.write_text("fields:\n  severity: level\n")

    result = invoke("-f", str(config_file), "render", "--field", "severity", '"CRITICAL"')

    assert result.exit_code == 0
    assert result.output == "CRIT\n"


def test_invalid_config(tmp_path: Path) -> None:
    (tmp_path / "jlview.yaml").write_text("fields:\n  level: nope\n")

    result = invoke("render", "-s", "level", '"INFO"')

    assert result.exit_code == 1
    assert "Unknown stringer 'nope'" in result.output


def test_version() -> None:
    result = invoke("--version")

    assert result.exit_code == 0
    assert PROJECT_VERSION in result.output
