import contextlib
import os
from typing import Any, Mapping

import yaml
from dotenv import dotenv_values

from jlview.context import Context
from jlview.logging import debug, info
from jlview.registry import DEFAULT_FIELD_STRINGERS, FieldStringers
from jlview.schemas import (
    CONFIG_SCHEMA,
    InvalidTypeError,
    RequiredAttributeError,
    UnexpectedAttributesError,
)

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off", "")


class ConfigError(Exception):
    def __init__(self, message: str, path: str | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class Config:
    def __init__(self, fields: FieldStringers, context: Context) -> None:
        self.fields = fields
        self.context = context


def locate_yaml(name: str = "") -> str | None:
    """Locates the config file."""

    if not name:
        name = "jlview"

    paths = (name, f".jlview/{name}")
    exts = (".yaml", ".yml")

    for path in paths:
        for ext in exts:
            if os.path.exists(f"{path}{ext}"):
                return f"{path}{ext}"

    return None


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean value for {name}: {value!r}")


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigError(f"Invalid integer value for {name}: {value!r}") from None


def read_env(env_file: str = ".env") -> dict[str, str]:
    """The process environment layered over the values in `env_file`."""
    values = {k: v for k, v in dotenv_values(env_file).items() if v is not None}
    return {**values, **os.environ}


def apply_env(options: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    """Overrides display options with environment variables."""

    result = dict(options)
    if "JLVIEW_COLOR" in env:
        result["color"] = _parse_bool("JLVIEW_COLOR", env["JLVIEW_COLOR"])
    if env.get("NO_COLOR"):
        result["color"] = False
    if "JLVIEW_TRUNCATE" in env:
        result["truncate"] = _parse_bool("JLVIEW_TRUNCATE", env["JLVIEW_TRUNCATE"])
    if "JLVIEW_MAX_WIDTH" in env:
        result["max_width"] = _parse_int("JLVIEW_MAX_WIDTH", env["JLVIEW_MAX_WIDTH"])
    return result


def parse_config(
    definition: Any, env: Mapping[str, str] | None = None, path: str | None = None
) -> Config:
    if definition is None:
        definition = {}
    try:
        CONFIG_SCHEMA.validate(definition)
    except (InvalidTypeError, RequiredAttributeError, UnexpectedAttributesError) as ex:
        raise ConfigError(str(ex), path) from ex

    try:
        fields = FieldStringers({**DEFAULT_FIELD_STRINGERS, **definition["fields"]})
    except ValueError as ex:
        raise ConfigError(str(ex), path) from ex

    options = apply_env(definition["options"], env or {})
    debug(f"Display options: {options}")
    return Config(fields, Context.from_options(options))


def load_config(
    file: str | None = None, env: Mapping[str, str] | None = None
) -> Config:
    """Loads the config file, or the defaults if there's none."""

    yaml_path = file or locate_yaml()
    if env is None:
        env = read_env()

    if not yaml_path:
        debug("No config file found, using defaults")
        return parse_config({}, env)

    yaml_contents = ""
    with contextlib.suppress(FileNotFoundError):
        with open(yaml_path, "r") as yaml_file:
            yaml_contents = yaml_file.read()

    if not yaml_contents and not os.path.exists(yaml_path):
        raise ConfigError("Config file not found", yaml_path)

    info(f"Loading config from {yaml_path}")
    try:
        definition = yaml.safe_load(yaml_contents)
    except yaml.YAMLError as ex:
        raise ConfigError(f"Invalid YAML: {ex}", yaml_path) from ex

    return parse_config(definition, env, yaml_path)
