import json
from typing import Any, Callable, Mapping, NamedTuple, TypeVar

from jlview.logging import debug
from jlview.schemas import (
    ERROR_RECORD_SCHEMA,
    EXCEPTION_RECORD_SCHEMA,
    EXTRA_RECORD_SCHEMA,
    InvalidTypeError,
    RequiredAttributeError,
    TraceLines,
    UnexpectedAttributesError,
)
from jlview.utils import raw_text

TResult = TypeVar("TResult")

# Default for decode_or_default when None is a valid decoded value
UNDECODED: Any = object()


class DecodeError(ValueError):
    """A byte span couldn't be decoded into the requested shape."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def decode_json(data: bytes | bytearray) -> Any:
    """Decodes a JSON byte span.

    Invalid UTF-8 sequences are replaced instead of failing, and the
    non-standard `NaN`/`Infinity` constants are rejected.
    """
    try:
        return json.loads(raw_text(data), parse_constant=_reject_constant)
    except (ValueError, RecursionError) as ex:
        raise DecodeError(f"Invalid JSON: {ex}") from ex


def _validated(schema: Any, value: Any) -> Any:
    try:
        schema.validate(value)
    except (
        InvalidTypeError,
        RequiredAttributeError,
        UnexpectedAttributesError,
    ) as ex:
        raise DecodeError(str(ex)) from ex
    return value


def decode_or_default(
    data: bytes | bytearray,
    decoder: Callable[[bytes | bytearray], TResult],
    default: TResult,
) -> TResult:
    """Best-effort decoding: returns `default` if `decoder` fails."""
    try:
        return decoder(data)
    except DecodeError as ex:
        debug(f"Can't decode {raw_text(data)!r} with {decoder.__qualname__}: {ex}")
        return default


def decode_string(data: bytes | bytearray) -> str:
    """Decodes a bare JSON string. `null` decodes to an empty string."""
    value = decode_json(data)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"Expected a JSON string, got {type(value).__name__}")
    return value


def decode_lines(data: bytes | bytearray) -> list[str]:
    """Decodes a JSON array of strings. `null` decodes to an empty list."""
    value = decode_json(data)
    if value is None:
        return []
    return _validated(TraceLines, value)


class ErrorRecord(NamedTuple):
    error: str
    stack: str

    @staticmethod
    def from_value(value: Any) -> "ErrorRecord | None":
        """Returns the record if `value` looks like an error, None otherwise."""
        if isinstance(value, ErrorRecord):
            value = value._asdict()
        elif isinstance(value, (bytes, bytearray)):
            value = decode_or_default(value, decode_json, UNDECODED)
        if not isinstance(value, Mapping) or not ERROR_RECORD_SCHEMA.is_valid(
            dict(value)
        ):
            return None
        return ErrorRecord(error=value["error"], stack=value["stack"])


class ExceptionRecord(NamedTuple):
    file: str = ""
    trace: tuple[str, ...] = ()

    @staticmethod
    def from_json(data: bytes | bytearray) -> "ExceptionRecord":
        value = decode_json(data)
        if value is None:
            return ExceptionRecord()
        _validated(EXCEPTION_RECORD_SCHEMA, value)
        return ExceptionRecord(file=value["file"], trace=tuple(value["trace"]))


class ExtraRecord(NamedTuple):
    class_name: str = ""
    line: int = 0

    @staticmethod
    def from_json(data: bytes | bytearray) -> "ExtraRecord":
        value = decode_json(data)
        if value is None:
            return ExtraRecord()
        _validated(EXTRA_RECORD_SCHEMA, value)
        return ExtraRecord(class_name=value["class"], line=value["line"])

    def __str__(self) -> str:
        return f"{self.class_name}:{self.line}"
