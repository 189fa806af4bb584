"""Stringers turn a single field value of a structured log line into text.

Every stringer has the same signature, `stringer(ctx, value) -> str`, and
never raises: malformed or unexpected values degrade to an empty string, the
raw text of the value or the default rendering, so a bad field can't stop the
rest of the line from being printed.

Field values are one of:

- `str`: already text.
- `bytes` (usually a `RawMessage`): the field, still as undecoded JSON.
- anything else: an already decoded value.
"""

from typing import Any, Callable

from jlview.context import Context
from jlview.raw_message import is_byte_span
from jlview.records import (
    UNDECODED,
    ErrorRecord,
    ExceptionRecord,
    ExtraRecord,
    decode_json,
    decode_lines,
    decode_or_default,
    decode_string,
)
from jlview.utils import describe, prefix_lines, raw_text

Stringer = Callable[[Context, Any], str]

LEVEL_ABBREVIATIONS = {
    "WARNING": "WARN",
    "CRITICAL": "CRIT",
}


def _join_lines(lines: tuple[str, ...] | list[str]) -> str:
    return "".join(f"\n{line}" for line in lines)


def default_stringer(ctx: Context, v: Any) -> str:
    """Turns any field into a string by trying, in order:

    1. returning it as is if it's already text.
    2. decoding it as JSON and describing the result. If it's not valid
       JSON, the raw text is returned unmodified.
    3. describing the value.
    """
    if isinstance(v, str):
        return v
    if is_byte_span(v):
        decoded = decode_or_default(v, decode_json, UNDECODED)
        return raw_text(v) if decoded is UNDECODED else describe(decoded)
    return describe(v)


def error_stringer(ctx: Context, v: Any) -> str:
    """Renders an error record as its message plus the indented stack.

    Anything that isn't an error record goes through `default_stringer`.
    """
    record = ErrorRecord.from_value(v)
    if record is None:
        return default_stringer(ctx, v)
    return f"\n  {record.error}\n{prefix_lines(record.stack)}"


def trace_stringer(ctx: Context, v: Any) -> str:
    if not is_byte_span(v):
        return ""
    return _join_lines(decode_or_default(v, decode_lines, []))


def exception_stringer(ctx: Context, v: Any) -> str:
    if not is_byte_span(v):
        return ""
    record = decode_or_default(v, ExceptionRecord.from_json, ExceptionRecord())
    return record.file + _join_lines(record.trace)


def extra_stringer(ctx: Context, v: Any) -> str:
    """Renders `{"class": ..., "line": ...}` as `class:line`.

    Falls back to a bare JSON string holding just the class name.
    """
    if not is_byte_span(v):
        return ""
    record = decode_or_default(v, ExtraRecord.from_json, None)
    if record is not None:
        return str(record)
    return decode_or_default(v, decode_string, "")


def level_stringer(ctx: Context, v: Any) -> str:
    if not is_byte_span(v):
        return ""
    level = decode_or_default(v, decode_string, "")
    return LEVEL_ABBREVIATIONS.get(level, level)
