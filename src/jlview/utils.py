# The dreaded "utils" module, where lazy programmers put all the miscellaneous functions.

from typing import Any


def raw_text(value: bytes | bytearray) -> str:
    """Returns the bytes as text, replacing anything that isn't valid UTF-8."""
    return bytes(value).decode("utf-8", errors="replace")


def describe(value: Any) -> str:
    """Generic text form of any value, the same `print()` would show."""
    try:
        return str(value)
    except Exception:
        # Some objects have broken __str__ implementations. We still need text.
        return object.__repr__(value)


def prefix_lines(value: str, prefix: str = "\t") -> str:
    """Prefixes every line (split on "\\n") with `prefix`.

    Unlike `str.splitlines`, a trailing newline yields a trailing prefixed
    empty line, so the output always has as many lines as the input.
    """
    return prefix + f"\n{prefix}".join(value.split("\n"))
