from typing import cast


class RawMessage(bytes):
    """A field value still in its undecoded JSON form."""

    def __new__(cls, value: bytes | str = b"") -> "RawMessage":
        if isinstance(value, str):
            value = value.encode("utf-8")
        return cast(RawMessage, super().__new__(cls, value))

    @property
    def text(self) -> str:
        return self.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"RawMessage({bytes(self)!r})"


def is_byte_span(value: object) -> bool:
    return isinstance(value, (bytes, bytearray))
