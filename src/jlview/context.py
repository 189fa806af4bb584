from typing import Any


class Context:
    """Rendering context shared by every stringer during a render pass.

    Stringers receive it but don't read it yet. It carries the display options
    a caller may want to honour when printing the rendered fields.
    """

    def __init__(
        self, color: bool = True, truncate: bool = True, max_width: int = 0
    ) -> None:
        self.color = color
        self.truncate = truncate
        self.max_width = max_width

    @staticmethod
    def from_options(options: dict[str, Any]) -> "Context":
        return Context(
            color=options.get("color", True),
            truncate=options.get("truncate", True),
            max_width=options.get("max_width", 0),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "color": self.color,
            "truncate": self.truncate,
            "max_width": self.max_width,
        }

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Context) and self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return f"Context({', '.join(f'{k}={v!r}' for k, v in self.as_dict().items())})"
