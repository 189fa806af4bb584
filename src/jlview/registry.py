import logging
from typing import Any, Dict, Mapping

from jlview.context import Context
from jlview.stringers import Stringer, default_stringer

_REGISTERED_STRINGERS: Dict[str, Stringer] = {}

DEFAULT_FIELD_STRINGERS: Dict[str, str] = {
    "level": "level",
    "error": "error",
    "exception": "exception",
    "extra": "extra",
    "trace": "trace",
}


def get_stringer(name: str) -> Stringer | None:
    return _REGISTERED_STRINGERS.get(name)


def register_stringer(name: str, func: Stringer) -> None:
    if not name:
        raise ValueError("Stringer name can't be empty")
    if name in _REGISTERED_STRINGERS and _REGISTERED_STRINGERS[name] != func:
        raise ValueError(f"Stringer {name} is already registered")
    logging.debug(f"Registering stringer {name} from {func.__name__}")
    _REGISTERED_STRINGERS[name] = func


def list_stringers() -> list[str]:
    return sorted(_REGISTERED_STRINGERS)


def reset_stringers() -> None:
    _REGISTERED_STRINGERS.clear()


class FieldStringers:
    """Maps field names to the stringer that renders them.

    Fields without an explicit mapping are rendered with `default_stringer`.
    """

    def __init__(self, mapping: Mapping[str, str] | None = None) -> None:
        self._names: Dict[str, str] = {}
        self._stringers: Dict[str, Stringer] = {}
        for field, name in (
            DEFAULT_FIELD_STRINGERS if mapping is None else mapping
        ).items():
            self.set(field, name)

    def set(self, field: str, name: str) -> None:
        stringer = get_stringer(name)
        if stringer is None:
            raise ValueError(f"Unknown stringer '{name}' for field '{field}'")
        self._names[field] = name
        self._stringers[field] = stringer

    def get(self, field: str) -> Stringer:
        return self._stringers.get(field, default_stringer)

    def render(self, ctx: Context, field: str, value: Any) -> str:
        return self.get(field)(ctx, value)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._names)

    def __contains__(self, field: object) -> bool:
        return field in self._stringers
