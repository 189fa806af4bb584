from enum import Enum


class StringerKind(Enum):
    DEFAULT = "default"
    ERROR = "error"
    TRACE = "trace"
    EXCEPTION = "exception"
    EXTRA = "extra"
    LEVEL = "level"


def init_stringers() -> None:
    import jlview.stringers  # noqa

    stringers = {
        StringerKind.DEFAULT: jlview.stringers.default_stringer,
        StringerKind.ERROR: jlview.stringers.error_stringer,
        StringerKind.TRACE: jlview.stringers.trace_stringer,
        StringerKind.EXCEPTION: jlview.stringers.exception_stringer,
        StringerKind.EXTRA: jlview.stringers.extra_stringer,
        StringerKind.LEVEL: jlview.stringers.level_stringer,
    }

    from jlview.registry import register_stringer

    for kind, func in stringers.items():
        register_stringer(kind.value, func)
