from logging import debug as logging_debug
from logging import info as logging_info
from typing import Any

from jlview.utils import raw_text


def _as_text(message: str | bytes) -> str:
    return raw_text(message) if isinstance(message, (bytes, bytearray)) else message


def info(message: str | bytes, *args: Any, **kwargs: Any) -> None:
    logging_info(_as_text(message), *args, **kwargs)


def debug(message: str | bytes, *args: Any, **kwargs: Any) -> None:
    logging_debug(_as_text(message), *args, **kwargs)
