from __future__ import annotations

from typing import Callable

Logger = Callable[[str], None]


def color_text(text: str, color_code: str) -> str:
    return f"\033[{color_code}m{text}\033[0m"


def debug_text(text: str) -> str:
    return f"{color_text('DEBUG', '31')} {text}"


def null_logger(*_: object) -> None:
    return None


def make_logger(dev: bool = False) -> Logger:
    """Return a logger printing tagged debug lines when ``dev`` is set."""

    if not dev:
        return null_logger
    return lambda message: print(debug_text(message))
