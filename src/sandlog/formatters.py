"""
Console formatting and color utilities.
"""

from __future__ import annotations

import multiprocessing
from datetime import datetime
from typing import Any, Sequence

import orjson

from .registry import PALETTE, Color

COLORS = {
    "reset": "\033[0m",
    "dim": "\033[30;1m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "yellow": "\033[33m",
    "red": "\033[31m",
}

SEVERITY_COLORS = {
    "warn": Color.YELLOW,
    "error": Color.RED,
}


def colorize(text: str, color: str | Color) -> str:
    """Apply ANSI color to text."""
    key = color.value if isinstance(color, Color) else color
    return f"{COLORS.get(key, '')}{text}{COLORS['reset']}"


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def format_timestamp(moment: datetime, fmt: str) -> str:
    """strftime with an extra ``{day}`` placeholder for the ordinal day."""
    return moment.strftime(fmt.replace("{day}", ordinal(moment.day)))


def worker_color() -> Color | None:
    """Palette color for a multiprocessing worker, None in the main process."""
    identity = multiprocessing.current_process()._identity
    if not identity:
        return None
    return PALETTE[identity[0] % len(PALETTE)]


def pretty(value: Any) -> str:
    """Render a non-string argument for the console."""
    if isinstance(value, (dict, list, tuple)):
        try:
            return orjson.dumps(value, default=repr, option=orjson.OPT_INDENT_2).decode()
        except TypeError:
            return repr(value)
    return str(value)


class ConsoleFormatter:
    """Renders one console line: ``[timestamp] - pid namespace: args``."""

    TIMESTAMP_FORMAT = "%b {day} %I:%M:%S %p"
    SEPARATOR = " "

    @staticmethod
    def _maybe_color(text: str, color: str | Color | None, use_color: bool) -> str:
        if not use_color or color is None:
            return text
        return colorize(text, color)

    @classmethod
    def format(
        cls,
        namespace: str,
        color: Color | None,
        args: Sequence[Any],
        *,
        timestamp: datetime | None = None,
        pid: int | None = None,
        pid_color: Color | None = None,
        use_color: bool = True,
        timestamp_format: str | None = None,
    ) -> str:
        moment = timestamp or datetime.now()
        stamp = format_timestamp(moment, timestamp_format or cls.TIMESTAMP_FORMAT)
        header = cls._maybe_color(f"[{stamp}]", "dim", use_color)
        if pid is not None:
            header = f"{header} - {cls._maybe_color(str(pid), pid_color, use_color)}"

        # args[0] is the namespace prepended by the logger facade
        body = list(args)
        if body and body[0] == namespace:
            body = body[1:]

        label = cls._maybe_color(f"{namespace}:", color, use_color)
        message = cls.SEPARATOR.join(arg if isinstance(arg, str) else pretty(arg) for arg in body)
        return f"{header} {label} {message}".rstrip()
