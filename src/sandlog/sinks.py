"""
Log sink abstractions and the bundled console sink.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Literal, Sequence

from .formatters import ConsoleFormatter, worker_color
from .registry import Color

LevelTag = Literal["log", "warn", "error"]


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks.

    ``args`` is the already filtered and shaped argument list, namespace
    first. ``context`` carries pipeline extras such as ``timestamp`` and
    ``pid``; sinks ignore keys they do not know.
    """

    @abstractmethod
    def write(
        self,
        level_tag: LevelTag,
        namespace: str,
        color: Color,
        args: Sequence[Any],
        **context: Any,
    ) -> None:
        """Write one log call to the sink."""
        ...

    def close(self) -> None:
        """Release resources held by the sink."""


class StdioSink(BaseSink):
    """Console sink.

    Args:
        stream: Output stream (default: stderr)
        use_color: Force ANSI colors on or off. ``None`` follows ``isatty``.
        timestamp_format: strftime format, ``{day}`` is the ordinal day
    """

    def __init__(self, stream: Any = None, use_color: bool | None = None, timestamp_format: str | None = None):
        self._stream = stream or sys.stderr
        self._use_color = use_color
        self._timestamp_format = timestamp_format

    @property
    def use_color(self) -> bool:
        if self._use_color is not None:
            return self._use_color
        return bool(getattr(self._stream, "isatty", lambda: False)())

    def write(
        self,
        level_tag: LevelTag,
        namespace: str,
        color: Color,
        args: Sequence[Any],
        **context: Any,
    ) -> None:
        timestamp = context.get("timestamp")
        output = ConsoleFormatter.format(
            namespace,
            color,
            args,
            timestamp=timestamp if isinstance(timestamp, datetime) else None,
            pid=context.get("pid"),
            pid_color=context.get("pid_color", worker_color()),
            use_color=self.use_color,
            timestamp_format=self._timestamp_format,
        )
        self._stream.write(output + "\n")
        self._stream.flush()
