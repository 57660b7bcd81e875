"""
Namespaced logger facade.

    log = Logger("db").log
    log("connected to", host)          # shown when SAND_LOG enables "db"
    log.warn("slow query", elapsed)     # always shown, yellow
    log.error(exc)                      # always shown, red, traceback text
    log.ns("db:pool")("checked out")    # same options, other namespace

``Logger(namespace)`` is memoized per hub: asking again for a namespace
returns the very same object, with the level and color it was first
registered with.
"""

from __future__ import annotations

import traceback
from typing import Any

from .config import settings
from .core import LogHub, default_hub
from .formatters import SEVERITY_COLORS, colorize
from .matcher import is_enabled
from .registry import Color, RegistryEntry
from .sinks import LevelTag


def describe_error(exc: BaseException) -> str:
    """Traceback text, else the message, else the exception type line."""
    if exc.__traceback__ is not None:
        return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()
    try:
        message = str(exc)
    except Exception:
        message = ""
    if message:
        return message
    return "".join(traceback.format_exception_only(type(exc), exc)).rstrip()


class LogFunction:
    """The callable behind ``Logger.log``, carrying ``warn``, ``error`` and ``ns``."""

    __slots__ = ("logger",)

    def __init__(self, logger: Logger):
        self.logger = logger

    def __call__(self, *args: Any) -> None:
        self.logger.emit("log", args)

    def warn(self, *args: Any) -> None:
        self.logger.emit("warn", args)

    def error(self, *args: Any) -> None:
        self.logger.emit("error", args)

    def ns(self, namespace: str) -> LogFunction:
        return Logger(namespace, self.logger.show_file, hub=self.logger.hub).log

    as_ = ns

    def __repr__(self) -> str:
        return f"<LogFunction namespace={self.logger.namespace!r}>"


class Logger:
    """Per-namespace logger.

    Args:
        namespace: Namespace name. Empty or None uses the hub's default.
        show_file: Prefix every line with the caller's ``[file:line]``.
            Only honoured on first construction for a namespace.
        hub: Hub to register with (default: the process-wide hub).
    """

    namespace: str
    show_file: bool
    hub: LogHub
    entry: RegistryEntry
    log: LogFunction

    def __new__(cls, namespace: str | None = None, show_file: bool = False, *, hub: LogHub | None = None) -> Logger:
        hub = hub if hub is not None else default_hub()
        namespace = namespace or hub.default_namespace

        def build(entry: RegistryEntry) -> Logger:
            instance = object.__new__(cls)
            instance._bind(namespace, bool(show_file), hub, entry)
            return instance

        entry, _ = hub.registry.get_or_create(namespace, build)
        if entry.logger is None:
            # registered earlier through add_namespace() without a logger
            hub.registry.add_namespace(namespace, build(entry))
        return entry.logger

    def __init__(self, namespace: str | None = None, show_file: bool = False, *, hub: LogHub | None = None):
        # state is bound once in __new__
        pass

    def _bind(self, namespace: str, show_file: bool, hub: LogHub, entry: RegistryEntry) -> None:
        self.namespace = namespace
        self.show_file = show_file
        self.hub = hub
        self.entry = entry
        self.log = LogFunction(self)

    @property
    def level(self) -> int:
        return self.entry.level

    @property
    def color(self) -> Color:
        return self.entry.color

    def warn(self, *args: Any) -> None:
        self.emit("warn", args)

    def error(self, *args: Any) -> None:
        self.emit("error", args)

    def enabled(self) -> bool:
        """Whether plain ``log`` output is currently shown for this namespace."""
        return is_enabled(self.namespace, self.hub.filter_spec())

    def emit(self, level_tag: LevelTag, args: tuple[Any, ...]) -> None:
        shaped = self.build_args(args, level_tag)
        if level_tag == "log" and not self.enabled():
            return
        self.hub.dispatcher.dispatch(level_tag, self.entry, shaped)

    def build_args(self, args: tuple[Any, ...], level_tag: LevelTag = "log") -> list[Any]:
        shaped = [describe_error(arg) if isinstance(arg, BaseException) else arg for arg in args]

        color = SEVERITY_COLORS.get(level_tag)
        if color is not None and self.hub.use_color:
            shaped = [colorize(arg, color) if isinstance(arg, str) else arg for arg in shaped]

        if self.show_file:
            location = self.hub.location_provider.locate()
            if location is not None:
                shaped.insert(0, location.marker())

        shaped.insert(0, self.namespace)
        return shaped

    def __repr__(self) -> str:
        return f"<Logger namespace={self.namespace!r} level={self.entry.level} color={self.entry.color.value}>"


def get_logger(namespace: str | None = None, show_file: bool | None = None, *, hub: LogHub | None = None) -> Logger:
    """Get the logger for ``namespace``; ``show_file`` defaults from settings."""
    if show_file is None:
        show_file = settings.logging.show_file
    return Logger(namespace, show_file, hub=hub)
