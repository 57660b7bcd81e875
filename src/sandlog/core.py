"""
Core dispatch pipeline and hub composition.

Every log call that passes the namespace filter becomes a structlog event.
Processors stamp it with time and process information, and the last
processor fans it out to the registered sinks and drops the event.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from datetime import datetime
from typing import Any, Callable, Mapping, Sequence

import structlog
from structlog.typing import EventDict, WrappedLogger

from .config import ColorMode, LoggingSettings, settings
from .errors import TransportError
from .formatters import worker_color
from .location import FrameLocationProvider, LocationProvider
from .registry import NamespaceRegistry, RegistryEntry
from .sinks import BaseSink, LevelTag, StdioSink

_METHODS: Mapping[str, str] = {
    "log": "info",
    "warn": "warning",
    "error": "error",
}


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["timestamp"] = datetime.now()
    return event_dict


def add_process(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["pid"] = os.getpid()
    color = worker_color()
    if color is not None:
        event_dict["pid_color"] = color
    return event_dict


class Dispatcher:
    """Owns the sink list and the structlog pipeline that feeds it."""

    def __init__(self, sinks: Sequence[BaseSink] | None = None):
        self._sinks: list[BaseSink] = list(sinks or [])
        self._lock = threading.Lock()
        self._logger = structlog.wrap_logger(
            structlog.ReturnLogger(),
            processors=[
                structlog.stdlib.add_log_level,
                add_timestamp,
                add_process,
                self._render_to_sinks,
            ],
            wrapper_class=structlog.make_filtering_bound_logger(logging.NOTSET),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @property
    def sinks(self) -> tuple[BaseSink, ...]:
        return tuple(self._sinks)

    def add_sink(self, sink: BaseSink) -> BaseSink:
        with self._lock:
            self._sinks.append(sink)
        return sink

    def close(self) -> None:
        with self._lock:
            sinks, self._sinks = self._sinks, []
        for sink in sinks:
            sink.close()

    def dispatch(self, level_tag: LevelTag, entry: RegistryEntry, args: Sequence[Any]) -> None:
        method = getattr(self._logger, _METHODS[level_tag])
        method(
            level_tag,
            namespace=entry.namespace,
            color=entry.color,
            rank=entry.level,
            payload=list(args),
        )

    def _render_to_sinks(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        level_tag = event_dict.pop("event")
        namespace = event_dict.pop("namespace")
        color = event_dict.pop("color")
        payload = event_dict.pop("payload")

        for sink in self.sinks:
            try:
                sink.write(level_tag, namespace, color, payload, **event_dict)
            except Exception as exc:
                _report_sink_failure(sink, exc)
        raise structlog.DropEvent


def _report_sink_failure(sink: BaseSink, exc: Exception) -> None:
    stream = sys.__stderr__
    if stream is None:
        return
    try:
        stream.write(f"sandlog: sink {type(sink).__name__} failed: {exc!r}\n")
    except (OSError, ValueError):
        return


# =============================================================================
# Hub
# =============================================================================


class EnvFilterSource:
    """Reads the filter spec from the environment on every call."""

    def __init__(self, var: str = "SAND_LOG"):
        self.var = var

    def __call__(self) -> str:
        return os.environ.get(self.var, "")


class LogHub:
    """Bundles everything a logger needs: registry, sinks, filter and location lookup."""

    def __init__(
        self,
        *,
        registry: NamespaceRegistry | None = None,
        dispatcher: Dispatcher | None = None,
        filter_source: Callable[[], str] | None = None,
        location_provider: LocationProvider | None = None,
        default_namespace: str = "app",
        use_color: bool = True,
    ):
        self.registry = registry if registry is not None else NamespaceRegistry()
        self.dispatcher = dispatcher if dispatcher is not None else Dispatcher()
        self.filter_source = filter_source or EnvFilterSource()
        self.location_provider = location_provider or FrameLocationProvider()
        self.default_namespace = default_namespace
        self.use_color = use_color

    @classmethod
    def from_settings(cls, config: LoggingSettings, sinks: Sequence[BaseSink] | None = None) -> LogHub:
        stream = sys.stdout if config.stream == "stdout" else sys.stderr
        if config.color is ColorMode.AUTO:
            use_color = bool(getattr(stream, "isatty", lambda: False)())
        else:
            use_color = config.color is ColorMode.ALWAYS

        if sinks is None:
            sinks = [StdioSink(stream=stream, use_color=use_color, timestamp_format=config.timestamp_format)]

        return cls(
            dispatcher=Dispatcher(sinks),
            filter_source=EnvFilterSource(config.filter_var),
            location_provider=FrameLocationProvider(config.app_path),
            default_namespace=config.default_namespace,
            use_color=use_color,
        )

    def filter_spec(self) -> str:
        return self.filter_source() or ""

    def add_namespace(self, namespace: str, logger: Any = None) -> RegistryEntry:
        return self.registry.add_namespace(namespace, logger)

    def add_transport(self, transport: Any, config: Mapping[str, Any] | None = None) -> BaseSink:
        """Append a sink. ``transport`` is a sink instance or a factory taking ``**config``."""
        if isinstance(transport, BaseSink):
            sink = transport
        elif callable(transport):
            sink = transport(**dict(config or {}))
            if not isinstance(sink, BaseSink):
                raise TransportError(transport, reason="factory did not return a BaseSink")
        else:
            raise TransportError(transport, reason="expected a BaseSink or a sink factory")
        return self.dispatcher.add_sink(sink)


# =============================================================================
# Process-wide default
# =============================================================================

_default_hub: LogHub | None = None
_default_lock = threading.Lock()


def default_hub() -> LogHub:
    """Return the process-wide hub, creating it from settings on first use."""
    global _default_hub
    if _default_hub is None:
        with _default_lock:
            if _default_hub is None:
                _default_hub = LogHub.from_settings(settings.logging)
    return _default_hub


def configure_logging(
    *,
    config: LoggingSettings | None = None,
    sinks: Sequence[BaseSink] | None = None,
) -> LogHub:
    """
    Configure the process-wide hub.

    Only allowed before the default hub exists; afterwards the registry is
    already in use and sinks can only be appended with ``add_transport``.

    Args:
        config: Logging settings (default: ``settings.logging``)
        sinks: Sinks replacing the default console sink
    """
    global _default_hub
    with _default_lock:
        if _default_hub is not None:
            return _default_hub
        _default_hub = LogHub.from_settings(config or settings.logging, sinks)
        return _default_hub


def add_namespace(namespace: str) -> RegistryEntry:
    return default_hub().add_namespace(namespace)


def add_transport(transport: Any, config: Mapping[str, Any] | None = None) -> BaseSink:
    return default_hub().add_transport(transport, config)
