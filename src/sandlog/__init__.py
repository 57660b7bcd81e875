"""
Namespaced logging for sandlog.

Each namespace gets a level index and a color on first use. Plain ``log``
output is gated by the ``SAND_LOG`` environment variable, a whitespace or
comma separated list of globs where a leading ``-`` excludes:

    SAND_LOG="*,-db:secret" python app.py

``warn`` and ``error`` are always shown.

Design Pattern: Strategy Pattern for sink abstraction.
Library: structlog drives the dispatch pipeline, orjson pretty-prints
non-string arguments on the console.
"""

from .core import LogHub, add_namespace, add_transport, configure_logging, default_hub
from .errors import SandLogError, TransportError
from .interceptors import RedirectStdLibHandler, redirect_stdlib_logging, restore_stdlib_logging
from .logger import Logger, LogFunction, get_logger
from .matcher import FilterSpec, is_enabled, parse_filter_spec
from .registry import Color, NamespaceRegistry, RegistryEntry
from .sinks import BaseSink, StdioSink

__version__ = "0.1.0"

__all__ = [
    "BaseSink",
    "Color",
    "FilterSpec",
    "LogFunction",
    "LogHub",
    "Logger",
    "NamespaceRegistry",
    "RedirectStdLibHandler",
    "RegistryEntry",
    "SandLogError",
    "StdioSink",
    "TransportError",
    "add_namespace",
    "add_transport",
    "configure_logging",
    "default_hub",
    "get_logger",
    "is_enabled",
    "parse_filter_spec",
    "redirect_stdlib_logging",
    "restore_stdlib_logging",
]
