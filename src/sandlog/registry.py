"""
Namespace registry.

Every namespace gets a level index and a color the first time it is seen.
Assignments are append-only: once a namespace is registered its level and
color never change and it is never removed.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, Mapping


class Color(str, Enum):
    CYAN = "cyan"
    GREEN = "green"
    BLUE = "blue"
    MAGENTA = "magenta"
    YELLOW = "yellow"
    RED = "red"


PALETTE: tuple[Color, ...] = (
    Color.CYAN,
    Color.GREEN,
    Color.BLUE,
    Color.MAGENTA,
    Color.YELLOW,
    Color.RED,
)


@dataclass
class RegistryEntry:
    namespace: str
    level: int
    color: Color
    logger: Any = field(default=None, repr=False, compare=False)


class NamespaceRegistry:
    """Table of namespace -> (level, color, logger).

    Usage::

        registry = NamespaceRegistry()
        entry, created = registry.get_or_create("db")
        entry.level, entry.color   # (0, Color.CYAN)
    """

    def __init__(self, palette: tuple[Color, ...] = PALETTE):
        if not palette:
            raise ValueError("palette must not be empty")
        self._palette = palette
        self._entries: dict[str, RegistryEntry] = {}
        self._lock = threading.Lock()
        self._next_level = 0
        self._color_index = 0
        self._first_namespace = ""

    def get_or_create(
        self,
        namespace: str,
        factory: Callable[[RegistryEntry], Any] | None = None,
    ) -> tuple[RegistryEntry, bool]:
        """Return ``(entry, created)`` for ``namespace``.

        When the namespace is new and ``factory`` is given, it is called with
        the fresh entry while the registry lock is held and its result is
        stored as ``entry.logger``.
        """
        with self._lock:
            entry = self._entries.get(namespace)
            if entry is not None:
                return entry, False

            entry = RegistryEntry(
                namespace=namespace,
                level=self._next_level,
                color=self._palette[self._color_index % len(self._palette)],
            )
            self._next_level += 1
            self._color_index += 1

            if factory is not None:
                entry.logger = factory(entry)

            self._entries[namespace] = entry
            if not self._first_namespace:
                self._first_namespace = namespace
            return entry, True

    def add_namespace(self, namespace: str, logger: Any = None) -> RegistryEntry:
        entry, _ = self.get_or_create(namespace)
        if logger is not None:
            with self._lock:
                if entry.logger is None:
                    entry.logger = logger
        return entry

    def get(self, namespace: str) -> RegistryEntry | None:
        with self._lock:
            return self._entries.get(namespace)

    @property
    def first_namespace(self) -> str:
        return self._first_namespace

    @property
    def levels(self) -> Mapping[str, int]:
        with self._lock:
            return {name: entry.level for name, entry in self._entries.items()}

    @property
    def colors(self) -> Mapping[str, Color]:
        with self._lock:
            return {name: entry.color for name, entry in self._entries.items()}

    def __contains__(self, namespace: object) -> bool:
        return namespace in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._entries))
