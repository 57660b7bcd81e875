"""
Caller location lookup for ``file:line`` markers.
"""

from __future__ import annotations

import inspect
import os
from dataclasses import dataclass
from typing import Protocol

_INTERNAL_PREFIXES = ("sandlog", "structlog", "logging")


def _is_internal(module: str) -> bool:
    return any(module == prefix or module.startswith(prefix + ".") for prefix in _INTERNAL_PREFIXES)


@dataclass(frozen=True)
class CallerLocation:
    file: str
    line: int
    function: str = ""

    def marker(self) -> str:
        return f"\x1b[30;1m[{self.file}:{self.line}]\x1b[0m"


class LocationProvider(Protocol):
    def locate(self) -> CallerLocation | None: ...


class NullLocationProvider:
    """For environments without usable frame introspection."""

    def locate(self) -> CallerLocation | None:
        return None


class FrameLocationProvider:
    """Finds the first stack frame outside sandlog and the logging stack.

    The file is reported relative to ``app_path`` when it lives below it.
    """

    def __init__(self, app_path: str | None = None, max_depth: int = 30):
        self.app_path = os.path.abspath(app_path or os.getcwd())
        self.max_depth = max_depth

    def locate(self) -> CallerLocation | None:
        frame = inspect.currentframe()
        if frame is None:
            return None

        try:
            frame = frame.f_back
            for _ in range(self.max_depth):
                if frame is None:
                    break
                module = frame.f_globals.get("__name__", "")
                if not _is_internal(module):
                    return CallerLocation(
                        file=self._relative(frame.f_code.co_filename),
                        line=frame.f_lineno,
                        function=frame.f_code.co_name,
                    )
                frame = frame.f_back
            return None
        finally:
            del frame

    def _relative(self, filename: str) -> str:
        path = os.path.abspath(filename)
        try:
            relative = os.path.relpath(path, self.app_path)
        except ValueError:
            return path
        return path if relative.startswith("..") else relative
