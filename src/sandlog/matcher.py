"""
Namespace filter matching.

A filter spec is a single string of whitespace or comma separated glob
tokens, conventionally read from the ``SAND_LOG`` environment variable:

    SAND_LOG="db:*,api"          # db:query, db:pool and api
    SAND_LOG="*,-db:secret"      # everything except db:secret

A leading ``-`` turns a token into an exclude pattern. Excludes are checked
first and always win. ``*`` matches any substring; every other character
is literal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

_TOKEN_SPLIT = re.compile(r"[\s,]+")


def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a ``*`` glob into a fully anchored regex."""
    body = re.escape(pattern).replace(r"\*", ".*?")
    return re.compile(rf"^{body}\Z")


@dataclass(frozen=True)
class FilterSpec:
    """Parsed include/exclude rule sets."""

    includes: tuple[re.Pattern[str], ...] = ()
    excludes: tuple[re.Pattern[str], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.includes and not self.excludes

    def enabled(self, namespace: str) -> bool:
        if any(rx.match(namespace) for rx in self.excludes):
            return False
        return any(rx.match(namespace) for rx in self.includes)


@lru_cache(maxsize=64)
def parse_filter_spec(spec: str) -> FilterSpec:
    """Parse a filter spec string. Tokens that end up empty are ignored."""
    includes: list[re.Pattern[str]] = []
    excludes: list[re.Pattern[str]] = []

    for token in _TOKEN_SPLIT.split(spec or ""):
        if not token:
            continue
        if token.startswith("-"):
            token = token[1:]
            if token:
                excludes.append(glob_to_regex(token))
        else:
            includes.append(glob_to_regex(token))

    return FilterSpec(includes=tuple(includes), excludes=tuple(excludes))


def is_enabled(namespace: str, spec: str) -> bool:
    """Return True when plain ``log`` output for ``namespace`` should show."""
    return parse_filter_spec(spec).enabled(namespace)
