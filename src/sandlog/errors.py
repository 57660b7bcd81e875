"""
sandlog exception hierarchy.

Log calls never raise; these exceptions only surface from setup APIs such
as ``add_transport``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class SandLogError(Exception):
    """Base class for sandlog errors.

    Carries a machine readable ``code`` and a ``details`` mapping alongside
    the human readable message.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class TransportError(SandLogError):
    """Raised when a transport cannot be turned into a usable sink."""

    def __init__(self, transport: Any, *, reason: str) -> None:
        super().__init__(
            f"Invalid transport {transport!r}: {reason}",
            code="INVALID_TRANSPORT",
            details={"transport": repr(transport), "reason": reason},
        )
