"""
Interceptors routing standard library logging into sandlog namespaces.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .core import LogHub
from .logger import Logger


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library log records to a sandlog namespace.

    Records below WARNING go through ``log`` and are subject to the
    namespace filter; WARNING maps to ``warn`` and ERROR and above to
    ``error``, both always shown.
    """

    def __init__(
        self,
        namespace: str = "debug",
        *,
        hub: LogHub | None = None,
        targets: Iterable[str] = (),
        level: int = logging.NOTSET,
    ):
        super().__init__(level)
        self.namespace = namespace
        self.hub = hub
        self.targets = tuple(targets)

    @property
    def logger(self) -> Logger:
        return Logger(self.namespace, hub=self.hub)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if record.name == "sandlog" or record.name.startswith("sandlog."):
                return

            args: list = [record.getMessage()]
            if record.exc_info and record.exc_info[1] is not None:
                args.append(record.exc_info[1])

            logger = self.logger
            if record.levelno >= logging.ERROR:
                logger.error(*args)
            elif record.levelno >= logging.WARNING:
                logger.warn(*args)
            else:
                logger.log(*args)
        except Exception:
            self.handleError(record)


def redirect_stdlib_logging(
    namespace: str = "debug",
    loggers: Iterable[str] = ("",),
    *,
    hub: LogHub | None = None,
) -> RedirectStdLibHandler:
    """
    Attach a redirect handler to the given stdlib loggers.

    Existing handlers on those loggers are left alone; pass the returned
    handler to ``restore_stdlib_logging`` to detach it again.

    Args:
        namespace: sandlog namespace the records are logged under
        loggers: stdlib logger names ("" is the root logger)
        hub: Hub to log through (default: the process-wide hub)
    """
    handler = RedirectStdLibHandler(namespace, hub=hub, targets=loggers)
    for name in handler.targets:
        logging.getLogger(name).addHandler(handler)
    return handler


def restore_stdlib_logging(handler: RedirectStdLibHandler) -> None:
    for name in handler.targets:
        logging.getLogger(name).removeHandler(handler)
