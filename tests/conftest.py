import typing as t

import pytest

from sandlog.core import Dispatcher, EnvFilterSource, LogHub
from sandlog.location import NullLocationProvider
from sandlog.registry import NamespaceRegistry
from sandlog.sinks import BaseSink


class RecordingSink(BaseSink):
    """Keeps every write in memory."""

    def __init__(self) -> None:
        self.records: list[dict[str, t.Any]] = []
        self.closed = False

    def write(self, level_tag, namespace, color, args, **context) -> None:
        self.records.append(
            {
                "level_tag": level_tag,
                "namespace": namespace,
                "color": color,
                "args": list(args),
                "context": context,
            }
        )

    def close(self) -> None:
        self.closed = True

    @property
    def args(self) -> list[list[t.Any]]:
        return [record["args"] for record in self.records]


@pytest.fixture(scope="function")
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture(scope="function")
def hub(sink, monkeypatch) -> LogHub:
    """
    Function-scoped hub with its own registry and a recording sink.
    SAND_LOG starts unset so each test controls the filter explicitly.
    """
    monkeypatch.delenv("SAND_LOG", raising=False)
    return LogHub(
        registry=NamespaceRegistry(),
        dispatcher=Dispatcher([sink]),
        filter_source=EnvFilterSource("SAND_LOG"),
        location_provider=NullLocationProvider(),
        use_color=False,
    )
