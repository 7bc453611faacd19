from collections.abc import Mapping
from pathlib import Path

import pytest

from woodc.paths import FilePath
from woodc.reference import Reference


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.unit)


class RecordingHandler:
    """Reference handler answering from a fixed table and recording calls."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(values or {})
        self.calls: list[str] = []

    def __call__(self, reference: Reference, source: FilePath) -> str | None:
        self.calls.append(str(reference))
        return self.values.get(str(reference))


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def source() -> FilePath:
    return FilePath.parse("res/page/page.htm")
