"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path
from typing import Callable, Generator, List, Optional

import pytest
from loguru import logger

from clipurl.core.links import CandidateURL
from clipurl.core.storage import DatabaseSink, LinkSink, LogFileSink


class FakeClipboard:
    """Replays scripted clipboard readings; exceptions in the script are raised."""

    def __init__(self, values, on_exhausted: Optional[Callable[[], None]] = None):
        self.values = list(values)
        self.on_exhausted = on_exhausted
        self.reads = 0

    def __call__(self):
        self.reads += 1
        value = self.values.pop(0)
        if not self.values and self.on_exhausted:
            self.on_exhausted()
        if isinstance(value, BaseException):
            raise value
        return value


class MemorySink(LinkSink):
    """Keeps persisted links in a list."""

    def __init__(self):
        self.links: List[str] = []
        self.closed = False

    def persist(self, url: CandidateURL) -> int:
        self.links.append(str(url))
        return len(self.links)

    def describe(self) -> str:
        return "memory"

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def reset_logger() -> Generator[None, None, None]:
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    return tmp_path / "links.db"


@pytest.fixture
def temp_log_path(tmp_path: Path) -> Path:
    return tmp_path / "links.txt"


@pytest.fixture
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def db_sink(temp_db_path: Path) -> Generator[DatabaseSink, None, None]:
    sink = DatabaseSink(temp_db_path)
    yield sink
    sink.close()


@pytest.fixture
def log_sink(temp_log_path: Path) -> Generator[LogFileSink, None, None]:
    sink = LogFileSink(temp_log_path)
    yield sink
    sink.close()
