"""Shared test fixtures."""

import logging
from typing import List, Tuple

import pytest


class MemorySink:
    """EventSink that keeps events in memory."""

    def __init__(self):
        self.events: List[Tuple[int, str]] = []

    def record(self, level: int, message: str) -> None:
        self.events.append((level, message))

    def messages(self, level: int) -> List[str]:
        return [message for lvl, message in self.events if lvl == level]

    @property
    def warnings(self) -> List[str]:
        return self.messages(logging.WARNING)

    @property
    def errors(self) -> List[str]:
        return self.messages(logging.ERROR)


@pytest.fixture
def sink():
    """In-memory event sink."""
    return MemorySink()
