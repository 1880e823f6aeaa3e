# tests/conftest.py
from __future__ import annotations

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


class FakeClock:
    """手动推进的单调时钟（秒）"""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float):
        self.now += ms / 1000.0


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
