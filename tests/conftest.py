"""
Pytest configuration and fixtures
"""

import io
import sys
from pathlib import Path

import pytest

# Add the project root to Python path for testing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from simpleprogress.display import TerminalWriter  # noqa: E402


# Register custom markers
def pytest_configure(config):
    """Register custom pytest markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


class FakeClock:
    """Monotonic clock that only moves when told to"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def stream():
    """In-memory text stream standing in for the terminal"""
    return io.StringIO()


@pytest.fixture
def writer(stream):
    """TerminalWriter that writes into the in-memory stream"""
    return TerminalWriter(stream)


@pytest.fixture
def clock():
    return FakeClock()
