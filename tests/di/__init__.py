"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .summarizer import MockSummarizerProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "MockSummarizerProvider",
    "build_test_container",
]
