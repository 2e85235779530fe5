"""In-memory repository implementations for testing."""

from .message import InMemoryMessageRepository

__all__ = [
    "InMemoryMessageRepository",
]
