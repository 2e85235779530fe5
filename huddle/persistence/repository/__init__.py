"""PostgreSQL repository implementations."""

from huddle.persistence.repository.message import PostgresMessageRepository

__all__ = [
    "PostgresMessageRepository",
]
