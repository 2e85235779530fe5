"""Repository interfaces for the Huddle domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from huddle.domain.repository.message import MessageRepository

__all__ = [
    "MessageRepository",
]
