"""Attachment object storage adapter."""

from .client import HttpObjectStorage, MockObjectStorage

__all__ = [
    "HttpObjectStorage",
    "MockObjectStorage",
]
