"""Huddle API client."""

from .client import HttpMessageStore

__all__ = ["HttpMessageStore"]
