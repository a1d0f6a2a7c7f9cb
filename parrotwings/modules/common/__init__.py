"""Shared abstractions used across domain modules."""

from .exceptions import ConcurrencyConflictError, PersistenceError, StorageUnavailableError
from .repository import AsyncRepository

__all__ = [
    "AsyncRepository",
    "ConcurrencyConflictError",
    "PersistenceError",
    "StorageUnavailableError",
]
