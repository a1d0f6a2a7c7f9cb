"""Errors shared by every module that writes through the database."""


class PersistenceError(Exception):
    """Base class for failures raised by the transactional layer."""


class ConcurrencyConflictError(PersistenceError):
    """Raised when a write kept colliding with concurrent writers and retries ran out.

    Nothing from the failed attempts was committed, so callers may retry the
    whole operation.
    """


class StorageUnavailableError(PersistenceError):
    """Raised when the database failed mid-transaction; the transaction was rolled back."""
