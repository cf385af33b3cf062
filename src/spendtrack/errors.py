"""Exception types surfaced to callers of the ledger and budget services."""

from __future__ import annotations


class SpendTrackError(Exception):
    """Base class for application errors."""


class ValidationError(SpendTrackError, ValueError):
    """Input rejected before any storage call was made."""


class StorageError(SpendTrackError, RuntimeError):
    """A storage operation failed; callers must not assume anything was written."""


class NotFoundError(SpendTrackError, LookupError):
    """The targeted row no longer exists."""
