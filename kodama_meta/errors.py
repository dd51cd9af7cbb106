"""Exception hierarchy for kodama_meta."""

from __future__ import annotations


class KodamaMetaError(Exception):
    """Base class for every error raised by kodama_meta."""


class MarkupDecodeError(KodamaMetaError, ValueError):
    """Raised when a metadata node cannot be decoded from markup."""


class SyncError(KodamaMetaError, LookupError):
    """Raised by a load-time pass that runs with the abort policy."""


class KodamaConfigError(KodamaMetaError, ValueError):
    """Raised when the configuration file is invalid or incomplete."""


__all__ = [
    "KodamaConfigError",
    "KodamaMetaError",
    "MarkupDecodeError",
    "SyncError",
]
