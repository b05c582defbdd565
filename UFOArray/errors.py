"""Domain errors for UFOArray."""

from __future__ import annotations

from typing import Any, Dict


class UFOArrayError(Exception):
    """Base exception for UFOArray domain errors."""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class StoreIOError(UFOArrayError, OSError):
    """Store file could not be opened for reading or writing."""


class ClassNotFoundError(UFOArrayError, LookupError):
    """Requested class is absent or has no entries."""


class IndexOutOfRangeError(UFOArrayError, IndexError):
    """Index lookup fell outside the class, or the class is absent."""


class ValueCodecError(UFOArrayError, ValueError):
    """Key or value cannot be represented in the text format."""


class ConfigError(UFOArrayError):
    """Configuration errors."""
