"""Errors raised by the import engine and its adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class VocabularyImportError(RuntimeError):
    """Base class for import failures."""


@dataclass(slots=True, frozen=True)
class ValidationIssue:
    field: str
    message: str


class EntryValidationError(VocabularyImportError):
    """Raised when submitted entries do not have the expected shape."""

    def __init__(self, message: str, issues: Iterable[ValidationIssue] = ()) -> None:
        super().__init__(message)
        self.issues: tuple[ValidationIssue, ...] = tuple(issues)


class DependencyMissingError(VocabularyImportError):
    """Raised when entries reference parent records that do not exist."""

    def __init__(self, missing_keys: Iterable[str]) -> None:
        self.missing_keys: tuple[str, ...] = tuple(missing_keys)
        super().__init__(f"Missing parent records: {', '.join(self.missing_keys)}")


class StorageError(VocabularyImportError):
    """Raised when the store rejects a write.

    Earlier writes of the same commit are not rolled back; ``created`` and
    ``updated`` report how far the commit got before the failure.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.created = 0
        self.updated = 0

    def record_progress(self, *, created: int, updated: int) -> None:
        self.created = created
        self.updated = updated


class RecordNotFoundError(StorageError):
    """Raised when an update targets a key that is no longer stored."""

    def __init__(self, key: str) -> None:
        super().__init__(f"No stored record for key {key!r}")
        self.key = key


class DuplicateKeyError(VocabularyImportError):
    """Raised when an edit would rename an entry onto a key already stored."""

    def __init__(self, key: str) -> None:
        super().__init__(f"An entry for {key!r} already exists")
        self.key = key
