"""Shared import contract components.

This module intentionally holds only:
- key-indexed mapping aliases
- the value objects passed between the import stages
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from uuid import UUID


class Resolution(StrEnum):
    """Caller decision for one colliding key."""

    KEEP = "keep"
    REPLACE = "replace"


class KeyStatus(StrEnum):
    """Partition tag: does the store already hold a record for the key?"""

    NEW = "new"
    EXISTING = "existing"


class EntryAction(StrEnum):
    """What the committer will do with one submitted entry."""

    CREATE = "create"
    UPDATE = "update"
    SKIP = "skip"
    CONFLICT = "conflict"


class ImportState(StrEnum):
    """Protocol states of a single import call."""

    RECEIVED = "received"
    CLASSIFIED = "classified"
    PENDING = "pending"
    COMMITTING = "committing"
    COMMITTED = "committed"


@dataclass(slots=True, frozen=True, kw_only=True)
class ExistingRecord[TPayload]:
    """Authoritative state already in the store."""

    key: str
    payload: TPayload
    record_id: UUID | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class Conflict[TPayload]:
    """Colliding key without a resolution; both payloads verbatim."""

    key: str
    existing: TPayload
    new: TPayload


type EntriesByKey[TPayload] = Mapping[str, TPayload]
type ExistingByKey[TPayload] = Mapping[str, ExistingRecord[TPayload]]
type StatusesByKey = dict[str, KeyStatus]
type ActionsByKey = dict[str, EntryAction]
type ResolutionsByKey = Mapping[str, Resolution]


@dataclass(slots=True, frozen=True)
class ImportRequest[TPayload]:
    """Entries plus the resolutions supplied in the same call."""

    entries: EntriesByKey[TPayload]
    resolutions: ResolutionsByKey = field(default_factory=dict[str, Resolution])


@dataclass(slots=True, frozen=True)
class PendingImport[TPayload]:
    """Unresolved collisions were found; nothing was written."""

    conflicts: tuple[Conflict[TPayload], ...]
    state: Literal[ImportState.PENDING] = ImportState.PENDING


@dataclass(slots=True, frozen=True)
class CommittedImport:
    """The batch was written; counts reflect what the store reported."""

    created: int
    updated: int
    skipped: int = 0
    state: Literal[ImportState.COMMITTED] = ImportState.COMMITTED


type ImportOutcome[TPayload] = PendingImport[TPayload] | CommittedImport
