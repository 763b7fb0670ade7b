"""Bulk-import conflict resolution.

Layered flow for one call:
1) optional pre-check (parent records must exist)
2) one batched lookup of existing records
3) partition keys into new / existing
4) classify collisions against caller resolutions
5) regroup into an import plan
6) pending when conflicts remain, otherwise commit the plan
"""

from __future__ import annotations

from .apply import ImportPlan, build_import_plan
from .classify import Classification, classify_collisions
from .commit import CommitResult, commit_plan
from .contracts import (
    CommittedImport,
    Conflict,
    EntryAction,
    ExistingRecord,
    ImportOutcome,
    ImportRequest,
    ImportState,
    KeyStatus,
    PendingImport,
    Resolution,
)
from .engine import ImportEngine, require_existing_parents
from .errors import (
    DependencyMissingError,
    DuplicateKeyError,
    EntryValidationError,
    RecordNotFoundError,
    StorageError,
    ValidationIssue,
    VocabularyImportError,
)
from .partition import partition_keys

__all__ = [
    "Classification",
    "CommitResult",
    "CommittedImport",
    "Conflict",
    "DependencyMissingError",
    "DuplicateKeyError",
    "EntryAction",
    "EntryValidationError",
    "ExistingRecord",
    "ImportEngine",
    "ImportOutcome",
    "ImportPlan",
    "ImportRequest",
    "ImportState",
    "KeyStatus",
    "PendingImport",
    "RecordNotFoundError",
    "Resolution",
    "StorageError",
    "ValidationIssue",
    "VocabularyImportError",
    "build_import_plan",
    "classify_collisions",
    "commit_plan",
    "partition_keys",
    "require_existing_parents",
]
