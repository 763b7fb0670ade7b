"""Orchestrator for the two-phase import protocol.

One call walks ``received → classified`` and then ends either ``pending``
(unresolved conflicts, nothing written) or ``committing → committed``. The
engine keeps no state between calls: callers resubmit the full entry set
together with their resolutions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .apply import build_import_plan
from .classify import classify_collisions
from .commit import commit_plan, no_checkpoint
from .contracts import CommittedImport, ImportState, PendingImport
from .errors import DependencyMissingError
from .partition import partition_keys

if TYPE_CHECKING:
    from collections.abc import Collection

    from lessico.domain.ports.persistence import EntryRepository

    from .commit import Checkpoint
    from .contracts import EntriesByKey, ImportOutcome, ImportRequest

log = logging.getLogger(__name__)

type PreCheck[TPayload] = Callable[[EntriesByKey[TPayload]], None]
type FindExistingKeys = Callable[[Collection[str]], set[str]]


@dataclass(slots=True)
class ImportEngine[TPayload]:
    """Run one import call against a single entity kind's repository."""

    repository: EntryRepository[TPayload]
    label: str = "entries"
    precheck: PreCheck[TPayload] | None = None
    checkpoint: Checkpoint = no_checkpoint

    def run(self, request: ImportRequest[TPayload]) -> ImportOutcome[TPayload]:
        self._enter(ImportState.RECEIVED, entries=len(request.entries))
        if self.precheck is not None:
            self.precheck(request.entries)

        keys = list(request.entries)
        existing = self.repository.lookup_by_keys(keys) if keys else {}
        statuses = partition_keys(request.entries, existing)
        classification = classify_collisions(
            request.entries,
            existing,
            statuses,
            request.resolutions,
        )
        plan = build_import_plan(request.entries, classification)
        self._enter(ImportState.CLASSIFIED, entries=len(keys))

        if plan.has_conflicts:
            self._enter(ImportState.PENDING, entries=len(plan.conflicts))
            log.info(
                "Import of %s pending: %s unresolved conflicts",
                self.label,
                len(plan.conflicts),
            )
            return PendingImport(conflicts=plan.conflicts)

        self._enter(ImportState.COMMITTING, entries=len(plan.to_create) + len(plan.to_update))
        result = commit_plan(plan, repository=self.repository, checkpoint=self.checkpoint)
        self._enter(ImportState.COMMITTED, entries=result.created + result.updated)
        log.info(
            "Imported %s: created=%s, updated=%s, kept=%s",
            self.label,
            result.created,
            result.updated,
            len(plan.to_skip),
        )
        return CommittedImport(
            created=result.created,
            updated=result.updated,
            skipped=len(plan.to_skip),
        )

    def _enter(self, state: ImportState, *, entries: int) -> None:
        log.debug("Import of %s is %s (%s entries)", self.label, state, entries)


def require_existing_parents[TPayload](find_existing_keys: FindExistingKeys) -> PreCheck[TPayload]:
    """Build a pre-check rejecting entries whose parent record is not stored.

    Entry keys double as parent keys (a conjugation table is keyed by its verb).
    """

    def check(entries: EntriesByKey[TPayload]) -> None:
        keys = list(entries)
        found = find_existing_keys(keys) if keys else set[str]()
        missing = [key for key in keys if key not in found]
        if missing:
            raise DependencyMissingError(missing)

    return check
