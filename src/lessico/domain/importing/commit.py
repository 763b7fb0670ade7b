"""Batch commit: the only import stage that mutates the store.

The bulk create runs once, then every replace-resolved entry is updated on its
own. ``checkpoint`` makes each write durable before the next one starts, so a
failure leaves earlier writes in place; the raised ``StorageError`` carries the
progress made so far.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import StorageError

if TYPE_CHECKING:
    from lessico.domain.ports.persistence import EntryRepository

    from .apply import ImportPlan

log = logging.getLogger(__name__)

type Checkpoint = Callable[[], None]


def no_checkpoint() -> None:
    return None


@dataclass(slots=True, frozen=True)
class CommitResult:
    created: int
    updated: int


def commit_plan[TPayload](
    plan: ImportPlan[TPayload],
    *,
    repository: EntryRepository[TPayload],
    checkpoint: Checkpoint = no_checkpoint,
) -> CommitResult:
    """Write ``plan.to_create`` in bulk, then each of ``plan.to_update``."""

    created = 0
    updated = 0
    try:
        if plan.to_create:
            inserted = repository.bulk_create(plan.to_create)
            checkpoint()
            created = inserted
            shortfall = len(plan.to_create) - inserted
            if shortfall > 0:
                log.warning(
                    "Store ignored %s of %s new entries (created concurrently?)",
                    shortfall,
                    len(plan.to_create),
                )

        for key, payload in plan.to_update.items():
            repository.update_by_key(key, payload)
            checkpoint()
            updated += 1
    except StorageError as exc:
        exc.record_progress(created=created, updated=updated)
        raise

    return CommitResult(created=created, updated=updated)
