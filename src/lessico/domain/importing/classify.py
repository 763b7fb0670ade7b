"""Conflict classification for colliding keys.

Responsibilities of this stage:
- turn partition tags into per-key actions
- route resolved collisions to ``update`` (replace) or ``skip`` (keep)
- emit a ``Conflict`` for every collision without a resolution

Out of scope for this stage:
- diffing or merging payload fields
- any storage access
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .contracts import Conflict, EntryAction, KeyStatus, Resolution

if TYPE_CHECKING:
    from .contracts import (
        ActionsByKey,
        EntriesByKey,
        ExistingByKey,
        ResolutionsByKey,
        StatusesByKey,
    )

log = logging.getLogger(__name__)


@dataclass(slots=True)
class Classification[TPayload]:
    actions: ActionsByKey = field(default_factory=dict[str, EntryAction])
    conflicts: list[Conflict[TPayload]] = field(default_factory=list)
    ignored_resolutions: tuple[str, ...] = ()


def classify_collisions[TPayload](
    entries: EntriesByKey[TPayload],
    existing: ExistingByKey[TPayload],
    statuses: StatusesByKey,
    resolutions: ResolutionsByKey,
) -> Classification[TPayload]:
    """Decide the action for every partitioned key."""

    classification = Classification[TPayload]()
    for key, status in statuses.items():
        if status is KeyStatus.NEW:
            classification.actions[key] = EntryAction.CREATE
            continue

        resolution = resolutions.get(key)
        if resolution == Resolution.REPLACE:
            classification.actions[key] = EntryAction.UPDATE
        elif resolution == Resolution.KEEP:
            classification.actions[key] = EntryAction.SKIP
        else:
            classification.actions[key] = EntryAction.CONFLICT
            classification.conflicts.append(
                Conflict(key=key, existing=existing[key].payload, new=entries[key])
            )

    classification.ignored_resolutions = tuple(
        key for key in resolutions if statuses.get(key) is not KeyStatus.EXISTING
    )
    if classification.ignored_resolutions:
        log.debug(
            "Ignoring resolutions for non-colliding keys: %s",
            ", ".join(classification.ignored_resolutions),
        )
    return classification
