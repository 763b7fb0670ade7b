"""Regroup classified entries into the lists the committer executes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .contracts import EntryAction

if TYPE_CHECKING:
    from .classify import Classification
    from .contracts import Conflict, EntriesByKey


@dataclass(slots=True)
class ImportPlan[TPayload]:
    """Aggregate plan for one import call."""

    to_create: dict[str, TPayload] = field(default_factory=dict[str, Any])
    to_update: dict[str, TPayload] = field(default_factory=dict[str, Any])
    to_skip: list[str] = field(default_factory=list[str])
    conflicts: tuple[Conflict[TPayload], ...] = ()

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)


def build_import_plan[TPayload](
    entries: EntriesByKey[TPayload],
    classification: Classification[TPayload],
) -> ImportPlan[TPayload]:
    plan = ImportPlan[TPayload](conflicts=tuple(classification.conflicts))
    for key, action in classification.actions.items():
        if action is EntryAction.CREATE:
            plan.to_create[key] = entries[key]
        elif action is EntryAction.UPDATE:
            plan.to_update[key] = entries[key]
        elif action is EntryAction.SKIP:
            plan.to_skip.append(key)
    return plan
