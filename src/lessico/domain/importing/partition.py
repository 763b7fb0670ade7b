"""Split submitted entries into new keys and keys the store already holds."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .contracts import KeyStatus

if TYPE_CHECKING:
    from .contracts import EntriesByKey, ExistingByKey, StatusesByKey


def partition_keys[TPayload](
    entries: EntriesByKey[TPayload],
    existing: ExistingByKey[TPayload],
) -> StatusesByKey:
    """Tag every submitted key ``new`` or ``existing``.

    ``existing`` must come from one batched lookup over all submitted keys.
    Records for keys that were not submitted are ignored.
    """

    return {
        key: KeyStatus.EXISTING if key in existing else KeyStatus.NEW for key in entries
    }
