from __future__ import annotations

import logging

import pytest

from lessico.domain.importing import (
    Conflict,
    EntryAction,
    ExistingRecord,
    KeyStatus,
    Resolution,
    classify_collisions,
)

ENTRIES = {"gatto": {"tr": "gato"}, "cane": {"tr": "cão"}, "mela": {"tr": "maçã"}}
EXISTING = {
    "cane": ExistingRecord(key="cane", payload={"tr": "cachorro"}),
    "mela": ExistingRecord(key="mela", payload={"tr": "pomo"}),
}
STATUSES = {
    "gatto": KeyStatus.NEW,
    "cane": KeyStatus.EXISTING,
    "mela": KeyStatus.EXISTING,
}


def test_unresolved_collisions_become_conflicts() -> None:
    classification = classify_collisions(ENTRIES, EXISTING, STATUSES, {})

    assert classification.actions == {
        "gatto": EntryAction.CREATE,
        "cane": EntryAction.CONFLICT,
        "mela": EntryAction.CONFLICT,
    }
    assert classification.conflicts == [
        Conflict(key="cane", existing={"tr": "cachorro"}, new={"tr": "cão"}),
        Conflict(key="mela", existing={"tr": "pomo"}, new={"tr": "maçã"}),
    ]


def test_resolutions_route_collisions() -> None:
    resolutions = {"cane": Resolution.REPLACE, "mela": Resolution.KEEP}

    classification = classify_collisions(ENTRIES, EXISTING, STATUSES, resolutions)

    assert classification.actions["cane"] is EntryAction.UPDATE
    assert classification.actions["mela"] is EntryAction.SKIP
    assert classification.conflicts == []


def test_conflict_payloads_are_passed_through_verbatim() -> None:
    classification = classify_collisions(ENTRIES, EXISTING, STATUSES, {"mela": Resolution.KEEP})

    (conflict,) = classification.conflicts
    assert conflict.existing is EXISTING["cane"].payload
    assert conflict.new is ENTRIES["cane"]


def test_resolutions_for_new_or_unknown_keys_are_ignored(
    caplog: pytest.LogCaptureFixture,
) -> None:
    resolutions = {
        "gatto": Resolution.REPLACE,
        "fantasma": Resolution.KEEP,
        "cane": Resolution.KEEP,
        "mela": Resolution.KEEP,
    }

    with caplog.at_level(logging.DEBUG, logger="lessico.domain.importing.classify"):
        classification = classify_collisions(ENTRIES, EXISTING, STATUSES, resolutions)

    assert classification.actions["gatto"] is EntryAction.CREATE
    assert "fantasma" not in classification.actions
    assert classification.ignored_resolutions == ("gatto", "fantasma")
    assert "gatto, fantasma" in caplog.text
