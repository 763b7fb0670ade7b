"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntryKind(StrEnum):
    """The independent vocabulary dictionaries an import can target."""

    VERB = "verbs"
    NOUN = "nouns"
    ADJECTIVE = "adjectives"
    CONJUGATION = "conjugations"

    @property
    def key_field(self) -> str:
        """Name of the natural key in conflict payloads sent to clients."""

        if self is EntryKind.CONJUGATION:
            return "verbName"
        return "italian"

    @property
    def label(self) -> str:
        if self is EntryKind.CONJUGATION:
            return "conjugations"
        return self.value
