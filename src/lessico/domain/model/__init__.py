"""Vocabulary domain model."""

from __future__ import annotations

from .enums import EntryKind
from .vocabulary import (
    Adjective,
    Entity,
    LemmaEntity,
    Noun,
    Payload,
    Verb,
    VerbConjugation,
    new_id,
)

__all__ = [
    "Adjective",
    "Entity",
    "EntryKind",
    "LemmaEntity",
    "Noun",
    "Payload",
    "Verb",
    "VerbConjugation",
    "new_id",
]
