"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    AdjectiveRepository,
    ConjugationRepository,
    EntryRepository,
    NounRepository,
    VerbRepository,
    VocabularyRepository,
)
from .unit_of_work import (
    RepositoryCollection,
    UnitOfWork,
    VocabularyRepositories,
    VocabularyUnitOfWork,
)

__all__ = [
    "AdjectiveRepository",
    "ConjugationRepository",
    "EntryRepository",
    "NounRepository",
    "RepositoryCollection",
    "UnitOfWork",
    "VerbRepository",
    "VocabularyRepositories",
    "VocabularyRepository",
    "VocabularyUnitOfWork",
]
