"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from lessico.domain.model import EntryKind

if TYPE_CHECKING:
    from types import TracebackType

    from lessico.domain.model import Entity
    from lessico.domain.ports.persistence import (
        AdjectiveRepository,
        ConjugationRepository,
        NounRepository,
        VerbRepository,
        VocabularyRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...  # the repo list itself should be immutable

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class VocabularyRepositories(RepositoryCollection):
    """Repositories for every vocabulary dictionary."""

    verbs: VerbRepository
    nouns: NounRepository
    adjectives: AdjectiveRepository
    conjugations: ConjugationRepository

    def for_kind(self, kind: EntryKind) -> VocabularyRepository[Entity]:
        repositories: dict[EntryKind, VocabularyRepository[Entity]] = {
            EntryKind.VERB: self.verbs,
            EntryKind.NOUN: self.nouns,
            EntryKind.ADJECTIVE: self.adjectives,
            EntryKind.CONJUGATION: self.conjugations,
        }
        return repositories[kind]


type VocabularyUnitOfWork = UnitOfWork[VocabularyRepositories]
