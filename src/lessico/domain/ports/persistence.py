"""Ports for persisting vocabulary entries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from lessico.domain.model import Adjective, Entity, Noun, Payload, Verb, VerbConjugation

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping, Sequence

    from lessico.domain.importing.contracts import ExistingRecord


@runtime_checkable
class EntryRepository[TPayload](Protocol):
    """Capabilities the import engine needs from one entity kind's store."""

    def lookup_by_keys(self, keys: Collection[str]) -> dict[str, ExistingRecord[TPayload]]:
        """Return existing records for ``keys`` in a single batched read."""
        ...

    def bulk_create(self, entries: Mapping[str, TPayload]) -> int:
        """Insert ``entries`` and return how many rows the store accepted."""
        ...

    def update_by_key(self, key: str, payload: TPayload) -> None: ...


@runtime_checkable
class VocabularyRepository[TEntity: Entity](EntryRepository[Payload], Protocol):
    """Repository contract shared by the CRUD layer and the import engine."""

    def list_all(self) -> Sequence[TEntity]:
        """Return every stored entity ordered by its natural key."""
        ...

    def get_by_key(self, key: str) -> TEntity | None: ...

    def delete_by_key(self, key: str) -> bool: ...


@runtime_checkable
class VerbRepository(VocabularyRepository[Verb], Protocol):
    """Repository contract for verbs."""

    def existing_keys(self, keys: Collection[str]) -> set[str]: ...


@runtime_checkable
class NounRepository(VocabularyRepository[Noun], Protocol):
    """Repository contract for nouns."""


@runtime_checkable
class AdjectiveRepository(VocabularyRepository[Adjective], Protocol):
    """Repository contract for adjectives."""


@runtime_checkable
class ConjugationRepository(VocabularyRepository[VerbConjugation], Protocol):
    """Repository contract for conjugation tables, keyed by verb."""
