"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from lessico.adapters.sqlalchemy.mappings import (
    adjective_table,
    noun_table,
    verb_conjugation_table,
    verb_table,
)
from lessico.domain.importing import ExistingRecord, RecordNotFoundError, StorageError
from lessico.domain.model import Adjective, Noun, Payload, Verb, VerbConjugation, new_id

if TYPE_CHECKING:
    from collections.abc import Collection, Iterator, Mapping, Sequence
    from uuid import UUID

    from sqlalchemy import Select, Table
    from sqlalchemy.engine import CursorResult
    from sqlalchemy.orm import Session


@contextmanager
def translate_storage_errors(operation: str) -> Iterator[None]:
    """Re-raise driver/ORM failures as domain ``StorageError``."""

    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageError(f"{operation} failed: {exc}") from exc


BULK_INSERT_CHUNK_SIZE = 500


def _key_chunks(keys: Collection[str]) -> Iterator[list[str]]:
    """Split ``keys`` so no single `IN (...)` exceeds the driver's variable limit."""

    ordered = list(keys)
    for start in range(0, len(ordered), BULK_INSERT_CHUNK_SIZE):
        yield ordered[start : start + BULK_INSERT_CHUNK_SIZE]


def _insert_or_ignore(session: Session, table: Table, rows: list[dict[str, object]]) -> int:
    """Insert ``rows`` in chunks, skipping keys the store already holds.

    Returns the number of rows the store accepted.
    """

    inserted = 0
    for start in range(0, len(rows), BULK_INSERT_CHUNK_SIZE):
        chunk = rows[start : start + BULK_INSERT_CHUNK_SIZE]
        stmt = table.insert().prefix_with("OR IGNORE").values(chunk)
        result = cast("CursorResult[Any]", session.execute(stmt))
        inserted += max(result.rowcount, 0)
    return inserted


class SqlAlchemyLemmaRepository[TEntity: (Verb, Noun, Adjective)]:
    """Shared helpers for dictionaries keyed by their Italian lemma."""

    def __init__(self, session: Session, entity_cls: type[TEntity], table: Table) -> None:
        self.session = session
        self._entity_cls = entity_cls
        self._table = table

    def lookup_by_keys(self, keys: Collection[str]) -> dict[str, ExistingRecord[Payload]]:
        if not keys:
            return {}
        entities: list[TEntity] = []
        with translate_storage_errors(f"{self._table.name} lookup"):
            for chunk in _key_chunks(keys):
                stmt = select(self._entity_cls).where(self._table.c.italian.in_(chunk))
                entities.extend(self.session.scalars(stmt).all())
        return {
            entity.key: ExistingRecord(
                key=entity.key,
                payload=entity.to_payload(),
                record_id=entity.id,
            )
            for entity in entities
        }

    def bulk_create(self, entries: Mapping[str, Payload]) -> int:
        if not entries:
            return 0
        rows = [
            self._row(self._entity_cls.from_payload(key, payload))
            for key, payload in entries.items()
        ]
        # a key inserted concurrently since the lookup is skipped, not overwritten
        with translate_storage_errors(f"{self._table.name} bulk create"):
            return _insert_or_ignore(self.session, self._table, rows)

    def update_by_key(self, key: str, payload: Payload) -> None:
        with translate_storage_errors(f"{self._table.name} update"):
            entity = self.get_by_key(key)
            if entity is None:
                raise RecordNotFoundError(key)
            entity.apply_payload(payload)
            self.session.flush()

    def list_all(self) -> Sequence[TEntity]:
        stmt = select(self._entity_cls).order_by(self._table.c.italian)
        with translate_storage_errors(f"{self._table.name} listing"):
            return self.session.scalars(stmt).all()

    def delete_by_key(self, key: str) -> bool:
        with translate_storage_errors(f"{self._table.name} delete"):
            entity = self.get_by_key(key)
            if entity is None:
                return False
            self.session.delete(entity)
            self.session.flush()
        return True

    def get_by_key(self, key: str) -> TEntity | None:
        stmt = select(self._entity_cls).where(self._table.c.italian == key)
        with translate_storage_errors(f"{self._table.name} lookup"):
            return self.session.scalars(stmt).one_or_none()

    def _row(self, entity: TEntity) -> dict[str, object]:
        return {column.key: getattr(entity, column.key) for column in self._table.columns}


class SqlAlchemyVerbRepository(SqlAlchemyLemmaRepository[Verb]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Verb, verb_table)

    def existing_keys(self, keys: Collection[str]) -> set[str]:
        if not keys:
            return set()
        found: set[str] = set()
        with translate_storage_errors("verb lookup"):
            for chunk in _key_chunks(keys):
                stmt = select(verb_table.c.italian).where(verb_table.c.italian.in_(chunk))
                found.update(self.session.scalars(stmt).all())
        return found

    def delete_by_key(self, key: str) -> bool:
        with translate_storage_errors("verb delete"):
            verb = self.get_by_key(key)
            if verb is None:
                return False
            self.session.execute(
                delete(verb_conjugation_table).where(verb_conjugation_table.c.verb_id == verb.id)
            )
            self.session.delete(verb)
            self.session.flush()
        return True


class SqlAlchemyNounRepository(SqlAlchemyLemmaRepository[Noun]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Noun, noun_table)


class SqlAlchemyAdjectiveRepository(SqlAlchemyLemmaRepository[Adjective]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Adjective, adjective_table)


class SqlAlchemyConjugationRepository:
    """Conjugation tables, addressed by the Italian infinitive of their verb."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def lookup_by_keys(self, keys: Collection[str]) -> dict[str, ExistingRecord[Payload]]:
        if not keys:
            return {}
        conjugations: list[VerbConjugation] = []
        with translate_storage_errors("verb_conjugation lookup"):
            for chunk in _key_chunks(keys):
                stmt = self._select().where(verb_table.c.italian.in_(chunk))
                conjugations.extend(self.session.scalars(stmt).unique().all())
        return {
            conjugation.key: ExistingRecord(
                key=conjugation.key,
                payload=conjugation.to_payload(),
                record_id=conjugation.id,
            )
            for conjugation in conjugations
        }

    def bulk_create(self, entries: Mapping[str, Payload]) -> int:
        if not entries:
            return 0
        verb_ids = self._verb_ids(entries.keys())
        rows = [
            {
                "id": new_id(),
                "verb_id": verb_ids[key],
                "conjugation": payload,
            }
            for key, payload in entries.items()
            if key in verb_ids
        ]
        if not rows:
            return 0
        with translate_storage_errors("verb_conjugation bulk create"):
            return _insert_or_ignore(self.session, verb_conjugation_table, rows)

    def update_by_key(self, key: str, payload: Payload) -> None:
        with translate_storage_errors("verb_conjugation update"):
            conjugation = self.get_by_key(key)
            if conjugation is None:
                raise RecordNotFoundError(key)
            conjugation.apply_payload(payload)
            self.session.flush()

    def list_all(self) -> Sequence[VerbConjugation]:
        stmt = self._select().order_by(verb_table.c.italian)
        with translate_storage_errors("verb_conjugation listing"):
            return self.session.scalars(stmt).unique().all()

    def delete_by_key(self, key: str) -> bool:
        with translate_storage_errors("verb_conjugation delete"):
            conjugation = self.get_by_key(key)
            if conjugation is None:
                return False
            self.session.delete(conjugation)
            self.session.flush()
        return True

    def _select(self) -> Select[tuple[VerbConjugation]]:
        return select(VerbConjugation).join(
            verb_table,
            verb_table.c.id == verb_conjugation_table.c.verb_id,
        )

    def get_by_key(self, key: str) -> VerbConjugation | None:
        stmt = self._select().where(verb_table.c.italian == key)
        with translate_storage_errors("verb_conjugation lookup"):
            return self.session.scalars(stmt).unique().one_or_none()

    def _verb_ids(self, keys: Collection[str]) -> dict[str, UUID]:
        verb_ids: dict[str, UUID] = {}
        with translate_storage_errors("verb lookup"):
            for chunk in _key_chunks(keys):
                stmt = select(verb_table.c.italian, verb_table.c.id).where(
                    verb_table.c.italian.in_(chunk)
                )
                verb_ids.update(self.session.execute(stmt).tuples().all())
        return verb_ids


if TYPE_CHECKING:
    from lessico.domain.ports.persistence import (
        AdjectiveRepository,
        ConjugationRepository,
        NounRepository,
        VerbRepository,
    )

    _session_stub = cast("Session", object())
    _verb_repo: VerbRepository = SqlAlchemyVerbRepository(_session_stub)
    _noun_repo: NounRepository = SqlAlchemyNounRepository(_session_stub)
    _adjective_repo: AdjectiveRepository = SqlAlchemyAdjectiveRepository(_session_stub)
    _conjugation_repo: ConjugationRepository = SqlAlchemyConjugationRepository(_session_stub)
