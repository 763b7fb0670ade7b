"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from lessico.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyVocabularyUnitOfWork,
    is_started,
    startup,
)
from lessico.domain.importing import (
    DuplicateKeyError,
    ImportEngine,
    RecordNotFoundError,
    require_existing_parents,
)
from lessico.domain.model import EntryKind, Payload, VerbConjugation
from lessico.domain.ports.unit_of_work import VocabularyUnitOfWork

if TYPE_CHECKING:
    from lessico.domain.importing import ImportOutcome, ImportRequest
    from lessico.domain.model import Entity

UnitOfWorkFactory = Callable[[], VocabularyUnitOfWork]


log = getLogger(__name__)


def default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyVocabularyUnitOfWork


def import_vocabulary(
    kind: EntryKind,
    request: ImportRequest[Payload],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ImportOutcome[Payload]:
    """Run one import call for ``kind`` inside a fresh unit of work.

    Every write is committed as soon as it completes, so a storage failure
    leaves the earlier writes of the batch in place.
    """

    effective_uow = unit_of_work_factory or default_unit_of_work_factory()
    log.info(
        "Starting %s import: entries=%s, resolutions=%s",
        kind.label,
        len(request.entries),
        len(request.resolutions),
    )
    with effective_uow() as uow:
        repositories = uow.repositories
        precheck = None
        if kind is EntryKind.CONJUGATION:
            precheck = require_existing_parents(repositories.verbs.existing_keys)
        engine = ImportEngine[Payload](
            repository=repositories.for_kind(kind),
            label=kind.label,
            precheck=precheck,
            checkpoint=uow.commit,
        )
        return engine.run(request)


def list_vocabulary(
    kind: EntryKind,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[Payload]:
    """Return every stored entry of ``kind`` ordered by its key."""

    effective_uow = unit_of_work_factory or default_unit_of_work_factory()
    with effective_uow() as uow:
        entities = uow.repositories.for_kind(kind).list_all()
        return [describe_entity(entity) for entity in entities]


def delete_vocabulary_entry(
    kind: EntryKind,
    key: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> bool:
    """Delete the entry stored under ``key``; return whether one existed."""

    effective_uow = unit_of_work_factory or default_unit_of_work_factory()
    with effective_uow() as uow:
        deleted = uow.repositories.for_kind(kind).delete_by_key(key)
        if deleted:
            uow.commit()
            log.info("Deleted %s entry %s", kind.label, key)
        return deleted


def update_vocabulary_entry(
    kind: EntryKind,
    key: str,
    payload: Payload,
    *,
    new_key: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Payload:
    """Overwrite one stored entry, optionally renaming it to ``new_key``.

    Raises ``RecordNotFoundError`` for an unknown ``key`` and
    ``DuplicateKeyError`` when ``new_key`` is already taken.
    """

    effective_uow = unit_of_work_factory or default_unit_of_work_factory()
    with effective_uow() as uow:
        repository = uow.repositories.for_kind(kind)
        entity = repository.get_by_key(key)
        if entity is None:
            raise RecordNotFoundError(key)
        if new_key is not None and new_key != key:
            if repository.get_by_key(new_key) is not None:
                raise DuplicateKeyError(new_key)
            entity.rename(new_key)
        entity.apply_payload(payload)
        uow.commit()
        log.info("Updated %s entry %s", kind.label, entity.key)
        return describe_entity(entity)


def describe_entity(entity: Entity) -> Payload:
    """Flatten an entity into the JSON shape used by listings."""

    kind = entity.entry_kind
    if isinstance(entity, VerbConjugation):
        return {
            "id": str(entity.id),
            kind.key_field: entity.key,
            "conjugation": entity.to_payload(),
        }
    return {"id": str(entity.id), kind.key_field: entity.key, **entity.to_payload()}
