from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from lessico.adapters.sqlalchemy import unit_of_work as uow_module
from lessico.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyVocabularyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from lessico.domain.model import EntryKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine

PARLARE = {"regular": True, "reflexive": False, "tr_ptBR": "falar"}


def test_unit_of_work_requires_startup() -> None:
    shutdown()

    with pytest.raises(StartupError):
        SqlAlchemyVocabularyUnitOfWork()


def test_startup_refuses_to_reconfigure_without_force(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    try:
        assert is_started()
        assert configured_engine() is sqlite_engine
        with pytest.raises(StartupError):
            startup(engine=sqlite_engine)
    finally:
        shutdown()
    assert not is_started()


def test_commit_persists_across_units_of_work(
    sqlite_unit_of_work: Callable[[], SqlAlchemyVocabularyUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.verbs.bulk_create({"parlare": PARLARE})
        uow.commit()

    with sqlite_unit_of_work() as uow:
        assert set(uow.repositories.for_kind(EntryKind.VERB).lookup_by_keys(["parlare"])) == {
            "parlare"
        }


def test_exception_rolls_back_uncommitted_work(
    sqlite_unit_of_work: Callable[[], SqlAlchemyVocabularyUnitOfWork],
) -> None:
    with pytest.raises(RuntimeError), sqlite_unit_of_work() as uow:
        uow.repositories.verbs.bulk_create({"parlare": PARLARE})
        raise RuntimeError("boom")

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.verbs.existing_keys(["parlare"]) == set()


def test_repositories_unavailable_outside_context(
    sqlite_unit_of_work: Callable[[], SqlAlchemyVocabularyUnitOfWork],
) -> None:
    uow = sqlite_unit_of_work()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_startup_runs_migrations_on_given_engine(
    sqlite_engine: Engine,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    upgraded: list[Engine | None] = []
    monkeypatch.setattr(uow_module, "upgrade_head", lambda *, engine: upgraded.append(engine))

    startup(engine=sqlite_engine, force=True)
    try:
        assert upgraded == [sqlite_engine]
    finally:
        shutdown()
