from __future__ import annotations

import os
from typing import TYPE_CHECKING

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from lessico.adapters.sqlalchemy import start_mappers
from lessico.adapters.sqlalchemy.migrations import upgrade_head
from lessico.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyVocabularyUnitOfWork,
    shutdown,
    startup,
)
from lessico.api.main import create_app

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

TEST_JWT_SECRET = "test-secret-with-enough-bytes-for-hs256"


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    # one shared connection so the API test client's worker thread sees the same database
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyVocabularyUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyVocabularyUnitOfWork:
        return SqlAlchemyVocabularyUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def jwt_secret(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.delenv("JWT_ALGORITHM", raising=False)
    return TEST_JWT_SECRET


@pytest.fixture
def admin_headers(jwt_secret: str) -> dict[str, str]:
    token = jwt.encode({"sub": "admin", "admin": True}, jwt_secret, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(
    sqlite_unit_of_work: Callable[[], SqlAlchemyVocabularyUnitOfWork],
    jwt_secret: str,
) -> Iterator[TestClient]:
    with TestClient(create_app()) as test_client:
        yield test_client
