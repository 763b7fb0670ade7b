"""SQLAlchemy mapping metadata for the Lessico domain model."""

from __future__ import annotations

import logging
import uuid
from functools import cache

from sqlalchemy import JSON, Boolean, Column, ForeignKey, String, Table, Uuid, orm
from sqlalchemy.orm import relationship

from lessico.domain.model import Adjective, Noun, Verb, VerbConjugation

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]
LEMMA_MAX_LENGTH = 100

mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Lemma dictionaries ------------------------------------------------------------

verb_table = Table(
    "verb",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("italian", String(LEMMA_MAX_LENGTH), nullable=False, unique=True),
    Column("regular", Boolean, nullable=False),
    Column("reflexive", Boolean, nullable=False),
    Column("tr_ptBR", String, key="tr_pt_br", nullable=False),
    Column("tr_en", String, nullable=True),
)

noun_table = Table(
    "noun",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("italian", String(LEMMA_MAX_LENGTH), nullable=False, unique=True),
    Column("singolare", JSON, nullable=False),
    Column("plurale", JSON, nullable=False),
)

adjective_table = Table(
    "adjective",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("italian", String(LEMMA_MAX_LENGTH), nullable=False, unique=True),
    Column("maschile", JSON, nullable=False),
    Column("femminile", JSON, nullable=False),
)

# Conjugation tables -------------------------------------------------------------

verb_conjugation_table = Table(
    "verb_conjugation",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "verb_id",
        UUIDColumnType,
        ForeignKey("verb.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    ),
    Column("conjugation", JSON, nullable=False),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Verb, verb_table)
    mapper_registry.map_imperatively(Noun, noun_table)
    mapper_registry.map_imperatively(Adjective, adjective_table)
    mapper_registry.map_imperatively(
        VerbConjugation,
        verb_conjugation_table,
        properties={
            "verb": relationship(Verb, lazy="joined", innerjoin=True),
        },
    )

    orm.configure_mappers()
    return mapper_registry
