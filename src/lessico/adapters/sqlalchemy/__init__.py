"""SQLAlchemy adapter package for Lessico."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyAdjectiveRepository,
    SqlAlchemyConjugationRepository,
    SqlAlchemyNounRepository,
    SqlAlchemyVerbRepository,
)

__all__ = [
    "SqlAlchemyAdjectiveRepository",
    "SqlAlchemyConjugationRepository",
    "SqlAlchemyNounRepository",
    "SqlAlchemyVerbRepository",
    "mapper_registry",
    "start_mappers",
]
