"""Vocabulary entities persisted by the import engine.

Entities are plain dataclasses; the SQLAlchemy adapter maps them imperatively.
Each entity exposes its natural key and a JSON-like payload, which is the shape
the import engine compares and sends back to clients.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, cast
from uuid import UUID, uuid4

from lessico.domain.model.enums import EntryKind

if TYPE_CHECKING:
    from collections.abc import Mapping

type Payload = dict[str, Any]


def new_id() -> UUID:
    return uuid4()


def _json_object(value: object) -> Payload:
    return cast(Payload, copy.deepcopy(value))


@dataclass(eq=False, kw_only=True)
class Entity:
    """Internal identity exists immediately in the domain."""

    id: UUID = field(default_factory=new_id)

    # class-level discriminator; subclasses must override
    ENTRY_KIND: ClassVar[EntryKind]

    @property
    def entry_kind(self) -> EntryKind:
        return self.ENTRY_KIND

    @property
    def key(self) -> str:
        """Natural key imports match on."""
        raise NotImplementedError

    def to_payload(self) -> Payload:
        raise NotImplementedError

    def apply_payload(self, payload: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def rename(self, key: str) -> None:
        raise NotImplementedError(f"{self.ENTRY_KIND.label} entries cannot be renamed")


@dataclass(eq=False, kw_only=True)
class LemmaEntity(Entity):
    """Dictionary entry keyed by its Italian lemma."""

    italian: str

    @property
    def key(self) -> str:
        return self.italian

    def rename(self, key: str) -> None:
        self.italian = key


@dataclass(eq=False, kw_only=True)
class Verb(LemmaEntity):
    ENTRY_KIND: ClassVar[EntryKind] = EntryKind.VERB

    regular: bool
    reflexive: bool
    tr_pt_br: str
    tr_en: str | None = None

    @classmethod
    def from_payload(cls, key: str, payload: Mapping[str, Any]) -> Verb:
        verb = cls(italian=key, regular=False, reflexive=False, tr_pt_br="")
        verb.apply_payload(payload)
        return verb

    def to_payload(self) -> Payload:
        return {
            "regular": self.regular,
            "reflexive": self.reflexive,
            "tr_ptBR": self.tr_pt_br,
            "tr_en": self.tr_en,
        }

    def apply_payload(self, payload: Mapping[str, Any]) -> None:
        self.regular = bool(payload["regular"])
        self.reflexive = bool(payload["reflexive"])
        self.tr_pt_br = str(payload["tr_ptBR"])
        # an empty English translation is stored as absent
        self.tr_en = payload.get("tr_en") or None


@dataclass(eq=False, kw_only=True)
class Noun(LemmaEntity):
    ENTRY_KIND: ClassVar[EntryKind] = EntryKind.NOUN

    singolare: Payload
    plurale: Payload

    @classmethod
    def from_payload(cls, key: str, payload: Mapping[str, Any]) -> Noun:
        return cls(
            italian=key,
            singolare=_json_object(payload["singolare"]),
            plurale=_json_object(payload["plurale"]),
        )

    def to_payload(self) -> Payload:
        return {
            "singolare": _json_object(self.singolare),
            "plurale": _json_object(self.plurale),
        }

    def apply_payload(self, payload: Mapping[str, Any]) -> None:
        self.singolare = _json_object(payload["singolare"])
        self.plurale = _json_object(payload["plurale"])


@dataclass(eq=False, kw_only=True)
class Adjective(LemmaEntity):
    ENTRY_KIND: ClassVar[EntryKind] = EntryKind.ADJECTIVE

    maschile: Payload
    femminile: Payload

    @classmethod
    def from_payload(cls, key: str, payload: Mapping[str, Any]) -> Adjective:
        return cls(
            italian=key,
            maschile=_json_object(payload["maschile"]),
            femminile=_json_object(payload["femminile"]),
        )

    def to_payload(self) -> Payload:
        return {
            "maschile": _json_object(self.maschile),
            "femminile": _json_object(self.femminile),
        }

    def apply_payload(self, payload: Mapping[str, Any]) -> None:
        self.maschile = _json_object(payload["maschile"])
        self.femminile = _json_object(payload["femminile"])


@dataclass(eq=False, kw_only=True)
class VerbConjugation(Entity):
    """Mood → tense → person table for one verb.

    Simple forms (for example the participles) map a tense directly to a string
    instead of a person table.
    """

    ENTRY_KIND: ClassVar[EntryKind] = EntryKind.CONJUGATION

    verb: Verb = field(repr=False)
    conjugation: Payload

    @property
    def key(self) -> str:
        return self.verb.italian

    def to_payload(self) -> Payload:
        return _json_object(self.conjugation)

    def apply_payload(self, payload: Mapping[str, Any]) -> None:
        self.conjugation = _json_object(payload)
