"""Request schemas for vocabulary imports.

The HTTP routes and the CLI share these models, so a file accepted by
``lessico import`` is accepted by ``POST /api/admin/{kind}/import`` too.
Unknown fields inside an entry are dropped rather than rejected.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    StrictBool,
    StrictStr,
    StringConstraints,
    ValidationError,
)

from lessico.adapters.sqlalchemy.mappings import LEMMA_MAX_LENGTH
from lessico.domain.importing import (
    EntryValidationError,
    ImportRequest,
    Resolution,
    ValidationIssue,
)
from lessico.domain.model import EntryKind, Payload

EntryKey = Annotated[str, StringConstraints(min_length=1, max_length=LEMMA_MAX_LENGTH)]
RequiredText = Annotated[StrictStr, StringConstraints(min_length=1)]


class TranslatedForm(BaseModel):
    """One inflected form with its Portuguese and English translations."""

    it: RequiredText
    pt: RequiredText
    en: RequiredText


class VerbEntry(BaseModel):
    regular: StrictBool
    reflexive: StrictBool
    tr_ptBR: RequiredText  # noqa: N815
    tr_en: StrictStr | None = None


class NounEntry(BaseModel):
    singolare: TranslatedForm
    plurale: TranslatedForm


class GenderForms(BaseModel):
    singolare: TranslatedForm
    plurale: TranslatedForm


class AdjectiveEntry(BaseModel):
    maschile: GenderForms
    femminile: GenderForms


# mood -> tense -> person -> form; simple tenses (participles) map straight to a form
TenseForms = dict[RequiredText, StrictStr] | StrictStr
ConjugationEntry = dict[RequiredText, dict[RequiredText, TenseForms]]


class ImportBody(BaseModel):
    """Fields shared by every import request."""

    resolve_conflicts: dict[str, Resolution] = Field(
        default_factory=dict[str, Resolution],
        validation_alias="resolveConflicts",
    )

    def payloads(self) -> dict[str, Payload]:
        raise NotImplementedError

    def to_request(self) -> ImportRequest[Payload]:
        return ImportRequest(entries=self.payloads(), resolutions=dict(self.resolve_conflicts))


class VerbImportBody(ImportBody):
    entries: dict[EntryKey, VerbEntry] = Field(validation_alias=AliasChoices("entries", "verbs"))

    def payloads(self) -> dict[str, Payload]:
        return {key: entry.model_dump(exclude_unset=True) for key, entry in self.entries.items()}


class NounImportBody(ImportBody):
    entries: dict[EntryKey, NounEntry] = Field(validation_alias=AliasChoices("entries", "nouns"))

    def payloads(self) -> dict[str, Payload]:
        return {key: entry.model_dump() for key, entry in self.entries.items()}


class AdjectiveImportBody(ImportBody):
    entries: dict[EntryKey, AdjectiveEntry] = Field(
        validation_alias=AliasChoices("entries", "adjectives")
    )

    def payloads(self) -> dict[str, Payload]:
        return {key: entry.model_dump() for key, entry in self.entries.items()}


class ConjugationImportBody(ImportBody):
    entries: dict[EntryKey, ConjugationEntry] = Field(
        validation_alias=AliasChoices("entries", "conjugations")
    )

    def payloads(self) -> dict[str, Payload]:
        return dict(self.entries)


IMPORT_BODY_BY_KIND: dict[EntryKind, type[ImportBody]] = {
    EntryKind.VERB: VerbImportBody,
    EntryKind.NOUN: NounImportBody,
    EntryKind.ADJECTIVE: AdjectiveImportBody,
    EntryKind.CONJUGATION: ConjugationImportBody,
}


class EntryUpdate(BaseModel):
    """Body of a single-entry edit; ``italian`` renames the entry when given."""

    italian: EntryKey | None = None

    def payload(self) -> Payload:
        raise NotImplementedError


class VerbUpdate(EntryUpdate, VerbEntry):
    def payload(self) -> Payload:
        return self.model_dump(exclude={"italian"}, exclude_unset=True)


class NounUpdate(EntryUpdate, NounEntry):
    def payload(self) -> Payload:
        return self.model_dump(exclude={"italian"})


class AdjectiveUpdate(EntryUpdate, AdjectiveEntry):
    def payload(self) -> Payload:
        return self.model_dump(exclude={"italian"})


class ConjugationUpdate(BaseModel):
    conjugation: ConjugationEntry

    def payload(self) -> Payload:
        return dict(self.conjugation)


UPDATE_BODY_BY_KIND: dict[EntryKind, type[EntryUpdate | ConjugationUpdate]] = {
    EntryKind.VERB: VerbUpdate,
    EntryKind.NOUN: NounUpdate,
    EntryKind.ADJECTIVE: AdjectiveUpdate,
    EntryKind.CONJUGATION: ConjugationUpdate,
}


def validation_issues(errors: list[Any]) -> list[ValidationIssue]:
    """Flatten pydantic error dicts into ``field``/``message`` pairs."""

    return [
        ValidationIssue(
            field=".".join(str(part) for part in error.get("loc", ())),
            message=str(error.get("msg", "Invalid value")),
        )
        for error in errors
    ]


def parse_import_body(kind: EntryKind, body: object) -> ImportRequest[Payload]:
    """Validate a raw request body and turn it into an engine request."""

    model = IMPORT_BODY_BY_KIND[kind]
    try:
        parsed = model.model_validate(body)
    except ValidationError as exc:
        raise EntryValidationError(
            "Validation failed",
            validation_issues(list(exc.errors())),
        ) from exc
    return parsed.to_request()


def parse_update_body(kind: EntryKind, body: object) -> tuple[str | None, Payload]:
    """Validate a single-entry edit; return the requested new key and the payload.

    Conjugation tables follow their verb, so they never carry a new key.
    """

    model = UPDATE_BODY_BY_KIND[kind]
    try:
        parsed = model.model_validate(body)
    except ValidationError as exc:
        raise EntryValidationError(
            "Validation failed",
            validation_issues(list(exc.errors())),
        ) from exc
    new_key = parsed.italian if isinstance(parsed, EntryUpdate) else None
    return new_key, parsed.payload()
