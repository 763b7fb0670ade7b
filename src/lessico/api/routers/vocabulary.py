"""Admin routes: bulk import, listing, editing and deletion per vocabulary kind."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from lessico.api.dependencies import UnitOfWorkFactoryDep, require_admin
from lessico.api.schema import parse_import_body, parse_update_body
from lessico.app import (
    delete_vocabulary_entry,
    import_vocabulary,
    list_vocabulary,
    update_vocabulary_entry,
)
from lessico.domain.importing import DuplicateKeyError, PendingImport, RecordNotFoundError
from lessico.domain.model import EntryKind, Payload

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def conflicts_body(kind: EntryKind, outcome: PendingImport[Payload]) -> dict[str, Any]:
    """Render unresolved collisions the way admin clients expect them."""

    return {
        "error": "Conflicts found",
        "conflicts": [
            {kind.key_field: conflict.key, "existing": conflict.existing, "new": conflict.new}
            for conflict in outcome.conflicts
        ],
    }


@router.post("/{kind}/import", response_model=None)
def import_entries(
    kind: EntryKind,
    body: Annotated[Any, Body()],
    unit_of_work_factory: UnitOfWorkFactoryDep,
) -> dict[str, Any] | JSONResponse:
    request = parse_import_body(kind, body)
    outcome = import_vocabulary(kind, request, unit_of_work_factory=unit_of_work_factory)
    if isinstance(outcome, PendingImport):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=conflicts_body(kind, outcome),
        )
    return {
        "message": (
            f"Successfully imported {outcome.created} new {kind.label} "
            f"and updated {outcome.updated} existing {kind.label}"
        ),
        "created": outcome.created,
        "updated": outcome.updated,
    }


@router.get("/{kind}")
def list_entries(kind: EntryKind, unit_of_work_factory: UnitOfWorkFactoryDep) -> dict[str, Any]:
    entries = list_vocabulary(kind, unit_of_work_factory=unit_of_work_factory)
    return {kind.value: entries, "total": len(entries)}


@router.delete("/{kind}/{key}")
def delete_entry(
    kind: EntryKind,
    key: str,
    unit_of_work_factory: UnitOfWorkFactoryDep,
) -> dict[str, Any]:
    if not delete_vocabulary_entry(kind, key, unit_of_work_factory=unit_of_work_factory):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No {kind.label} entry for {key!r}",
        )
    return {"message": f"Deleted {key} from {kind.label}"}


@router.patch("/{kind}/{key}")
def update_entry(
    kind: EntryKind,
    key: str,
    body: Annotated[Any, Body()],
    unit_of_work_factory: UnitOfWorkFactoryDep,
) -> dict[str, Any]:
    new_key, payload = parse_update_body(kind, body)
    try:
        entry = update_vocabulary_entry(
            kind,
            key,
            payload,
            new_key=new_key,
            unit_of_work_factory=unit_of_work_factory,
        )
    except RecordNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No {kind.label} entry for {key!r}",
        ) from exc
    except DuplicateKeyError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return {"message": f"Updated {entry[kind.key_field]} in {kind.label}", "entry": entry}
