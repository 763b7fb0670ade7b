from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lessico.adapters.sqlalchemy.repositories import SqlAlchemyVerbRepository
from lessico.domain.importing import StorageError

if TYPE_CHECKING:
    import pytest
    from fastapi.testclient import TestClient

GATTO_OLD = {"regular": True, "reflexive": False, "tr_ptBR": "gato"}
GATTO_NEW = {"regular": True, "reflexive": False, "tr_ptBR": "gato (novo)", "tr_en": "cat"}
CANE = {"regular": True, "reflexive": False, "tr_ptBR": "cão"}
FORMS = {"it": "il gatto", "pt": "o gato", "en": "the cat"}
ESSERE_TABLE = {
    "Indicativo": {"Presente": {"io": "sono", "tu": "sei"}},
    "Participio": {"Passato": "stato"},
}


def _import(
    client: TestClient,
    headers: dict[str, str],
    kind: str,
    body: dict[str, Any],
) -> Any:
    return client.post(f"/api/admin/{kind}/import", json=body, headers=headers)


def test_import_creates_new_verbs(client: TestClient, admin_headers: dict[str, str]) -> None:
    response = _import(client, admin_headers, "verbs", {"entries": {"gatto": GATTO_OLD}})

    assert response.status_code == 200
    assert response.json() == {
        "message": "Successfully imported 1 new verbs and updated 0 existing verbs",
        "created": 1,
        "updated": 0,
    }


def test_conflict_then_replace_round_trip(
    client: TestClient,
    admin_headers: dict[str, str],
) -> None:
    _import(client, admin_headers, "verbs", {"verbs": {"gatto": GATTO_OLD}})

    first = _import(client, admin_headers, "verbs", {"verbs": {"gatto": GATTO_NEW, "cane": CANE}})

    assert first.status_code == 409
    assert first.json() == {
        "error": "Conflicts found",
        "conflicts": [
            {
                "italian": "gatto",
                "existing": {**GATTO_OLD, "tr_en": None},
                "new": GATTO_NEW,
            }
        ],
    }
    listing = client.get("/api/admin/verbs", headers=admin_headers).json()
    assert [verb["italian"] for verb in listing["verbs"]] == ["gatto"]

    second = _import(
        client,
        admin_headers,
        "verbs",
        {"verbs": {"gatto": GATTO_NEW, "cane": CANE}, "resolveConflicts": {"gatto": "replace"}},
    )

    assert second.status_code == 200
    assert (second.json()["created"], second.json()["updated"]) == (1, 1)
    listing = client.get("/api/admin/verbs", headers=admin_headers).json()
    assert listing["total"] == 2
    gatto = next(verb for verb in listing["verbs"] if verb["italian"] == "gatto")
    assert gatto["tr_ptBR"] == "gato (novo)"
    assert gatto["tr_en"] == "cat"


def test_keep_resolution_skips_existing_noun(
    client: TestClient,
    admin_headers: dict[str, str],
) -> None:
    original = {"singolare": FORMS, "plurale": FORMS}
    changed = {"singolare": {**FORMS, "pt": "a gata"}, "plurale": FORMS}
    _import(client, admin_headers, "nouns", {"nouns": {"gatto": original}})

    response = _import(
        client,
        admin_headers,
        "nouns",
        {"nouns": {"gatto": changed}, "resolveConflicts": {"gatto": "keep"}},
    )

    assert response.status_code == 200
    assert (response.json()["created"], response.json()["updated"]) == (0, 0)
    listing = client.get("/api/admin/nouns", headers=admin_headers).json()
    assert listing["nouns"][0]["singolare"] == FORMS


def test_adjective_import_validates_gendered_forms(
    client: TestClient,
    admin_headers: dict[str, str],
) -> None:
    response = _import(
        client,
        admin_headers,
        "adjectives",
        {"adjectives": {"bello": {"maschile": {"singolare": FORMS, "plurale": FORMS}}}},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert {"field": "adjectives.bello.femminile", "message": "Field required"} in body["details"]


def test_verb_import_rejects_wrong_types(
    client: TestClient,
    admin_headers: dict[str, str],
) -> None:
    bad = {"regular": "yes", "reflexive": False, "tr_ptBR": ""}

    response = _import(client, admin_headers, "verbs", {"entries": {"gatto": bad}})

    assert response.status_code == 400
    fields = {detail["field"] for detail in response.json()["details"]}
    assert fields == {"entries.gatto.regular", "entries.gatto.tr_ptBR"}


def test_unknown_resolution_value_is_rejected(
    client: TestClient,
    admin_headers: dict[str, str],
) -> None:
    response = _import(
        client,
        admin_headers,
        "verbs",
        {"entries": {"gatto": GATTO_OLD}, "resolveConflicts": {"gatto": "merge"}},
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "resolveConflicts.gatto"


def test_conjugation_import_requires_existing_verbs(
    client: TestClient,
    admin_headers: dict[str, str],
) -> None:
    _import(client, admin_headers, "verbs", {"verbs": {"essere": GATTO_OLD}})

    response = _import(
        client,
        admin_headers,
        "conjugations",
        {"conjugations": {"essere": ESSERE_TABLE, "volare": ESSERE_TABLE}},
    )

    assert response.status_code == 400
    assert response.json() == {
        "error": "Some verbs do not exist in the database",
        "missingVerbs": ["volare"],
    }


def test_conjugation_conflicts_use_verb_name(
    client: TestClient,
    admin_headers: dict[str, str],
) -> None:
    _import(client, admin_headers, "verbs", {"verbs": {"essere": GATTO_OLD}})
    created = _import(client, admin_headers, "conjugations", {"entries": {"essere": ESSERE_TABLE}})
    assert created.json()["created"] == 1

    updated_table = {"Participio": {"Passato": "stato/a"}}
    response = _import(
        client,
        admin_headers,
        "conjugations",
        {"entries": {"essere": updated_table}},
    )

    assert response.status_code == 409
    (conflict,) = response.json()["conflicts"]
    assert conflict == {"verbName": "essere", "existing": ESSERE_TABLE, "new": updated_table}


def test_storage_failure_reports_progress(
    client: TestClient,
    admin_headers: dict[str, str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _import(client, admin_headers, "verbs", {"verbs": {"gatto": GATTO_OLD}})

    def broken_update(self: SqlAlchemyVerbRepository, key: str, payload: object) -> None:
        raise StorageError(f"verb update failed for {key}")

    monkeypatch.setattr(SqlAlchemyVerbRepository, "update_by_key", broken_update)

    response = _import(
        client,
        admin_headers,
        "verbs",
        {"verbs": {"gatto": GATTO_NEW, "cane": CANE}, "resolveConflicts": {"gatto": "replace"}},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "created": 1, "updated": 0}
    listing = client.get("/api/admin/verbs", headers=admin_headers).json()
    assert listing["total"] == 2


def test_delete_entry(client: TestClient, admin_headers: dict[str, str]) -> None:
    _import(client, admin_headers, "verbs", {"verbs": {"essere": GATTO_OLD}})
    _import(client, admin_headers, "conjugations", {"conjugations": {"essere": ESSERE_TABLE}})

    deleted = client.delete("/api/admin/verbs/essere", headers=admin_headers)
    missing = client.delete("/api/admin/verbs/essere", headers=admin_headers)

    assert deleted.status_code == 200
    assert missing.status_code == 404
    assert "error" in missing.json()
    conjugations = client.get("/api/admin/conjugations", headers=admin_headers).json()
    assert conjugations == {"conjugations": [], "total": 0}


def test_patch_updates_and_renames_noun(
    client: TestClient,
    admin_headers: dict[str, str],
) -> None:
    gato = {"singolare": FORMS, "plurale": FORMS}
    _import(client, admin_headers, "nouns", {"nouns": {"gato": gato}})
    plural = {"it": "i gatti", "pt": "os gatos", "en": "the cats"}

    response = client.patch(
        "/api/admin/nouns/gato",
        json={"italian": "gatto", "singolare": FORMS, "plurale": plural},
        headers=admin_headers,
    )

    assert response.status_code == 200
    entry = response.json()["entry"]
    assert (entry["italian"], entry["plurale"]) == ("gatto", plural)
    listing = client.get("/api/admin/nouns", headers=admin_headers).json()
    assert [noun["italian"] for noun in listing["nouns"]] == ["gatto"]


def test_patch_rename_onto_existing_key_conflicts(
    client: TestClient,
    admin_headers: dict[str, str],
) -> None:
    _import(client, admin_headers, "verbs", {"verbs": {"gatto": GATTO_OLD, "cane": CANE}})

    response = client.patch(
        "/api/admin/verbs/cane",
        json={**CANE, "italian": "gatto"},
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert "error" in response.json()
    listing = client.get("/api/admin/verbs", headers=admin_headers).json()
    assert sorted(verb["italian"] for verb in listing["verbs"]) == ["cane", "gatto"]


def test_patch_unknown_entry_is_not_found(
    client: TestClient,
    admin_headers: dict[str, str],
) -> None:
    response = client.patch("/api/admin/verbs/volare", json=CANE, headers=admin_headers)

    assert response.status_code == 404
    assert "error" in response.json()


def test_patch_validates_body(client: TestClient, admin_headers: dict[str, str]) -> None:
    _import(client, admin_headers, "verbs", {"verbs": {"cane": CANE}})

    response = client.patch(
        "/api/admin/verbs/cane",
        json={**CANE, "regular": "yes"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"


def test_health_needs_no_token(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
