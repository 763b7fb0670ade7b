from __future__ import annotations

from typing import TYPE_CHECKING

import jwt
import pytest

if TYPE_CHECKING:
    from fastapi.testclient import TestClient


def test_missing_token_is_unauthorized(client: TestClient) -> None:
    response = client.get("/api/admin/verbs")

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def test_token_signed_with_another_secret_is_rejected(client: TestClient) -> None:
    token = jwt.encode({"admin": True}, "some-other-secret-of-sufficient-length", algorithm="HS256")

    response = client.get("/api/admin/verbs", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


@pytest.mark.parametrize("claims", [{"sub": "learner"}, {"sub": "learner", "admin": False}])
def test_non_admin_token_is_forbidden(
    client: TestClient,
    jwt_secret: str,
    claims: dict[str, object],
) -> None:
    token = jwt.encode(claims, jwt_secret, algorithm="HS256")

    response = client.post(
        "/api/admin/verbs/import",
        json={"entries": {}},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 403
    assert response.json() == {"error": "Admin access required"}


def test_admin_token_is_accepted(client: TestClient, admin_headers: dict[str, str]) -> None:
    response = client.get("/api/admin/verbs", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"verbs": [], "total": 0}


def test_missing_secret_is_a_server_error(
    client: TestClient,
    admin_headers: dict[str, str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("JWT_SECRET")

    response = client.get("/api/admin/verbs", headers=admin_headers)

    assert response.status_code == 500
