"""FastAPI dependencies: admin authentication and unit-of-work wiring."""

from __future__ import annotations

import logging
from typing import Annotated, Any

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lessico.app import UnitOfWorkFactory, default_unit_of_work_factory
from lessico.config import AuthConfig, get_auth_config

log = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_settings() -> AuthConfig:
    return get_auth_config()


def require_admin(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    settings: Annotated[AuthConfig, Depends(get_auth_settings)],
) -> dict[str, Any]:
    """Decode the bearer token and insist on a truthy ``admin`` claim.

    Raises:
        HTTPException: 401 when the token is missing or invalid, 403 when the
            token is valid but does not grant admin access.
    """

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        claims: dict[str, Any] = jwt.decode(
            credentials.credentials,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.InvalidTokenError as exc:
        log.info("Rejected bearer token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    if not claims.get("admin"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return claims


def get_unit_of_work_factory() -> UnitOfWorkFactory:
    return default_unit_of_work_factory()


AdminClaims = Annotated[dict[str, Any], Depends(require_admin)]
UnitOfWorkFactoryDep = Annotated[UnitOfWorkFactory, Depends(get_unit_of_work_factory)]
