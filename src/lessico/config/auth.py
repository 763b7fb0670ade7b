"""Admin token configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import require_env_vars

DEFAULT_JWT_ALGORITHM = "HS256"


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """Holds the shared secret used to verify admin bearer tokens."""

    jwt_secret: str
    jwt_algorithm: str = DEFAULT_JWT_ALGORITHM


def get_auth_config() -> AuthConfig:
    values = require_env_vars(("JWT_SECRET",))
    return AuthConfig(
        jwt_secret=values["JWT_SECRET"],
        jwt_algorithm=os.getenv("JWT_ALGORITHM") or DEFAULT_JWT_ALGORITHM,
    )
