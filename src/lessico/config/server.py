"""HTTP server defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import optional_int_env_var

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


@dataclass(frozen=True, slots=True)
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def get_server_config() -> ServerConfig:
    return ServerConfig(
        host=os.getenv("LESSICO_HOST") or DEFAULT_HOST,
        port=optional_int_env_var("LESSICO_PORT", DEFAULT_PORT),
    )
