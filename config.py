from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv


BACKENDS = ("sqlite", "postgres")


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once at startup."""

    db_backend: str = "sqlite"
    db_path: str = "bank.db"
    database_url: Optional[str] = None
    log_level: str = "INFO"
    http_host: str = "127.0.0.1"
    http_port: int = 8080
    telegram_token: Optional[str] = None
    discord_token: Optional[str] = None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build `Settings` from the environment.

    When `environ` is omitted, a `.env` file in the working directory is
    loaded first (existing variables win) and `os.environ` is used.
    """

    if environ is None:
        load_dotenv()
        environ = os.environ

    backend = environ.get("DB_BACKEND", "sqlite").strip().lower()
    if backend not in BACKENDS:
        raise ValueError(
            f"DB_BACKEND must be one of {', '.join(BACKENDS)}, got {backend!r}."
        )

    raw_port = environ.get("HTTP_PORT", "8080")
    try:
        port = int(raw_port)
    except ValueError:
        raise ValueError(f"HTTP_PORT must be an integer, got {raw_port!r}.") from None

    return Settings(
        db_backend=backend,
        db_path=environ.get("DB_PATH", "bank.db"),
        database_url=environ.get("DATABASE_URL") or None,
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
        http_host=environ.get("HTTP_HOST", "127.0.0.1"),
        http_port=port,
        telegram_token=environ.get("TELEGRAM_TOKEN") or None,
        discord_token=environ.get("DISCORD_TOKEN") or None,
    )
