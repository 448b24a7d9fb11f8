"""Runtime settings read from the environment.

A ``.env`` file in the working directory is honoured when present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Default SQLite location: <repo>/data, next to src/.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def _env(key: str, default: str) -> str:
    value = os.getenv(key)
    return value if value not in (None, "") else default


@dataclass(frozen=True)
class Settings:
    database_url: str
    media_base_url: str
    clock_timezone: str
    log_level: str


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        database_url=_env(
            "MARKETPLACE_DATABASE_URL", f"sqlite:///{_DATA_DIR / 'marketplace.db'}"
        ),
        media_base_url=_env(
            "MARKETPLACE_MEDIA_BASE_URL", "http://localhost:9000/marketplace"
        ).rstrip("/"),
        clock_timezone=_env("MARKETPLACE_CLOCK_TIMEZONE", "UTC"),
        log_level=_env("MARKETPLACE_LOG_LEVEL", "INFO").upper(),
    )
