"""Runtime settings, read from ``OMS_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str = f"sqlite:///{DATA_DIR / 'oms.db'}"
    log_level: str = "INFO"
    log_json: bool = False
    sql_echo: bool = False
    host: str = "127.0.0.1"
    port: int = 8000

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        defaults = Settings()
        return Settings(
            database_url=env.get("OMS_DATABASE_URL", defaults.database_url),
            log_level=env.get("OMS_LOG_LEVEL", defaults.log_level).upper(),
            log_json=_flag(env.get("OMS_LOG_JSON"), defaults.log_json),
            sql_echo=_flag(env.get("OMS_SQL_ECHO"), defaults.sql_echo),
            host=env.get("OMS_HOST", defaults.host),
            port=int(env.get("OMS_PORT", defaults.port)),
        )


def _flag(raw: str | None, default: bool) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY
