"""
Runtime settings loaded from the environment (and an optional .env file).
"""
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_list(name: str) -> List[str]:
    raw = os.getenv(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./tournament.db"
    sql_echo: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=list)
    min_team_count: int = 2
    max_team_count: int = 64
    max_qualifier_team_count: int = 64


@lru_cache
def get_settings() -> Settings:
    """Build settings once per process from environment variables."""
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./tournament.db"),
        sql_echo=_env_bool("SQL_ECHO"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            *_env_list("CORS_ORIGINS"),
        ],
        min_team_count=_env_int("MIN_TEAM_COUNT", 2),
        max_team_count=_env_int("MAX_TEAM_COUNT", 64),
        max_qualifier_team_count=_env_int("MAX_QUALIFIER_TEAM_COUNT", 64),
    )
