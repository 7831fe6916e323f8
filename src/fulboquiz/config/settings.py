"""Runtime settings read from the environment, plus static game tables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple


logger = logging.getLogger(__name__)

_DATA_DIR_ENV = "FULBOQUIZ_DATA_DIR"
_QUESTIONS_PATH_ENV = "FULBOQUIZ_QUESTIONS_PATH"
_API_BASE_URL_ENV = "FULBOQUIZ_API_BASE_URL"
_DB_PATH_ENV = "FULBOQUIZ_DB_PATH"
_POOL_SIZE_ENV = "FULBOQUIZ_POOL_SIZE"
_BINGO_SECONDS_ENV = "FULBOQUIZ_BINGO_SECONDS"
_TRIVIA_SECONDS_ENV = "FULBOQUIZ_TRIVIA_SECONDS"
_MAX_SESSIONS_ENV = "FULBOQUIZ_MAX_SESSIONS"

DEFAULT_POOL_SIZE = 30
DEFAULT_BINGO_SECONDS = 60
DEFAULT_TRIVIA_SECONDS = 120
DEFAULT_MAX_SESSIONS = 200
QUESTIONS_PER_GAME = 10

# Teams loaded for a session pool, as (league, team file) pairs.
FEATURED_TEAMS: Tuple[Tuple[str, str], ...] = (
    ("premier", "manchester-city.json"),
    ("premier", "fc-arsenal.json"),
    ("premier", "fc-liverpool.json"),
    ("premier", "fc-chelsea.json"),
    ("laligaes", "real-madrid.json"),
    ("laligaes", "fc-barcelona.json"),
    ("laligaes", "atletico-madrid.json"),
    ("bundesliga", "bayern-munich.json"),
    ("bundesliga", "borussia-dortmund.json"),
    ("bundesliga", "bayer-leverkusen.json"),
    ("seriea", "juventus-turin.json"),
    ("seriea", "ac-mailand.json"),
    ("seriea", "inter-mailand.json"),
    ("ligue1", "pars-saint-germain-fc.json"),
    ("ligue1", "olympique-de-marsella.json"),
)


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True)
class Settings:
    data_dir: Optional[Path]
    questions_path: Optional[Path]
    api_base_url: Optional[str]
    db_path: Path
    pool_size: int = DEFAULT_POOL_SIZE
    bingo_seconds: int = DEFAULT_BINGO_SECONDS
    trivia_seconds: int = DEFAULT_TRIVIA_SECONDS
    max_sessions: int = DEFAULT_MAX_SESSIONS


def load_settings() -> Settings:
    data_dir = _env_str(_DATA_DIR_ENV)
    questions_path = _env_str(_QUESTIONS_PATH_ENV)
    return Settings(
        data_dir=Path(data_dir) if data_dir else None,
        questions_path=Path(questions_path) if questions_path else None,
        api_base_url=_env_str(_API_BASE_URL_ENV),
        db_path=Path(_env_str(_DB_PATH_ENV, "fulboquiz.sqlite") or "fulboquiz.sqlite"),
        pool_size=_env_int(_POOL_SIZE_ENV, DEFAULT_POOL_SIZE, min_value=1),
        bingo_seconds=_env_int(_BINGO_SECONDS_ENV, DEFAULT_BINGO_SECONDS, min_value=1),
        trivia_seconds=_env_int(_TRIVIA_SECONDS_ENV, DEFAULT_TRIVIA_SECONDS, min_value=1),
        max_sessions=_env_int(_MAX_SESSIONS_ENV, DEFAULT_MAX_SESSIONS, min_value=1),
    )


__all__ = [
    "DEFAULT_BINGO_SECONDS",
    "DEFAULT_MAX_SESSIONS",
    "DEFAULT_POOL_SIZE",
    "DEFAULT_TRIVIA_SECONDS",
    "FEATURED_TEAMS",
    "QUESTIONS_PER_GAME",
    "Settings",
    "load_settings",
]
