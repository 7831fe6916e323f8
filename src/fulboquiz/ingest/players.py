"""Adapters that turn scraped team/question JSON payloads into canonical records."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError

from fulboquiz.errors import FetchError
from fulboquiz.models import PlayerRecord, TriviaQuestion


logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_text(value: Any) -> Optional[str]:
    text = _text(value)
    return text or None


def player_from_payload(raw: Mapping[str, Any], *, team: str) -> PlayerRecord:
    """Build a record from one entry of a team file.

    Only the first listed nationality is kept; a plain ``nationality`` string is
    accepted for payloads that were already flattened.
    """

    nationalities = raw.get("nationalities")
    if isinstance(nationalities, list) and nationalities:
        nationality = _text(nationalities[0])
    else:
        nationality = _text(raw.get("nationality"))

    return PlayerRecord(
        name=_text(raw.get("name")),
        nationality=nationality,
        team=_text(raw.get("team")) or team,
        age=_text(raw.get("age")),
        photo_url=_optional_text(raw.get("photo_url")),
        position=_optional_text(raw.get("position")),
        market_value=_optional_text(raw.get("market_value")),
        number=_optional_text(raw.get("number")),
    )


def players_from_team_payload(payload: Mapping[str, Any]) -> List[PlayerRecord]:
    players = payload.get("players")
    if not isinstance(players, list):
        logger.warning("Team payload has no player list: keys=%s", sorted(payload))
        return []
    team = _text(payload.get("team"))
    return [player_from_payload(entry, team=team) for entry in players if isinstance(entry, Mapping)]


def load_team_file(path: Path) -> List[PlayerRecord]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise FetchError(f"could not read team file {path}: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise FetchError(f"team file {path} is not a JSON object")
    return players_from_team_payload(payload)


def questions_from_payload(payload: Mapping[str, Any]) -> List[TriviaQuestion]:
    """Parse ``{"questions": [{"gameData": {"question", "answers"}}]}``."""

    questions: List[TriviaQuestion] = []
    for entry in payload.get("questions") or []:
        data = entry.get("gameData", entry) if isinstance(entry, Mapping) else None
        if not isinstance(data, Mapping):
            continue
        try:
            questions.append(TriviaQuestion.model_validate(data))
        except ValidationError as exc:
            logger.warning("Skipping malformed question %r: %s", data.get("question"), exc)
    return questions


def load_questions_file(path: Path) -> List[TriviaQuestion]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise FetchError(f"could not read questions file {path}: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise FetchError(f"questions file {path} is not a JSON object")
    return questions_from_payload(payload)


__all__ = [
    "load_questions_file",
    "load_team_file",
    "player_from_payload",
    "players_from_team_payload",
    "questions_from_payload",
]
