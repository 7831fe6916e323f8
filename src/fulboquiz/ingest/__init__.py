"""Input adapters that normalize raw player and question data."""

from .normalize import (
    filter_valid_players,
    is_valid_player,
    nationality_matches,
    normalize_free_text,
    normalize_nationality,
    parse_age,
    validate_player,
)
from .players import (
    load_questions_file,
    load_team_file,
    player_from_payload,
    players_from_team_payload,
    questions_from_payload,
)
from .sources import (
    DirectoryPlayerSource,
    FileQuestionSource,
    HttpPlayerSource,
    HttpQuestionSource,
    PlayerSource,
    QuestionSource,
    StaticPlayerSource,
    StaticQuestionSource,
)

__all__ = [
    "DirectoryPlayerSource",
    "FileQuestionSource",
    "HttpPlayerSource",
    "HttpQuestionSource",
    "PlayerSource",
    "QuestionSource",
    "StaticPlayerSource",
    "StaticQuestionSource",
    "filter_valid_players",
    "is_valid_player",
    "load_questions_file",
    "load_team_file",
    "nationality_matches",
    "normalize_free_text",
    "normalize_nationality",
    "parse_age",
    "player_from_payload",
    "players_from_team_payload",
    "questions_from_payload",
    "validate_player",
]
