"""Session state machines for every quiz mode."""

from .base import GameSession, SessionState
from .bingo import BingoCell, BingoSession, GameError, PlacementOutcome
from .countdown import Countdown
from .quiz import (
    NO_TEAM,
    AgeQuizSession,
    AnswerOutcome,
    ChoiceQuizSession,
    NationalityQuizSession,
    TeamQuizSession,
)
from .trivia import TriviaSession

__all__ = [
    "AgeQuizSession",
    "AnswerOutcome",
    "BingoCell",
    "BingoSession",
    "ChoiceQuizSession",
    "Countdown",
    "GameError",
    "GameSession",
    "NO_TEAM",
    "NationalityQuizSession",
    "PlacementOutcome",
    "SessionState",
    "TeamQuizSession",
    "TriviaSession",
]
