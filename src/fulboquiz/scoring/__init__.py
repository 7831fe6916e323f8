"""Scoring policies and per-session score state."""

from .policies import (
    AGE_MAX_POINTS,
    match_answer,
    score_age_guess,
    score_exact_choice,
    score_free_text,
    suggest_answers,
)
from .state import ScoreState, StatsCallback, StatsSummary

__all__ = [
    "AGE_MAX_POINTS",
    "ScoreState",
    "StatsCallback",
    "StatsSummary",
    "match_answer",
    "score_age_guess",
    "score_exact_choice",
    "score_free_text",
    "suggest_answers",
]
