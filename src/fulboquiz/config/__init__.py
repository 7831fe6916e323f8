"""Configuration helpers for bingo categories and runtime settings."""

from .categories import (
    BINGO_CATEGORIES,
    Category,
    classify,
    first_match,
    get_category,
    iter_categories,
)
from .settings import FEATURED_TEAMS, QUESTIONS_PER_GAME, Settings, load_settings

__all__ = [
    "BINGO_CATEGORIES",
    "Category",
    "FEATURED_TEAMS",
    "QUESTIONS_PER_GAME",
    "Settings",
    "classify",
    "first_match",
    "get_category",
    "iter_categories",
    "load_settings",
]
