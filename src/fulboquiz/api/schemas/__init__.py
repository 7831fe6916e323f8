"""Pydantic models for API I/O."""

from .players import CategoryResponse, PlayerResponse, SampleResponse
from .session import (
    CreateSessionRequest,
    FreeTextRequest,
    GuessRequest,
    OptionRequest,
    PlaceRequest,
    SelectionRequest,
    SessionMode,
    StatsResponse,
)

__all__ = [
    "CategoryResponse",
    "CreateSessionRequest",
    "FreeTextRequest",
    "GuessRequest",
    "OptionRequest",
    "PlaceRequest",
    "PlayerResponse",
    "SampleResponse",
    "SelectionRequest",
    "SessionMode",
    "StatsResponse",
]
