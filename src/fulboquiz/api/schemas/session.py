from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field


SessionMode = Literal["bingo", "age", "nationality", "team", "trivia"]


class CreateSessionRequest(BaseModel):
    seed: int | None = None


class PlaceRequest(BaseModel):
    category_id: str = Field(..., min_length=1)


class GuessRequest(BaseModel):
    age: int = Field(..., ge=0, le=120)


class OptionRequest(BaseModel):
    option: str


class SelectionRequest(BaseModel):
    indices: List[int] = Field(..., min_length=2)


class FreeTextRequest(BaseModel):
    text: str


class StatsResponse(BaseModel):
    mode: str
    total_answered: int
    average_score_percent: int
    best_streak: int
