"""Canonical player and question models shared across ingestion and games."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PlayerRecord(BaseModel):
    """Player payload as supplied by a data source; never mutated by the engine."""

    name: str = ""
    nationality: str = ""
    team: str = ""
    age: str = ""
    photo_url: Optional[str] = None
    position: Optional[str] = None
    market_value: Optional[str] = None
    number: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> tuple[str, str]:
        """Identity used for de-duplication (name + team)."""

        return (self.name, self.team)


class TriviaQuestion(BaseModel):
    question: str
    answers: List[str] = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)
