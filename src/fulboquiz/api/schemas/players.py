from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class PlayerResponse(BaseModel):
    name: str
    nationality: str
    team: str
    age: str
    photo_url: Optional[str] = None


class CategoryResponse(BaseModel):
    id: str
    title: str
    kind: str


class SampleResponse(BaseModel):
    requested: int
    players: List[PlayerResponse]
