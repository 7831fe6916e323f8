"""Per-session score bookkeeping and the stats summary handed to the host."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Callable, Optional

from pydantic import BaseModel, Field


class StatsSummary(BaseModel):
    total_answered: int = Field(..., ge=0)
    average_score_percent: int = Field(..., ge=0)
    best_streak: int = Field(..., ge=0)


StatsCallback = Callable[[StatsSummary], None]


@dataclass
class ScoreState:
    points: float = 0
    correct_count: int = 0
    wrong_count: int = 0
    streak: int = 0
    best_streak: int = 0

    def record(self, points: float, *, keeps_streak: bool, correct: int = 0, wrong: int = 0) -> None:
        """Apply one scored outcome. Points are added; the floor is 0."""

        self.points = max(0, self.points + points)
        self.correct_count += correct
        self.wrong_count += wrong
        if keeps_streak:
            self.streak += 1
            self.best_streak = max(self.best_streak, self.streak)
        else:
            self.streak = 0

    def reset(self) -> None:
        self.points = 0
        self.correct_count = 0
        self.wrong_count = 0
        self.streak = 0
        self.best_streak = 0

    def as_dict(self) -> dict:
        return asdict(self)

    def summary(self, answered: int, max_points_per_answer: float) -> StatsSummary:
        if answered <= 0 or max_points_per_answer <= 0:
            average = 0
        else:
            average = round(self.points / (answered * max_points_per_answer) * 100)
        return StatsSummary(
            total_answered=answered,
            average_score_percent=max(0, average),
            best_streak=self.best_streak,
        )


def emit_summary(callback: Optional[StatsCallback], summary: StatsSummary) -> None:
    if callback is not None:
        callback(summary)


__all__ = ["ScoreState", "StatsCallback", "StatsSummary", "emit_summary"]
