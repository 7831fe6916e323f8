"""State shared by every quiz-mode session."""

from __future__ import annotations

import random
from contextlib import asynccontextmanager
from enum import Enum
from typing import AsyncIterator, Optional

from fulboquiz.errors import SessionLoadingError, SessionStateError
from fulboquiz.games.countdown import Countdown
from fulboquiz.scoring.state import ScoreState, StatsCallback, StatsSummary, emit_summary


class SessionState(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class GameSession:
    """Lifecycle, loading flag and countdown plumbing for a single session.

    Subclasses own their mode-specific state and call ``_begin_round`` when a
    game (re)starts and ``_finish`` when it ends.
    """

    mode = "base"
    max_points_per_answer: float = 1

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        on_stats: Optional[StatsCallback] = None,
        countdown_interval: Optional[float] = None,
    ):
        self.rng = rng or random.Random()
        self.on_stats = on_stats
        self.state = SessionState.NOT_STARTED
        self.loading = False
        self.score = ScoreState()
        self.answered = 0
        self.round_id = 0
        self._countdown = Countdown(self.tick, interval=countdown_interval) if countdown_interval else None

    @property
    def countdown_running(self) -> bool:
        return self._countdown is not None and self._countdown.running

    async def start(self) -> None:
        raise NotImplementedError

    async def restart(self) -> None:
        await self.start()

    def tick(self, round_id: Optional[int] = None) -> bool:
        """Advance the session clock by one unit; True once no more ticks are wanted."""

        raise NotImplementedError

    def _is_stale(self, round_id: Optional[int]) -> bool:
        return round_id is not None and round_id != self.round_id

    def _begin_round(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
        self.round_id += 1
        self.state = SessionState.NOT_STARTED
        self.score.reset()
        self.answered = 0

    def _go(self) -> None:
        self.state = SessionState.IN_PROGRESS
        if self._countdown is not None:
            self._countdown.start(self.round_id)

    def _finish(self) -> None:
        self.state = SessionState.FINISHED
        if self._countdown is not None:
            self._countdown.cancel()

    def _require_in_progress(self) -> None:
        if self.loading:
            raise SessionLoadingError(f"{self.mode} session is loading")
        if self.state is not SessionState.IN_PROGRESS:
            raise SessionStateError(f"{self.mode} session is {self.state.value}")

    @asynccontextmanager
    async def _loading(self) -> AsyncIterator[None]:
        if self.loading:
            raise SessionLoadingError(f"{self.mode} session is already loading")
        self.loading = True
        try:
            yield
        finally:
            self.loading = False

    def _emit_stats(self) -> StatsSummary:
        summary = self.score.summary(self.answered, self.max_points_per_answer)
        emit_summary(self.on_stats, summary)
        return summary

    def close(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()


__all__ = ["GameSession", "SessionState"]
