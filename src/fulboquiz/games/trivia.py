"""Free-text trivia: name as many members of an answer list as possible."""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from fulboquiz.config.settings import DEFAULT_TRIVIA_SECONDS, QUESTIONS_PER_GAME
from fulboquiz.errors import EmptyPoolError, SessionLoadingError, SessionStateError
from fulboquiz.games.base import GameSession, SessionState
from fulboquiz.ingest.sources import QuestionSource
from fulboquiz.models import TriviaQuestion
from fulboquiz.scoring.policies import (
    FREE_TEXT_STREAK_THRESHOLD,
    match_answer,
    score_free_text,
    suggest_answers,
)
from fulboquiz.scoring.state import StatsCallback


logger = logging.getLogger(__name__)


class TriviaSession(GameSession):
    mode = "trivia"

    def __init__(
        self,
        source: QuestionSource,
        *,
        total_questions: int = QUESTIONS_PER_GAME,
        seconds_per_question: int = DEFAULT_TRIVIA_SECONDS,
        rng: Optional[random.Random] = None,
        on_stats: Optional[StatsCallback] = None,
        countdown_interval: Optional[float] = None,
    ):
        super().__init__(rng=rng, on_stats=on_stats, countdown_interval=countdown_interval)
        self.source = source
        self.total_questions = total_questions
        self.seconds_per_question = seconds_per_question
        self.questions: List[TriviaQuestion] = []
        self.index = 0
        self.found: List[str] = []
        self.submitted = False
        self.last_score: Optional[float] = None
        self.time_left = seconds_per_question

    @property
    def current_question(self) -> Optional[TriviaQuestion]:
        if self.loading or self.index >= len(self.questions):
            return None
        return self.questions[self.index]

    def _question(self) -> TriviaQuestion:
        question = self.current_question
        if question is None:
            raise SessionStateError("no current question")
        return question

    def _reset_question(self) -> None:
        self.found = []
        self.submitted = False
        self.last_score = None
        self.time_left = self.seconds_per_question

    async def start(self) -> None:
        if self.loading:
            raise SessionLoadingError("trivia session is loading")
        self._begin_round()
        self.questions = []
        self.index = 0
        self._reset_question()
        async with self._loading():
            questions = await self.source.get_questions(self.total_questions)
        if not questions:
            raise EmptyPoolError("no trivia questions available")
        self.questions = list(questions)
        self._go()

    async def restart(self) -> None:
        await self.start()

    def suggestions(self, partial: str) -> List[str]:
        question = self.current_question
        if question is None or self.submitted:
            return []
        return suggest_answers(partial, question.answers, self.found)

    def add_answer(self, text: str) -> Optional[str]:
        """Store the answer ``text`` names; unmatched text is ignored and returns None."""

        self._require_in_progress()
        if self.submitted:
            raise SessionStateError("question already submitted")
        answer = match_answer(text, self._question().answers, self.found)
        if answer is not None:
            self.found.append(answer)
        return answer

    def remove_answer(self, answer: str) -> bool:
        self._require_in_progress()
        if self.submitted:
            raise SessionStateError("question already submitted")
        if answer not in self.found:
            return False
        self.found.remove(answer)
        return True

    def submit(self) -> float:
        self._require_in_progress()
        if self.submitted:
            raise SessionStateError("question already submitted")
        question = self._question()
        score = score_free_text(len(self.found), len(question.answers))
        self.answered += 1
        keeps = score >= FREE_TEXT_STREAK_THRESHOLD
        self.score.record(score, keeps_streak=keeps, correct=int(score > 0), wrong=int(score <= 0))
        self.submitted = True
        self.last_score = score
        self._emit_stats()
        return score

    def next_question(self) -> None:
        self._require_in_progress()
        if not self.submitted:
            raise SessionStateError("submit the current question first")
        if self.index + 1 >= min(self.total_questions, len(self.questions)):
            self._finish()
            return
        self.index += 1
        self._reset_question()

    def tick(self, round_id: Optional[int] = None) -> bool:
        if self._is_stale(round_id) or self.state is not SessionState.IN_PROGRESS:
            return True
        if self.submitted:
            return False
        self.time_left = max(0, self.time_left - 1)
        if self.time_left == 0:
            logger.info("Trivia question %d timed out with %d answers", self.index + 1, len(self.found))
            self.submit()
        return False


__all__ = ["TriviaSession"]
