"""Multiple-choice quiz modes: guess the age, the nationality, or the teammates."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from fulboquiz.config.settings import QUESTIONS_PER_GAME
from fulboquiz.errors import EmptyPoolError, SessionLoadingError, SessionStateError
from fulboquiz.games.base import GameSession
from fulboquiz.ingest.normalize import filter_valid_players, parse_age
from fulboquiz.ingest.sources import PlayerSource
from fulboquiz.models import PlayerRecord
from fulboquiz.pool.sampling import sample_players
from fulboquiz.scoring.policies import AGE_MAX_POINTS, score_age_guess, score_exact_choice
from fulboquiz.scoring.state import StatsCallback


logger = logging.getLogger(__name__)

NO_TEAM = "ninguno"

AGE_QUIZ_MIN_AGE = 16
AGE_QUIZ_MAX_AGE = 45
AGE_OPTION_FLOOR = 17
AGE_OPTION_CEILING = 42
AGE_OPTION_OFFSETS = (-4, -3, -2, -1, 1, 2, 3, 4)

TEAM_QUIZ_POOL = 12
TEAM_QUIZ_MIN_POOL = 6
TEAM_QUIZ_OTHERS = 4


@dataclass(frozen=True)
class AnswerOutcome:
    points: float
    correct: bool
    expected: str


class ChoiceQuizSession(GameSession):
    """Fixed-length quiz: one question per fetched pool, one answer per question."""

    fetch_size = 20

    def __init__(
        self,
        source: PlayerSource,
        *,
        total_questions: int = QUESTIONS_PER_GAME,
        rng: Optional[random.Random] = None,
        on_stats: Optional[StatsCallback] = None,
    ):
        super().__init__(rng=rng, on_stats=on_stats)
        self.source = source
        self.total_questions = total_questions
        self.answer_shown = False

    def tick(self, round_id: Optional[int] = None) -> bool:
        return True

    async def start(self) -> None:
        if self.loading:
            raise SessionLoadingError(f"{self.mode} session is loading")
        self._begin_round()
        self.answer_shown = False
        await self._load_question()
        self._go()

    async def restart(self) -> None:
        await self.start()

    async def next_question(self) -> None:
        self._require_in_progress()
        if not self.answer_shown:
            raise SessionStateError("answer the current question first")
        if self.answered >= self.total_questions:
            self._finish()
            return
        await self._load_question()

    async def _load_question(self) -> None:
        async with self._loading():
            raw = await self.source.get_players(self.fetch_size)
            self._build_question(raw)
        self.answer_shown = False
        logger.debug("Loaded %s question %d/%d", self.mode, self.answered + 1, self.total_questions)

    def _build_question(self, players: Sequence[PlayerRecord]) -> None:
        raise NotImplementedError

    def _require_open_question(self) -> None:
        self._require_in_progress()
        if self.answer_shown:
            raise SessionStateError("question already answered")

    def _record(self, points: float, *, expected: str) -> AnswerOutcome:
        correct = points > 0
        self.answered += 1
        self.score.record(points, keeps_streak=correct, correct=int(correct), wrong=int(not correct))
        self.answer_shown = True
        self._emit_stats()
        return AnswerOutcome(points=points, correct=correct, expected=expected)


class AgeQuizSession(ChoiceQuizSession):
    mode = "age"
    max_points_per_answer = AGE_MAX_POINTS

    def __init__(self, source: PlayerSource, **kwargs):
        super().__init__(source, **kwargs)
        self.current_player: Optional[PlayerRecord] = None
        self.actual_age: Optional[int] = None
        self.options: List[int] = []

    def _age_options(self, age: int) -> List[int]:
        candidates = [
            age + offset
            for offset in AGE_OPTION_OFFSETS
            if AGE_OPTION_FLOOR <= age + offset <= AGE_OPTION_CEILING
        ]
        options = [age] + self.rng.sample(candidates, min(3, len(candidates)))
        self.rng.shuffle(options)
        return options

    def _build_question(self, players: Sequence[PlayerRecord]) -> None:
        eligible = []
        for player in filter_valid_players(players):
            age = parse_age(player.age)
            if player.photo_url and age is not None and AGE_QUIZ_MIN_AGE < age < AGE_QUIZ_MAX_AGE:
                eligible.append((player, age))
        if not eligible:
            raise EmptyPoolError("no players with a photo and a plausible age")
        player, age = self.rng.choice(eligible)
        self.current_player = player
        self.actual_age = age
        self.options = self._age_options(age)

    def submit_guess(self, guess: int) -> AnswerOutcome:
        self._require_open_question()
        if self.actual_age is None:
            raise SessionStateError("no age question loaded")
        points = score_age_guess(guess, self.actual_age)
        return self._record(points, expected=str(self.actual_age))


class NationalityQuizSession(ChoiceQuizSession):
    mode = "nationality"

    def __init__(self, source: PlayerSource, **kwargs):
        super().__init__(source, **kwargs)
        self.current_player: Optional[PlayerRecord] = None
        self.options: List[str] = []

    def _build_question(self, players: Sequence[PlayerRecord]) -> None:
        valid = filter_valid_players(players)
        with_photo = [player for player in valid if player.photo_url]
        if not with_photo:
            raise EmptyPoolError("no players with a photo")
        player = self.rng.choice(with_photo)
        nationalities = list(dict.fromkeys(p.nationality for p in valid if p.nationality))
        wrong = [nationality for nationality in nationalities if nationality != player.nationality]
        self.rng.shuffle(wrong)
        options = wrong[:3] + [player.nationality]
        self.rng.shuffle(options)
        self.current_player = player
        self.options = options

    def select_option(self, option: str) -> AnswerOutcome:
        self._require_open_question()
        if self.current_player is None:
            raise SessionStateError("no nationality question loaded")
        points = score_exact_choice(option, self.current_player.nationality)
        return self._record(points, expected=self.current_player.nationality)


class TeamQuizSession(ChoiceQuizSession):
    """Pick the players that share a team, or none if every team differs."""

    mode = "team"
    fetch_size = TEAM_QUIZ_POOL

    def __init__(self, source: PlayerSource, **kwargs):
        super().__init__(source, **kwargs)
        self.players: List[PlayerRecord] = []
        self.correct_team: str = NO_TEAM

    def _build_question(self, players: Sequence[PlayerRecord]) -> None:
        pool = sample_players(players, TEAM_QUIZ_POOL, rng=self.rng)
        if len(pool) < TEAM_QUIZ_MIN_POOL:
            raise EmptyPoolError(f"team quiz needs {TEAM_QUIZ_MIN_POOL} players, got {len(pool)}")

        by_team: Dict[str, List[PlayerRecord]] = {}
        for player in pool:
            by_team.setdefault(player.team, []).append(player)

        target = next((team for team, members in by_team.items() if len(members) >= 2), None)
        if target is None:
            shown = list(pool)
            self.rng.shuffle(shown)
            self.players = shown[:TEAM_QUIZ_MIN_POOL]
            self.correct_team = NO_TEAM
            return

        others = [player for player in pool if player.team != target][:TEAM_QUIZ_OTHERS]
        shown = by_team[target][:2] + others
        self.rng.shuffle(shown)
        self.players = shown
        self.correct_team = target

    def submit_selection(self, indices: Sequence[int]) -> AnswerOutcome:
        self._require_open_question()
        picked = sorted(set(indices))
        if len(picked) < 2:
            raise ValueError("select at least two players")
        if picked[0] < 0 or picked[-1] >= len(self.players):
            raise ValueError(f"selection out of range 0..{len(self.players) - 1}")
        teams = {self.players[index].team for index in picked}
        chosen = teams.pop() if len(teams) == 1 else NO_TEAM
        points = score_exact_choice(chosen, self.correct_team)
        return self._record(points, expected=self.correct_team)


__all__ = [
    "AgeQuizSession",
    "AnswerOutcome",
    "ChoiceQuizSession",
    "NationalityQuizSession",
    "NO_TEAM",
    "TeamQuizSession",
]
