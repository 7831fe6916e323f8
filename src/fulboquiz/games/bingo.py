"""Bingo mode: place each drawn player into one of the category cells."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from fulboquiz.config.categories import BINGO_CATEGORIES, Category, classify
from fulboquiz.config.settings import DEFAULT_BINGO_SECONDS, DEFAULT_POOL_SIZE
from fulboquiz.errors import EmptyPoolError, FetchError, SessionLoadingError, SessionStateError
from fulboquiz.games.base import GameSession, SessionState
from fulboquiz.ingest.sources import PlayerSource
from fulboquiz.models import PlayerRecord
from fulboquiz.pool.sampling import sample_players
from fulboquiz.scoring.state import StatsCallback


logger = logging.getLogger(__name__)

POINTS_PER_CELL = 10
WRONG_PLACEMENT_PENALTY = 5


@dataclass
class BingoCell:
    category: Category
    filled: bool = False
    occupant_name: Optional[str] = None

    def fill(self, player_name: str) -> None:
        if self.filled:
            raise SessionStateError(f"cell {self.category.id!r} is already filled")
        self.filled = True
        self.occupant_name = player_name


@dataclass(frozen=True)
class GameError:
    player_name: str
    attempted_category_title: str
    correct_category_titles: Tuple[str, ...]


@dataclass(frozen=True)
class PlacementOutcome:
    player_name: str
    category_id: str
    correct: bool
    filled_category_ids: Tuple[str, ...]
    points_delta: int
    finished: bool = False


def _fallback_hints(player: PlayerRecord) -> Tuple[str, ...]:
    hints: List[str] = []
    if player.nationality:
        hints.append(f"Nacionalidad: {player.nationality}")
    if player.team:
        hints.append(f"Equipo: {player.team}")
    if player.age:
        hints.append(f"Edad: {player.age}")
    return tuple(hints)


class BingoSession(GameSession):
    """Bingo board bound to one player source.

    The board holds one cell per category. A correct placement fills every
    unfilled cell the player satisfies; a wrong one uses up the clicked cell.
    Cells never unfill within a round.
    """

    mode = "bingo"
    max_points_per_answer = POINTS_PER_CELL

    def __init__(
        self,
        source: PlayerSource,
        *,
        categories: Sequence[Category] = BINGO_CATEGORIES,
        pool_size: int = DEFAULT_POOL_SIZE,
        countdown_seconds: int = DEFAULT_BINGO_SECONDS,
        rng: Optional[random.Random] = None,
        on_stats: Optional[StatsCallback] = None,
        countdown_interval: Optional[float] = None,
    ):
        super().__init__(rng=rng, on_stats=on_stats, countdown_interval=countdown_interval)
        self.source = source
        self.categories = tuple(categories)
        self.pool_size = pool_size
        self.countdown_seconds = countdown_seconds
        self.time_left = countdown_seconds
        self.cells: List[BingoCell] = self._new_board()
        self.errors: List[GameError] = []
        self.queue: List[PlayerRecord] = []
        self.queue_index = 0
        self.refill_error: Optional[str] = None

    def _new_board(self) -> List[BingoCell]:
        return [BingoCell(category=category) for category in self.categories]

    @property
    def current_player(self) -> Optional[PlayerRecord]:
        if self.loading or self.queue_index >= len(self.queue):
            return None
        return self.queue[self.queue_index]

    @property
    def filled_count(self) -> int:
        return sum(1 for cell in self.cells if cell.filled)

    def cell(self, category_id: str) -> BingoCell:
        for cell in self.cells:
            if cell.category.id == category_id:
                return cell
        raise SessionStateError(f"no bingo cell for category {category_id!r}")

    async def refill(self) -> None:
        """Draw a fresh balanced queue from the source."""

        async with self._loading():
            raw = await self.source.get_players(self.pool_size)
            queue = sample_players(raw, self.pool_size, self.categories, rng=self.rng)
        self.queue = queue
        self.queue_index = 0
        self.refill_error = None
        logger.info("Bingo queue refilled with %d players", len(queue))

    async def start(self) -> None:
        if self.loading:
            raise SessionLoadingError("bingo session is loading")
        self._begin_round()
        self.time_left = self.countdown_seconds
        self.cells = self._new_board()
        self.errors = []
        self.queue = []
        self.queue_index = 0
        self.refill_error = None
        await self.refill()
        self._go()

    async def restart(self) -> None:
        await self.start()

    async def _advance(self) -> None:
        if self.queue_index + 1 < len(self.queue):
            self.queue_index += 1
            return
        self.queue_index = len(self.queue)
        try:
            await self.refill()
        except (FetchError, EmptyPoolError) as exc:
            # The session stays playable; the host retries with refill().
            logger.warning("Bingo queue refill failed: %s", exc)
            self.refill_error = str(exc)

    async def place(self, category_id: str) -> PlacementOutcome:
        self._require_in_progress()
        player = self.current_player
        if player is None:
            raise SessionStateError("no current player; refill the queue first")
        target = self.cell(category_id)
        if target.filled:
            raise SessionStateError(f"cell {category_id!r} is already filled")

        matches = classify(player, self.categories)
        matched_ids = {category.id for category in matches}

        if target.category.id in matched_ids:
            filled = [cell for cell in self.cells if not cell.filled and cell.category.id in matched_ids]
            for cell in filled:
                cell.fill(player.name)
            delta = POINTS_PER_CELL * len(filled)
            self.score.record(delta, keeps_streak=True, correct=len(filled))
            outcome_ids = tuple(cell.category.id for cell in filled)
            correct = True
        else:
            target.fill(player.name)
            before = self.score.points
            self.score.record(-WRONG_PLACEMENT_PENALTY, keeps_streak=False, wrong=1)
            delta = int(self.score.points - before)
            hints = tuple(category.title for category in matches) or _fallback_hints(player)
            self.errors.append(
                GameError(
                    player_name=player.name,
                    attempted_category_title=target.category.title,
                    correct_category_titles=hints,
                )
            )
            outcome_ids = (target.category.id,)
            correct = False

        self.answered += 1
        self._emit_stats()

        if all(cell.filled for cell in self.cells):
            self._finish()
        else:
            await self._advance()

        return PlacementOutcome(
            player_name=player.name,
            category_id=category_id,
            correct=correct,
            filled_category_ids=outcome_ids,
            points_delta=delta,
            finished=self.state is SessionState.FINISHED,
        )

    async def skip(self) -> None:
        self._require_in_progress()
        await self._advance()

    def tick(self, round_id: Optional[int] = None) -> bool:
        if self._is_stale(round_id) or self.state is not SessionState.IN_PROGRESS:
            return True
        self.time_left = max(0, self.time_left - 1)
        if self.time_left == 0:
            logger.info("Bingo countdown exhausted with %d/%d cells filled", self.filled_count, len(self.cells))
            self._finish()
            return True
        return False


__all__ = [
    "BingoCell",
    "BingoSession",
    "GameError",
    "PlacementOutcome",
    "POINTS_PER_CELL",
    "WRONG_PLACEMENT_PENALTY",
]
