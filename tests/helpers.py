from __future__ import annotations

import asyncio
from typing import List, Sequence

from fulboquiz.errors import FetchError
from fulboquiz.models import PlayerRecord


NATIONALITIES = ["Spain", "England", "France", "Germany", "Brazil", "Portugal", "Argentina", "Italy"]
TEAMS = ["Manchester City", "Real Madrid", "FC Barcelona", "Juventus", "Bayern Munich"]


def make_player(
    name: str,
    *,
    nationality: str = "Argentina",
    team: str = "Boca Juniors",
    age: str = "27",
    photo_url: str | None = None,
) -> PlayerRecord:
    return PlayerRecord(name=name, nationality=nationality, team=team, age=age, photo_url=photo_url)


def diverse_pool(size: int = 30) -> List[PlayerRecord]:
    """Valid players with photos, cycling through nationalities, teams and ages 19-34."""

    return [
        make_player(
            f"Player {index}",
            nationality=NATIONALITIES[index % len(NATIONALITIES)],
            team=TEAMS[index % len(TEAMS)],
            age=str(19 + index % 16),
            photo_url=f"https://img.test/{index}.png",
        )
        for index in range(size)
    ]


class GatedPlayerSource:
    """Player source that blocks until ``gate`` is set."""

    def __init__(self, players: Sequence[PlayerRecord]):
        self.players = list(players)
        self.entered = asyncio.Event()
        self.gate = asyncio.Event()

    async def get_players(self, count: int) -> List[PlayerRecord]:
        self.entered.set()
        await self.gate.wait()
        return list(self.players)


class SwitchablePlayerSource:
    """Serves ``players`` until ``failing`` is set, then raises ``FetchError``."""

    def __init__(self, players: Sequence[PlayerRecord]):
        self.players = list(players)
        self.failing = False

    async def get_players(self, count: int) -> List[PlayerRecord]:
        if self.failing:
            raise FetchError("player source down")
        return list(self.players)
