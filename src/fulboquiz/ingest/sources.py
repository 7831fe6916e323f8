"""Player and question sources consumed by the game sessions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple

import httpx

from fulboquiz.config.settings import FEATURED_TEAMS
from fulboquiz.errors import FetchError
from fulboquiz.ingest.players import (
    load_questions_file,
    load_team_file,
    players_from_team_payload,
    questions_from_payload,
)
from fulboquiz.models import PlayerRecord, TriviaQuestion


logger = logging.getLogger(__name__)


class PlayerSource(Protocol):
    async def get_players(self, count: int) -> List[PlayerRecord]:
        """Return a raw candidate pool; callers re-validate and sample it down to ``count``."""
        ...


class QuestionSource(Protocol):
    async def get_questions(self, count: int) -> List[TriviaQuestion]:
        ...


def _warn_if_short(players: Sequence[PlayerRecord], count: int, origin: str) -> None:
    if len(players) < count:
        logger.warning("%s returned %d players, fewer than the %d requested", origin, len(players), count)


class StaticPlayerSource:
    """In-memory pool, mainly for tests and seeded demos."""

    def __init__(self, players: Sequence[PlayerRecord]):
        self._players = list(players)
        self.calls = 0

    async def get_players(self, count: int) -> List[PlayerRecord]:
        self.calls += 1
        return list(self._players)


class DirectoryPlayerSource:
    """Reads ``<root>/<league>/<team>.json`` files written by the scrapers."""

    def __init__(self, root: Path, teams: Sequence[Tuple[str, str]] = FEATURED_TEAMS):
        self.root = Path(root)
        self.teams = tuple(teams)

    async def get_players(self, count: int) -> List[PlayerRecord]:
        players: List[PlayerRecord] = []
        last_error: Optional[FetchError] = None
        for league, team_file in self.teams:
            path = self.root / league / team_file
            try:
                players.extend(load_team_file(path))
            except FetchError as exc:
                logger.error("Error loading %s/%s: %s", league, team_file, exc)
                last_error = exc
        if not players:
            raise FetchError(f"no players could be loaded from {self.root}") from last_error
        _warn_if_short(players, count, str(self.root))
        return players


class HttpPlayerSource:
    """Fetches team files from the ``/api/get/{league}/{team}`` endpoint."""

    def __init__(
        self,
        base_url: str,
        teams: Sequence[Tuple[str, str]] = FEATURED_TEAMS,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.teams = tuple(teams)
        self._client = client
        self._timeout = timeout

    async def _fetch_team(self, client: httpx.AsyncClient, league: str, team_file: str) -> List[PlayerRecord]:
        resp = await client.get(f"{self.base_url}/api/get/{league}/{team_file}")
        resp.raise_for_status()
        payload = resp.json()
        if not isinstance(payload, dict):
            logger.warning("Invalid data format for %s/%s", league, team_file)
            return []
        return players_from_team_payload(payload)

    async def get_players(self, count: int) -> List[PlayerRecord]:
        players: List[PlayerRecord] = []
        last_error: Optional[Exception] = None
        client = self._client or httpx.AsyncClient(timeout=self._timeout)
        try:
            for league, team_file in self.teams:
                try:
                    players.extend(await self._fetch_team(client, league, team_file))
                except (httpx.HTTPError, ValueError) as exc:
                    logger.error("Error fetching %s/%s: %s", league, team_file, exc)
                    last_error = exc
        finally:
            if self._client is None:
                await client.aclose()
        if not players:
            raise FetchError(f"no players could be fetched from {self.base_url}") from last_error
        _warn_if_short(players, count, self.base_url)
        return players


class StaticQuestionSource:
    def __init__(self, questions: Sequence[TriviaQuestion]):
        self._questions = list(questions)

    async def get_questions(self, count: int) -> List[TriviaQuestion]:
        return self._questions[:count]


class FileQuestionSource:
    def __init__(self, path: Path):
        self.path = Path(path)

    async def get_questions(self, count: int) -> List[TriviaQuestion]:
        return load_questions_file(self.path)[:count]


class HttpQuestionSource:
    def __init__(self, base_url: str, *, client: Optional[httpx.AsyncClient] = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self._client = client
        self._timeout = timeout

    async def get_questions(self, count: int) -> List[TriviaQuestion]:
        client = self._client or httpx.AsyncClient(timeout=self._timeout)
        try:
            resp = await client.get(f"{self.base_url}/api/quiz/questions", params={"count": count})
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise FetchError(f"could not fetch questions: {exc}") from exc
        finally:
            if self._client is None:
                await client.aclose()
        if not isinstance(payload, dict):
            raise FetchError("questions payload is not a JSON object")
        return questions_from_payload(payload)[:count]


__all__ = [
    "DirectoryPlayerSource",
    "FileQuestionSource",
    "HttpPlayerSource",
    "HttpQuestionSource",
    "PlayerSource",
    "QuestionSource",
    "StaticPlayerSource",
    "StaticQuestionSource",
]
