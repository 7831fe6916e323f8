import asyncio
import random

import pytest

from fulboquiz.games import BingoSession, Countdown, SessionState
from fulboquiz.ingest import StaticPlayerSource

from tests.helpers import diverse_pool


def test_countdown_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        Countdown(lambda round_id: True, interval=0)


@pytest.mark.anyio
async def test_countdown_ticks_until_told_to_stop():
    seen = []

    def tick(round_id: int) -> bool:
        seen.append(round_id)
        return len(seen) == 3

    countdown = Countdown(tick, interval=0.001)
    task = countdown.start(7)
    await task

    assert seen == [7, 7, 7]
    assert not countdown.running


@pytest.mark.anyio
async def test_countdown_cancel_stops_ticking():
    seen = []
    countdown = Countdown(lambda round_id: seen.append(round_id) or False, interval=0.001)
    task = countdown.start(1)

    countdown.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert not countdown.running
    assert seen == []


@pytest.mark.anyio
async def test_bingo_countdown_runs_in_background():
    session = BingoSession(
        StaticPlayerSource(diverse_pool(10)),
        countdown_seconds=2,
        rng=random.Random(0),
        countdown_interval=0.001,
    )
    await session.start()
    assert session.countdown_running

    for _ in range(200):
        if session.state is SessionState.FINISHED:
            break
        await asyncio.sleep(0.005)

    assert session.state is SessionState.FINISHED
    assert session.time_left == 0
    assert not session.countdown_running


@pytest.mark.anyio
async def test_restart_replaces_the_running_countdown():
    session = BingoSession(
        StaticPlayerSource(diverse_pool(10)),
        countdown_seconds=1000,
        rng=random.Random(0),
        countdown_interval=0.001,
    )
    await session.start()
    await asyncio.sleep(0.02)

    await session.restart()

    assert session.time_left > 990
    assert session.countdown_running
    session.close()
    assert not session.countdown_running
