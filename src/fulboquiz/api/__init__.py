"""REST API exposing the quiz sessions to a host UI."""

from __future__ import annotations

import logging
import random
from dataclasses import asdict
from typing import Any, Callable, Dict, Optional, Type, TypeVar
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from fulboquiz.api.schemas import (
    CategoryResponse,
    CreateSessionRequest,
    FreeTextRequest,
    GuessRequest,
    OptionRequest,
    PlaceRequest,
    PlayerResponse,
    SampleResponse,
    SelectionRequest,
    SessionMode,
    StatsResponse,
)
from fulboquiz.config import BINGO_CATEGORIES, Settings, load_settings
from fulboquiz.errors import (
    EmptyPoolError,
    FetchError,
    FulboQuizError,
    SessionStateError,
    UnparseableFieldError,
)
from fulboquiz.games import (
    AgeQuizSession,
    BingoSession,
    ChoiceQuizSession,
    GameSession,
    NationalityQuizSession,
    SessionState,
    TeamQuizSession,
    TriviaSession,
)
from fulboquiz.ingest import (
    DirectoryPlayerSource,
    FileQuestionSource,
    HttpPlayerSource,
    HttpQuestionSource,
    PlayerSource,
    QuestionSource,
)
from fulboquiz.models import PlayerRecord
from fulboquiz.persistence import StatsStore
from fulboquiz.pool import sample_players
from fulboquiz.scoring import StatsSummary


logger = logging.getLogger(__name__)

S = TypeVar("S", bound=GameSession)

_ERROR_STATUS: tuple[tuple[Type[FulboQuizError], int], ...] = (
    (EmptyPoolError, 503),
    (FetchError, 502),
    (SessionStateError, 409),
    (UnparseableFieldError, 422),
)


def _status_for(exc: FulboQuizError) -> int:
    for error_type, status in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status
    return 500


def _player_to_dict(player: Optional[PlayerRecord]) -> Optional[dict[str, Any]]:
    if player is None:
        return None
    return PlayerResponse.model_validate(player.model_dump()).model_dump()


def session_to_dict(session_id: str, session: GameSession) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "session_id": session_id,
        "mode": session.mode,
        "state": session.state.value,
        "loading": session.loading,
        "answered": session.answered,
        "score": session.score.as_dict(),
    }
    if isinstance(session, BingoSession):
        payload.update(
            {
                "time_left": session.time_left,
                "current_player": _player_to_dict(session.current_player),
                "refill_error": session.refill_error,
                "cells": [
                    {
                        "category_id": cell.category.id,
                        "title": cell.category.title,
                        "filled": cell.filled,
                        "occupant_name": cell.occupant_name,
                    }
                    for cell in session.cells
                ],
                "errors": [asdict(error) for error in session.errors],
            }
        )
    elif isinstance(session, AgeQuizSession):
        payload.update(
            {
                "current_player": _player_to_dict(session.current_player),
                "options": session.options,
                "answer_shown": session.answer_shown,
                "actual_age": session.actual_age if session.answer_shown else None,
            }
        )
    elif isinstance(session, NationalityQuizSession):
        payload.update(
            {
                "current_player": _player_to_dict(session.current_player),
                "options": session.options,
                "answer_shown": session.answer_shown,
            }
        )
    elif isinstance(session, TeamQuizSession):
        payload.update(
            {
                "players": [_player_to_dict(player) for player in session.players],
                "answer_shown": session.answer_shown,
                "correct_team": session.correct_team if session.answer_shown else None,
            }
        )
    elif isinstance(session, TriviaSession):
        question = session.current_question
        payload.update(
            {
                "question": question.question if question else None,
                "answer_count": len(question.answers) if question else 0,
                "found": list(session.found),
                "submitted": session.submitted,
                "last_score": session.last_score,
                "time_left": session.time_left,
                "answers": list(question.answers) if question and session.submitted else None,
            }
        )
    return payload


def _default_player_source(settings: Settings) -> Optional[PlayerSource]:
    if settings.data_dir is not None:
        return DirectoryPlayerSource(settings.data_dir)
    if settings.api_base_url:
        return HttpPlayerSource(settings.api_base_url)
    return None


def _default_question_source(settings: Settings) -> Optional[QuestionSource]:
    if settings.questions_path is not None:
        return FileQuestionSource(settings.questions_path)
    if settings.api_base_url:
        return HttpQuestionSource(settings.api_base_url)
    return None


def create_app(
    settings: Optional[Settings] = None,
    *,
    player_source: Optional[PlayerSource] = None,
    question_source: Optional[QuestionSource] = None,
    store: Optional[StatsStore] = None,
) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="fulboquiz")
    app.state.settings = settings
    app.state.player_source = player_source or _default_player_source(settings)
    app.state.question_source = question_source or _default_question_source(settings)
    app.state.stats_store = store or StatsStore(settings.db_path)
    sessions: Dict[str, GameSession] = {}
    app.state.sessions = sessions

    @app.exception_handler(FulboQuizError)
    async def engine_error(request: Request, exc: FulboQuizError) -> JSONResponse:
        status = _status_for(exc)
        if status >= 500:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status, content={"detail": str(exc), "error": type(exc).__name__})

    @app.exception_handler(ValueError)
    async def bad_value(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    def _players() -> PlayerSource:
        source = app.state.player_source
        if source is None:
            raise HTTPException(status_code=503, detail="No player source configured")
        return source

    def _questions() -> QuestionSource:
        source = app.state.question_source
        if source is None:
            raise HTTPException(status_code=503, detail="No question source configured")
        return source

    def _stats_sink(mode: str) -> Callable[[StatsSummary], None]:
        def sink(summary: StatsSummary) -> None:
            app.state.stats_store.save_summary(mode, summary)

        return sink

    def _build_session(mode: SessionMode, rng: random.Random) -> GameSession:
        on_stats = _stats_sink(mode)
        if mode == "bingo":
            return BingoSession(
                _players(),
                pool_size=settings.pool_size,
                countdown_seconds=settings.bingo_seconds,
                rng=rng,
                on_stats=on_stats,
            )
        if mode == "age":
            return AgeQuizSession(_players(), rng=rng, on_stats=on_stats)
        if mode == "nationality":
            return NationalityQuizSession(_players(), rng=rng, on_stats=on_stats)
        if mode == "team":
            return TeamQuizSession(_players(), rng=rng, on_stats=on_stats)
        return TriviaSession(
            _questions(),
            seconds_per_question=settings.trivia_seconds,
            rng=rng,
            on_stats=on_stats,
        )

    def _make_room() -> None:
        if len(sessions) < settings.max_sessions:
            return
        finished = [sid for sid, session in sessions.items() if session.state is SessionState.FINISHED]
        # Finished sessions go first, then the oldest; dicts keep insertion order.
        for session_id in finished + [sid for sid in sessions if sid not in finished]:
            if len(sessions) < settings.max_sessions:
                break
            sessions.pop(session_id).close()
            logger.info("Evicted session %s", session_id)

    def _session(session_id: str) -> GameSession:
        session = sessions.get(session_id)
        if session is None:
            raise HTTPException(status_code=404, detail="Session not found")
        return session

    def _session_of(session_id: str, kind: Type[S]) -> S:
        session = _session(session_id)
        if not isinstance(session, kind):
            raise HTTPException(
                status_code=409,
                detail=f"Action not available in {session.mode} sessions",
            )
        return session

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/categories", response_model=list[CategoryResponse])
    async def categories() -> list[CategoryResponse]:
        return [
            CategoryResponse(id=category.id, title=category.title, kind=category.kind)
            for category in BINGO_CATEGORIES
        ]

    @app.get("/players/sample", response_model=SampleResponse)
    async def sample(count: int = Query(30, ge=1, le=200), seed: int | None = None) -> SampleResponse:
        raw = await _players().get_players(count)
        players = sample_players(raw, count, rng=random.Random(seed))
        return SampleResponse(
            requested=count,
            players=[PlayerResponse.model_validate(player.model_dump()) for player in players],
        )

    @app.get("/stats", response_model=list[StatsResponse])
    async def stats() -> list[StatsResponse]:
        return [
            StatsResponse(mode=record.mode, **record.summary.model_dump())
            for record in app.state.stats_store.list_summaries()
        ]

    @app.post("/sessions/{mode}")
    async def create_session(mode: SessionMode, body: CreateSessionRequest | None = None):
        seed = body.seed if body else None
        session = _build_session(mode, random.Random(seed))
        _make_room()
        session_id = uuid4().hex
        sessions[session_id] = session
        logger.info("Created %s session %s", mode, session_id)
        return session_to_dict(session_id, session)

    @app.get("/sessions/{session_id}")
    async def get_session(session_id: str):
        return session_to_dict(session_id, _session(session_id))

    @app.delete("/sessions/{session_id}")
    async def delete_session(session_id: str):
        session = _session(session_id)
        session.close()
        del sessions[session_id]
        return {"session_id": session_id, "deleted": True}

    @app.post("/sessions/{session_id}/start")
    async def start(session_id: str):
        session = _session(session_id)
        await session.start()
        return session_to_dict(session_id, session)

    @app.post("/sessions/{session_id}/restart")
    async def restart(session_id: str):
        session = _session(session_id)
        await session.restart()
        return session_to_dict(session_id, session)

    @app.post("/sessions/{session_id}/tick")
    async def tick(session_id: str):
        session = _session(session_id)
        session.tick()
        return session_to_dict(session_id, session)

    @app.post("/sessions/{session_id}/place")
    async def place(session_id: str, body: PlaceRequest):
        session = _session_of(session_id, BingoSession)
        outcome = await session.place(body.category_id)
        return {"outcome": asdict(outcome), "session": session_to_dict(session_id, session)}

    @app.post("/sessions/{session_id}/skip")
    async def skip(session_id: str):
        session = _session_of(session_id, BingoSession)
        await session.skip()
        return session_to_dict(session_id, session)

    @app.post("/sessions/{session_id}/refill")
    async def refill(session_id: str):
        session = _session_of(session_id, BingoSession)
        await session.refill()
        return session_to_dict(session_id, session)

    @app.post("/sessions/{session_id}/guess")
    async def guess(session_id: str, body: GuessRequest):
        session = _session_of(session_id, AgeQuizSession)
        outcome = session.submit_guess(body.age)
        return {"outcome": asdict(outcome), "session": session_to_dict(session_id, session)}

    @app.post("/sessions/{session_id}/select")
    async def select(session_id: str, body: OptionRequest):
        session = _session_of(session_id, NationalityQuizSession)
        outcome = session.select_option(body.option)
        return {"outcome": asdict(outcome), "session": session_to_dict(session_id, session)}

    @app.post("/sessions/{session_id}/selection")
    async def selection(session_id: str, body: SelectionRequest):
        session = _session_of(session_id, TeamQuizSession)
        outcome = session.submit_selection(body.indices)
        return {"outcome": asdict(outcome), "session": session_to_dict(session_id, session)}

    @app.post("/sessions/{session_id}/next")
    async def next_question(session_id: str):
        session = _session(session_id)
        if isinstance(session, ChoiceQuizSession):
            await session.next_question()
        elif isinstance(session, TriviaSession):
            session.next_question()
        else:
            raise HTTPException(status_code=409, detail="Action not available in bingo sessions")
        return session_to_dict(session_id, session)

    @app.get("/sessions/{session_id}/suggestions")
    async def suggestions(session_id: str, q: str = ""):
        session = _session_of(session_id, TriviaSession)
        return {"suggestions": session.suggestions(q)}

    @app.post("/sessions/{session_id}/answers")
    async def add_answer(session_id: str, body: FreeTextRequest):
        session = _session_of(session_id, TriviaSession)
        matched = session.add_answer(body.text)
        return {"matched": matched, "session": session_to_dict(session_id, session)}

    @app.post("/sessions/{session_id}/answers/remove")
    async def remove_answer(session_id: str, body: FreeTextRequest):
        session = _session_of(session_id, TriviaSession)
        removed = session.remove_answer(body.text)
        return {"removed": removed, "session": session_to_dict(session_id, session)}

    @app.post("/sessions/{session_id}/submit")
    async def submit(session_id: str):
        session = _session_of(session_id, TriviaSession)
        score = session.submit()
        return {"score": score, "session": session_to_dict(session_id, session)}

    return app


__all__ = ["create_app", "session_to_dict"]
