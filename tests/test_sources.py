import json
from pathlib import Path

import httpx
import pytest

from fulboquiz.errors import FetchError
from fulboquiz.ingest import (
    DirectoryPlayerSource,
    FileQuestionSource,
    HttpPlayerSource,
    HttpQuestionSource,
    load_team_file,
    player_from_payload,
    questions_from_payload,
)


CITY_PAYLOAD = {
    "team": "Manchester City",
    "players": [
        {
            "name": "Erling Haaland",
            "nationalities": ["Norway", "England"],
            "age": "21/07/2000 (24)",
            "photo_url": "https://img.test/haaland.png",
            "position": "Centre-Forward",
            "number": 9,
        },
        {"name": "Phil Foden", "nationality": "England", "age": "28/05/2000 (24)"},
    ],
}

QUESTIONS_PAYLOAD = {
    "questions": [
        {"gameData": {"question": "Porteros de Argentina 2022", "answers": ["Emiliano Martinez"]}},
        {"gameData": {"question": "Sin respuestas", "answers": []}},
        {"question": "Sin gameData", "answers": ["Ok"]},
    ]
}


def _write(path: Path, payload) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_player_from_payload_keeps_first_nationality():
    player = player_from_payload(CITY_PAYLOAD["players"][0], team="Manchester City")

    assert player.nationality == "Norway"
    assert player.team == "Manchester City"
    assert player.number == "9"
    assert player.market_value is None


def test_load_team_file_errors(tmp_path: Path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    with pytest.raises(FetchError):
        load_team_file(broken)
    with pytest.raises(FetchError):
        load_team_file(tmp_path / "missing.json")


@pytest.mark.anyio
async def test_directory_source_skips_missing_files(tmp_path: Path):
    _write(tmp_path / "premier" / "manchester-city.json", CITY_PAYLOAD)
    source = DirectoryPlayerSource(
        tmp_path,
        teams=[("premier", "manchester-city.json"), ("premier", "fc-arsenal.json")],
    )

    players = await source.get_players(30)

    assert [player.name for player in players] == ["Erling Haaland", "Phil Foden"]
    assert players[1].nationality == "England"


@pytest.mark.anyio
async def test_directory_source_without_any_file_fails(tmp_path: Path):
    source = DirectoryPlayerSource(tmp_path, teams=[("premier", "fc-arsenal.json")])

    with pytest.raises(FetchError):
        await source.get_players(30)


@pytest.mark.anyio
async def test_http_player_source_uses_team_endpoint():
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request.url.path)
        if request.url.path == "/api/get/premier/manchester-city.json":
            return httpx.Response(200, json=CITY_PAYLOAD)
        return httpx.Response(404, json={"detail": "not found"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        source = HttpPlayerSource(
            "http://data.test/",
            teams=[("premier", "manchester-city.json"), ("seriea", "juventus-turin.json")],
            client=client,
        )
        players = await source.get_players(2)

    assert requested == ["/api/get/premier/manchester-city.json", "/api/get/seriea/juventus-turin.json"]
    assert len(players) == 2


@pytest.mark.anyio
async def test_http_player_source_fails_when_nothing_loads():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        source = HttpPlayerSource("http://data.test", teams=[("premier", "fc-chelsea.json")], client=client)
        with pytest.raises(FetchError):
            await source.get_players(10)


def test_questions_from_payload_skips_malformed_entries():
    questions = questions_from_payload(QUESTIONS_PAYLOAD)

    assert [question.question for question in questions] == ["Porteros de Argentina 2022", "Sin gameData"]


@pytest.mark.anyio
async def test_file_question_source(tmp_path: Path):
    path = _write(tmp_path / "questions.json", QUESTIONS_PAYLOAD)

    questions = await FileQuestionSource(path).get_questions(1)

    assert len(questions) == 1
    assert questions[0].answers == ["Emiliano Martinez"]


@pytest.mark.anyio
async def test_http_question_source():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/quiz/questions"
        assert request.url.params["count"] == "5"
        return httpx.Response(200, json=QUESTIONS_PAYLOAD)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        questions = await HttpQuestionSource("http://data.test", client=client).get_questions(5)

    assert len(questions) == 2


@pytest.mark.anyio
async def test_http_question_source_wraps_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(FetchError):
            await HttpQuestionSource("http://data.test", client=client).get_questions(5)
