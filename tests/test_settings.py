import logging
from pathlib import Path

from fulboquiz.config import load_settings
from fulboquiz.config.settings import DEFAULT_BINGO_SECONDS, DEFAULT_POOL_SIZE


def test_defaults_without_environment(monkeypatch):
    for name in (
        "FULBOQUIZ_DATA_DIR",
        "FULBOQUIZ_QUESTIONS_PATH",
        "FULBOQUIZ_API_BASE_URL",
        "FULBOQUIZ_DB_PATH",
        "FULBOQUIZ_POOL_SIZE",
        "FULBOQUIZ_BINGO_SECONDS",
        "FULBOQUIZ_TRIVIA_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.data_dir is None
    assert settings.api_base_url is None
    assert settings.db_path == Path("fulboquiz.sqlite")
    assert settings.pool_size == DEFAULT_POOL_SIZE
    assert settings.trivia_seconds == 120


def test_environment_overrides(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("FULBOQUIZ_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("FULBOQUIZ_POOL_SIZE", "12")
    monkeypatch.setenv("FULBOQUIZ_TRIVIA_SECONDS", "0")

    settings = load_settings()

    assert settings.data_dir == tmp_path
    assert settings.pool_size == 12
    assert settings.trivia_seconds == 1


def test_invalid_int_falls_back_with_warning(monkeypatch, caplog):
    monkeypatch.setenv("FULBOQUIZ_BINGO_SECONDS", "soon")

    with caplog.at_level(logging.WARNING, logger="fulboquiz.config.settings"):
        settings = load_settings()

    assert settings.bingo_seconds == DEFAULT_BINGO_SECONDS
    assert "FULBOQUIZ_BINGO_SECONDS" in caplog.text
