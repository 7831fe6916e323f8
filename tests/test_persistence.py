from datetime import datetime, timezone
from pathlib import Path

from fulboquiz.persistence import StatsStore
from fulboquiz.scoring import StatsSummary


def test_save_and_get_summary(tmp_path: Path):
    store = StatsStore(tmp_path / "stats" / "fulboquiz.sqlite")
    stamp = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    store.save_summary("bingo", StatsSummary(total_answered=4, average_score_percent=63, best_streak=2), updated_at=stamp)

    record = store.get_summary("bingo")
    assert record is not None
    assert record.updated_at == stamp
    assert record.summary.total_answered == 4
    assert record.summary.average_score_percent == 63
    assert store.get_summary("trivia") is None


def test_latest_summary_replaces_previous(tmp_path: Path):
    store = StatsStore(tmp_path / "fulboquiz.sqlite")

    store.save_summary("age", StatsSummary(total_answered=1, average_score_percent=80, best_streak=1))
    store.save_summary("age", StatsSummary(total_answered=2, average_score_percent=40, best_streak=1))
    store.save_summary("bingo", StatsSummary(total_answered=1, average_score_percent=100, best_streak=1))

    records = store.list_summaries()

    assert [record.mode for record in records] == ["age", "bingo"]
    assert records[0].summary.total_answered == 2


def test_store_reopens_existing_database(tmp_path: Path):
    path = tmp_path / "fulboquiz.sqlite"
    StatsStore(path).save_summary("team", StatsSummary(total_answered=3, average_score_percent=33, best_streak=0))

    assert StatsStore(path).get_summary("team").summary.best_streak == 0
