import json
from pathlib import Path

import pytest

from fulboquiz.cli import main


def _write_team(root: Path) -> None:
    target = root / "premier" / "manchester-city.json"
    target.parent.mkdir(parents=True)
    payload = {
        "team": "Manchester City",
        "players": [
            {"name": "Rodri", "nationalities": ["Spain"], "age": "22/06/1996 (28)"},
            {"name": "Phil Foden", "nationalities": ["England"], "age": "28/05/2000 (24)"},
            {"name": "Unknown", "nationalities": [], "age": ""},
        ],
    }
    target.write_text(json.dumps(payload), encoding="utf-8")


def test_sample_command_writes_json(tmp_path: Path, capsys):
    _write_team(tmp_path)
    output = tmp_path / "sample.json"

    code = main(["sample", "--data-dir", str(tmp_path), "--count", "5", "--seed", "1", "--output", str(output)])

    assert code == 0
    names = sorted(player["name"] for player in json.loads(output.read_text(encoding="utf-8")))
    assert names == ["Phil Foden", "Rodri"]
    assert "Sampled 2 of 3 fetched players" in capsys.readouterr().out


def test_sample_command_reports_missing_data(tmp_path: Path, capsys):
    code = main(["sample", "--data-dir", str(tmp_path)])

    assert code == 1
    assert "Could not build a sample" in capsys.readouterr().err


def test_sample_command_requires_a_source(monkeypatch):
    monkeypatch.delenv("FULBOQUIZ_DATA_DIR", raising=False)
    monkeypatch.delenv("FULBOQUIZ_API_BASE_URL", raising=False)

    with pytest.raises(SystemExit):
        main(["sample"])
