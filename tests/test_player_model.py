import pytest
from pydantic import ValidationError

from fulboquiz.models import PlayerRecord, TriviaQuestion


def test_player_record_is_frozen():
    record = PlayerRecord(
        name="Rodri",
        nationality="Spain",
        team="Manchester City",
        age="22/06/1996 (28)",
    )

    assert record.key == ("Rodri", "Manchester City")
    assert record.photo_url is None

    with pytest.raises((TypeError, ValidationError)):
        record.team = "Atletico Madrid"  # type: ignore[misc]


def test_trivia_question_requires_an_answer():
    with pytest.raises(ValidationError):
        TriviaQuestion(question="Empty", answers=[])

    question = TriviaQuestion(question="Campeones 2022", answers=["Argentina"])
    assert question.answers == ["Argentina"]
