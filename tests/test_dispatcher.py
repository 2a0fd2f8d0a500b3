"""Tests for choosing a parser by payload type."""
import pytest

from wod_parser.parsers import WorkoutInputError, get_parsers, parse_workout


def test_parsers_registered():
    assert [parser.source_name() for parser in get_parsers([])] == ["text", "template"]


def test_text_payload(movements):
    workout = parse_workout("AMRAP 20\n5 Pull-ups", movements)
    assert workout.type == "AMRAP"
    assert workout.movements[0].name == "Pull-up"


def test_template_payload(sample_template):
    assert parse_workout(sample_template).type == "MetCon"


def test_none_payload():
    assert parse_workout(None).type == "Unknown"


@pytest.mark.parametrize("payload", [42, 1.5, ["AMRAP 20"], b"AMRAP 20"])
def test_unsupported_payload(payload):
    with pytest.raises(WorkoutInputError, match="No parser accepts"):
        parse_workout(payload, [])
