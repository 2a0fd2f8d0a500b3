"""
Stress tests for the text parser with messy, real-world workout text.

The parser must never raise on string input: every line either classifies
as a header or survives as a movement, and output always renders.
"""

import pytest

from wod_parser.parsers import ParsedWorkout, parse_workout_text
from wod_parser.services.export_service import ExportService


# Longer than the interpreter's integer string conversion limit
OVERSIZED = "1" * 5000

ODD_INPUTS = [
    ":",
    "::::",
    "@@@",
    "@ 70%",
    "10 @",
    "1:",
    ":99",
    "-",
    "- - -",
    "21-",
    "-21",
    "Pull-ups: 21--15",
    "Squat 0x10",
    "Squat 99999999x10",
    "3x",
    "x",
    "Max",
    "MAX",
    "Even:",
    "Odd: ",
    "min 3:",
    "95/",
    "/65",
    "Thrusters 95/65/45",
    "1.5.5m Run",
    "1/2 Bodyweight Deadlift",
    "\U0001F4AA Burpees",
    "\t\t",
    "\r\n\r\n",
    "AMRAP",
    "AMRAP 20: 5 Pull-ups, , 10 Push-ups",
    "Burpees " * 500,
    "×××",
    "– 400m Run –",
    f"{OVERSIZED} Burpees",
    f"{OVERSIZED} rounds\nThrusters",
    f"Squat 3x{OVERSIZED}",
    f"Squat {OVERSIZED}x3",
    f"Pull-ups: {OVERSIZED}",
    f"Pull-ups: {OVERSIZED}-15-9",
    f"Plank {OVERSIZED}s",
    f"AMRAP {OVERSIZED}\n5 Pull-ups",
]


@pytest.mark.parametrize("text", ODD_INPUTS)
def test_never_raises(text, movements):
    workout = parse_workout_text(text, movements)

    assert isinstance(workout, ParsedWorkout)
    assert isinstance(ExportService.render_text(workout), str)


@pytest.mark.parametrize("text", ODD_INPUTS)
def test_round_trip(text, movements):
    workout = parse_workout_text(text, movements)
    assert ParsedWorkout.from_dict(workout.to_dict()) == workout


# ---------------------------------------------------------------------------
# Realistic whiteboard text
# ---------------------------------------------------------------------------

WHITEBOARD = """\
3 Rounds For Time

WARM UP
400m Run
10 Air Squats

METCON
Thrusters: 21-15-9 @ 95/65
Pull-ups: 21-15-9
Max Double-unders

COOLDOWN
Plank :45
"""


class TestWhiteboard:
    """A full class whiteboard with warm-up, metcon and cooldown."""

    def test_structure(self, movements):
        workout = parse_workout_text(WHITEBOARD, movements)

        assert workout.type == "MetCon"
        assert [b.title for b in workout.workout_blocks] == ["WARM UP", "METCON", "COOLDOWN"]
        assert workout.workout_blocks[0].rounds == 3
        assert len(workout.movements) == 6

    def test_movements(self, movements):
        warm_up, metcon, cooldown = parse_workout_text(WHITEBOARD, movements).workout_blocks

        assert warm_up.lines[0].distance == "400m"
        assert metcon.lines[0].name == "Thruster"
        assert metcon.lines[0].reps == (21, 15, 9)
        assert metcon.lines[0].weight == "(95/65)"
        assert metcon.lines[2].reps == "Max"
        assert cooldown.lines[0].duration_seconds == 45

    def test_renders(self, movements):
        text = ExportService.render_text(parse_workout_text(WHITEBOARD, movements))

        assert text.splitlines()[0] == "3 Rounds for time of:"
        assert "21-15-9 Thruster @ (95/65)" in text
        assert "Run, 400m" in text
