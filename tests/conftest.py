"""
Test fixtures for wod-parser.

Provides a small movement dictionary and stored-template samples so parser
tests stay deterministic and independent of the bundled dictionary.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

# Repo root: .../wod-parser
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import wod_parser...`
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from wod_parser.parsers.models import MovementEntry


# ---------------------------------------------------------------------------
# Movement dictionary
# ---------------------------------------------------------------------------


@pytest.fixture
def movement_rows() -> List[Dict[str, Any]]:
    """Catalog rows as the movement catalog returns them."""
    return [
        {
            "id": 1,
            "name": "Thruster",
            "description": "Front squat into push press",
            "common_aliases": ["thrusters", "barbell thruster"],
            "variations": {},
            "equipment_required": True,
            "default_reps": 21,
            "common_sets": 3,
            "common_weight_range": "95/65 lb",
        },
        {
            "id": 2,
            "name": "Pull-up",
            "common_aliases": ["pullup", "pull up", "chin-up"],
            "default_reps": 10,
        },
        {
            "id": 3,
            "name": "Back Squat",
            "common_aliases": ["bs"],
            "default_reps": 5,
            "common_sets": 5,
        },
        {
            "id": 4,
            "name": "Burpee",
            "common_aliases": [],
        },
        {
            "id": 5,
            "name": "Run",
            "common_aliases": ["running", "jog"],
        },
    ]


@pytest.fixture
def movements(movement_rows) -> List[MovementEntry]:
    """The same dictionary as validated MovementEntry records."""
    return [MovementEntry.model_validate(row) for row in movement_rows]


# ---------------------------------------------------------------------------
# Stored templates
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_template() -> Dict[str, Any]:
    """Template mixing single-movement blocks and round-grouped blocks."""
    return {
        "type": "MetCon",
        "duration": "20 minutes",
        "priority": "high",
        "notes": ["Scale pull-ups to ring rows", "Rest as needed"],
        "scaling_guidelines": {"time_cap": "20 minutes", "beginner_load": "45/35 lb"},
        "workout": [
            {
                "name": "Back Squat",
                "reps": [5, 5, 5],
                "weight": {"rx": "75%"},
            },
            {
                "name": "Chipper",
                "rounds": 3,
                "format": "for time",
                "movements": [
                    {
                        "name": "Thrusters",
                        "reps": 21,
                        "weight": {"rx": "95 lb", "scaled": "65 lb"},
                    },
                    {"name": "Pull-ups", "reps": "Max", "scaling": ["Ring rows", "Jumping pull-ups"]},
                    {"name": "Run", "distance": "400m", "modality": "cardio"},
                ],
            },
            {
                "name": "Finisher",
                "movements": [
                    {"name": "Plank", "duration_seconds": 60, "minute": "Even"},
                    {"name": "Hollow Rock", "reps": [20, 15, 10], "notes": ["Keep lower back down"]},
                ],
            },
        ],
    }
