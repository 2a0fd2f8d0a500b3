"""
Template Parser

Imports workout templates stored as semi-structured JSON (e.g. from the
workout content library) into the canonical ParsedWorkout.

Template shape:
    {
        "type": "MetCon",
        "duration": "20 minutes",
        "priority": "high",
        "notes": ["..."],
        "scaling_guidelines": {"beginner": "..."},
        "workout": [
            {"name": "Back Squat", "reps": [5, 5, 5], "weight": {"rx": "75%"}},
            {"name": "Chipper", "rounds": 3, "format": "for time",
             "movements": [{"name": "Thrusters", "reps": 21}, ...]},
            [{"name": "Burpees", "reps": "Max"}]
        ]
    }
"""

import json
import logging
from typing import Any, Mapping, Optional, Tuple, Union

from .base import BaseParser, TemplateFormatError
from .models import ParsedMovement, ParsedWorkout, WorkoutBlock
from .notation import format_weight, normalize_reps

logger = logging.getLogger(__name__)

UNKNOWN_MOVEMENT = "Unknown Movement"


class TemplateParser(BaseParser):
    """Parser for stored template descriptions"""

    @staticmethod
    def source_name() -> str:
        return "template"

    def can_parse(self, payload: Any) -> bool:
        """Check if this parser can handle the payload"""
        return isinstance(payload, Mapping)

    def parse(self, payload: Any) -> ParsedWorkout:
        """Parse a template description into a ParsedWorkout"""
        if payload is None:
            return ParsedWorkout(type="Unknown")

        if isinstance(payload, (str, bytes)):
            payload = self._decode_json(payload)

        if not isinstance(payload, Mapping):
            raise self.reject(payload, "an object")

        workout = payload.get('workout')
        blocks = [self._parse_block(entry) for entry in workout] if isinstance(workout, list) else []
        notes = payload.get('notes')

        return ParsedWorkout(
            type=_optional_text(payload.get('type')) or "Unknown",
            duration=_optional_text(payload.get('duration')),
            priority=_optional_text(payload.get('priority')),
            workout_blocks=tuple(blocks),
            notes=tuple(str(note) for note in notes) if isinstance(notes, list) else (),
            scaling_guidelines=_guidelines(payload.get('scaling_guidelines')),
        )

    def _decode_json(self, payload: Any) -> Any:
        try:
            return json.loads(payload)
        except json.JSONDecodeError as e:
            logger.debug(f"Invalid template JSON: {e}")
            raise TemplateFormatError(f"Invalid template JSON: {e}") from e

    def _parse_block(self, entry: Any) -> WorkoutBlock:
        """Map one entry of the template's workout array to a block."""
        if isinstance(entry, list):
            return WorkoutBlock(lines=tuple(self._parse_movement(item) for item in entry))

        if not isinstance(entry, Mapping):
            # Keep the entry visible rather than dropping it
            return WorkoutBlock(lines=(ParsedMovement(name=str(entry)),))

        movements = entry.get('movements')
        if isinstance(movements, list):
            return WorkoutBlock(
                title=_optional_text(entry.get('name')),
                rounds=_optional_int(entry.get('rounds')),
                format=_optional_text(entry.get('format')),
                lines=tuple(self._parse_movement(item) for item in movements),
            )

        if entry.get('name'):
            # Single movement: the block is titled with the movement name
            return WorkoutBlock(
                title=_optional_text(entry.get('name')),
                rounds=_optional_int(entry.get('rounds')),
                format=_optional_text(entry.get('format')),
                lines=(self._parse_movement(entry),),
            )

        return WorkoutBlock(
            rounds=_optional_int(entry.get('rounds')),
            format=_optional_text(entry.get('format')),
        )

    def _parse_movement(self, data: Any) -> ParsedMovement:
        if not isinstance(data, Mapping):
            return ParsedMovement(name=str(data) if data else UNKNOWN_MOVEMENT)

        return ParsedMovement(
            name=_optional_text(data.get('name')) or UNKNOWN_MOVEMENT,
            reps=normalize_reps(data.get('reps')),
            weight=format_weight(data.get('weight')),
            notes=_text_list(data.get('notes')) or (),
            modality=_optional_text(data.get('modality')),
            minute=_optional_text(data.get('minute')),
            distance=_optional_text(data.get('distance')),
            duration_seconds=_optional_int(data.get('duration_seconds')),
            scaling=_text_list(data.get('scaling')),
            movement_id=_movement_id(data.get('movement_id')),
        )


def _optional_text(value: Any) -> Optional[str]:
    if value is None or value == '':
        return None
    return str(value)


def _optional_int(value: Any) -> Optional[int]:
    reps = normalize_reps(value)
    return reps if isinstance(reps, int) else None


def _guidelines(value: Any) -> Optional[dict]:
    if isinstance(value, Mapping) and value:
        return {str(key): val for key, val in value.items()}
    return None


def _movement_id(value: Any) -> Optional[Union[int, str]]:
    if isinstance(value, bool):
        return None
    return value if isinstance(value, (int, str)) else None


def _text_list(value: Any) -> Optional[Tuple[str, ...]]:
    """Lists pass through as tuples; a lone string becomes a one-item list."""
    if isinstance(value, list):
        return tuple(str(item) for item in value)
    if isinstance(value, str) and value:
        return (value,)
    return None


def parse_workout_description(description: Any) -> ParsedWorkout:
    """
    Import a stored template description.

    Raises:
        WorkoutInputError: If description is not an object
        TemplateFormatError: If description is a string that is not JSON
    """
    return TemplateParser().parse(description)

