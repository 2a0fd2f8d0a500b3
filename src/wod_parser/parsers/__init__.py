"""Workout parsers and the payload dispatcher."""
from typing import Any, Iterable, List, Optional

from .base import BaseParser, TemplateFormatError, WorkoutInputError
from .models import (
    MAX_REPS,
    MovementEntry,
    ParsedMovement,
    ParsedWorkout,
    Reps,
    RepsKind,
    WorkoutBlock,
    reps_kind,
)
from .movement_resolver import MovementResolver, MovementSource, load_default_movements
from .template_parser import TemplateParser, parse_workout_description
from .text_parser import TextParser, parse_text_with_dictionary, parse_workout_text


def get_parsers(movements: Optional[Iterable[MovementSource]] = None) -> List[BaseParser]:
    """Instantiate every parser, text parser bound to the given dictionary."""
    return [TextParser(movements), TemplateParser()]


def parse_workout(payload: Any, movements: Optional[Iterable[MovementSource]] = None) -> ParsedWorkout:
    """
    Parse any supported payload: workout text or a template object.

    Raises:
        WorkoutInputError: If no parser accepts the payload
    """
    if payload is None:
        return ParsedWorkout(type="Unknown")

    for parser in get_parsers(movements):
        if parser.can_parse(payload):
            return parser.parse(payload)

    raise WorkoutInputError(f"No parser accepts payload of type {type(payload).__name__}")


__all__ = [
    "BaseParser",
    "MAX_REPS",
    "MovementEntry",
    "MovementResolver",
    "ParsedMovement",
    "ParsedWorkout",
    "Reps",
    "RepsKind",
    "TemplateFormatError",
    "TemplateParser",
    "TextParser",
    "WorkoutBlock",
    "WorkoutInputError",
    "get_parsers",
    "load_default_movements",
    "parse_text_with_dictionary",
    "parse_workout",
    "parse_workout_description",
    "parse_workout_text",
    "reps_kind",
]
