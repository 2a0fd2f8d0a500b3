"""
Text Parser

Parses user-typed workout text:
- first line checked for a workout type (AMRAP 20, EMOM 12, 3 Rounds, Hero WOD)
- upper-case lines start a new titled block
- every other line becomes a movement, resolved against the movement
  dictionary and decoded for reps, load, distance and duration

Unrecognised lines are never dropped; they become name-only movements.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable, List, Optional

from .base import BaseParser, WorkoutInputError
from .line_classifier import ClassifiedLines, LineKind
from .models import ParsedMovement, ParsedWorkout, WorkoutBlock
from .movement_resolver import MovementResolver, MovementSource, load_default_movements
from .notation import decode_movement_line

logger = logging.getLogger(__name__)

MovementLoader = Callable[[], Awaitable[Iterable[MovementSource]]]


@dataclass
class _BlockDraft:
    """Mutable block while lines are being collected"""
    title: Optional[str] = None
    rounds: Optional[int] = None
    format: Optional[str] = None
    lines: List[ParsedMovement] = field(default_factory=list)

    @property
    def has_content(self) -> bool:
        return bool(self.lines or self.title)

    def build(self) -> WorkoutBlock:
        return WorkoutBlock(
            title=self.title,
            rounds=self.rounds,
            format=self.format,
            lines=tuple(self.lines),
        )


class TextParser(BaseParser):
    """Parser for freeform workout text"""

    def __init__(self, movements: Optional[Iterable[MovementSource]] = None):
        if movements is None:
            movements = load_default_movements()
        self.resolver = MovementResolver(movements)

    @staticmethod
    def source_name() -> str:
        return "text"

    def can_parse(self, payload: Any) -> bool:
        """Check if this parser can handle the payload"""
        return isinstance(payload, str)

    def parse(self, payload: Any) -> ParsedWorkout:
        """Parse workout text into a ParsedWorkout"""
        if not isinstance(payload, str):
            raise self.reject(payload, "a string")

        classified = ClassifiedLines(payload)
        if classified.is_empty:
            return ParsedWorkout(type="Unknown")

        descriptor = classified.descriptor
        blocks: List[WorkoutBlock] = []
        current = _BlockDraft()

        if descriptor:
            logger.debug(f"Detected workout type {descriptor.type!r} from first line")
            current.rounds = descriptor.rounds
            current.format = descriptor.format
            current.lines.extend(self.parse_movement_line(line) for line in descriptor.inline_movements)

        for line in classified:
            if line.kind == LineKind.TYPE_DESCRIPTOR:
                continue

            if line.kind == LineKind.SECTION_HEADER:
                if current.has_content:
                    blocks.append(current.build())
                    current = _BlockDraft(title=line.text)
                else:
                    # Round count from the descriptor belongs to the first real block
                    current = _BlockDraft(title=line.text, rounds=current.rounds, format=current.format)
                continue

            current.lines.append(self.parse_movement_line(line.text))

        if current.has_content:
            blocks.append(current.build())

        return ParsedWorkout(
            type=descriptor.type if descriptor else "Unknown",
            duration=descriptor.duration if descriptor else None,
            workout_blocks=tuple(blocks),
        )

    def parse_movement_line(self, line: str) -> ParsedMovement:
        """Decode notation and resolve the movement name for one line."""
        decoded = decode_movement_line(line)
        if not decoded.phrase:
            # Nothing left to name once notation is removed; keep the line as written
            return ParsedMovement(name=line.strip())

        resolved = self.resolver.resolve(decoded.phrase)
        return ParsedMovement(
            name=resolved.name,
            reps=decoded.reps,
            weight=decoded.weight,
            distance=decoded.distance,
            duration_seconds=decoded.duration_seconds,
            minute=decoded.minute,
            movement_id=resolved.movement_id,
        )


def parse_workout_text(text: str, movements: Optional[Iterable[MovementSource]] = None) -> ParsedWorkout:
    """
    Parse workout text.

    Args:
        text: Raw, line-delimited workout text
        movements: Movement dictionary; the bundled dictionary when omitted

    Raises:
        WorkoutInputError: If text is not a string
    """
    return TextParser(movements).parse(text)


async def parse_text_with_dictionary(text: str, load_movements: MovementLoader) -> ParsedWorkout:
    """
    Await the caller's dictionary loader, then parse.

    Only the dictionary fetch suspends; parsing itself runs to completion.

    Raises:
        WorkoutInputError: If text is not a string (checked before loading)
    """
    if not isinstance(text, str):
        raise WorkoutInputError(f"text parser expects a string, got {type(text).__name__}")

    parser = TextParser(await load_movements())
    logger.debug(f"Parsing with {len(parser.resolver)} movements")
    return parser.parse(text)
