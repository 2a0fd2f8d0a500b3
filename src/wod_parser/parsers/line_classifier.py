"""
Line Classifier

Splits raw workout text into trimmed, non-empty lines and tags each one:
- type descriptor: first line only, e.g. "AMRAP 20", "3 Rounds For Time", "Hero WOD"
- section header: an all upper-case line such as "STRENGTH"
- movement: everything else
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .notation import split_inline_movements, to_count

HERO_WOD_MARKER = "HERO WOD"

ROUNDS_PATTERN = re.compile(r'(\d+)\s+rounds?\b', re.IGNORECASE)
DIGITS_PATTERN = re.compile(r'\d+')
CLOCK_PATTERN = re.compile(r'\d:\d')


class LineKind(str, Enum):
    """Classification of a single line"""
    TYPE_DESCRIPTOR = "type_descriptor"
    SECTION_HEADER = "section_header"
    MOVEMENT = "movement"


@dataclass(frozen=True)
class ClassifiedLine:
    text: str
    kind: LineKind
    index: int


@dataclass(frozen=True)
class WorkoutDescriptor:
    """What the first line says about the whole workout"""
    type: str
    duration: Optional[str] = None
    rounds: Optional[int] = None
    format: Optional[str] = None
    inline_movements: Tuple[str, ...] = ()


def split_lines(text: str) -> Iterator[str]:
    """Yield trimmed, non-empty lines."""
    for raw in text.split('\n'):
        line = raw.strip()
        if line:
            yield line


def detect_descriptor(line: str) -> Optional[WorkoutDescriptor]:
    """
    Match a line against the workout type vocabulary.

    Checked in order: hero wod, amrap, emom, metcon, "<N> rounds".
    AMRAP/EMOM take the first run of digits as a duration in minutes.
    """
    lower = line.lower()
    rounds_match = ROUNDS_PATTERN.search(line)
    rounds = to_count(rounds_match.group(1)) if rounds_match else None
    for_time = "for time" if "for time" in lower else None

    if "hero wod" in lower:
        workout_type, duration, fmt = "Hero WOD", None, for_time
    elif "amrap" in lower:
        workout_type, duration, fmt = "AMRAP", _minutes(line), "AMRAP"
        rounds = None
    elif "emom" in lower:
        workout_type, duration, fmt = "EMOM", _minutes(line), "EMOM"
        rounds = None
    elif "metcon" in lower or rounds_match is not None:
        workout_type, duration, fmt = "MetCon", None, for_time
    else:
        return None

    return WorkoutDescriptor(
        type=workout_type,
        duration=duration,
        rounds=rounds,
        format=fmt,
        inline_movements=tuple(_inline_movements(line)),
    )


def is_section_header(line: str) -> bool:
    """
    All upper-case, longer than 3 characters, and not the Hero WOD marker.

    Upper-case needs at least one cased letter, so letterless lines such as
    "21-15-9" or "10:00" stay movement lines instead of becoming empty
    headers. This departs from a plain `line == line.upper()` check.
    """
    line = line.strip()
    return line.isupper() and len(line) > 3 and line != HERO_WOD_MARKER


def _minutes(line: str) -> Optional[str]:
    match = DIGITS_PATTERN.search(line)
    minutes = to_count(match.group(0)) if match else None
    return f"{minutes} minutes" if minutes is not None else None


def _inline_movements(line: str) -> List[str]:
    """Movements written after the descriptor: "3 Rounds: 21 Thrusters, 21 Pull-ups"."""
    if CLOCK_PATTERN.search(line):
        return []
    _, sep, tail = line.partition(':')
    return split_inline_movements(tail) if sep else []


class ClassifiedLines:
    """
    Restartable, lazy view of classified lines.

    Each iteration re-reads the source text; the descriptor is only ever
    looked for on the first line.
    """

    def __init__(self, text: str):
        self.text = text
        first = next(split_lines(text), None)
        self.descriptor = detect_descriptor(first) if first is not None else None

    def __iter__(self) -> Iterator[ClassifiedLine]:
        for index, line in enumerate(split_lines(self.text)):
            if index == 0 and self.descriptor is not None:
                kind = LineKind.TYPE_DESCRIPTOR
            elif is_section_header(line):
                kind = LineKind.SECTION_HEADER
            else:
                kind = LineKind.MOVEMENT
            yield ClassifiedLine(text=line, kind=kind, index=index)

    @property
    def is_empty(self) -> bool:
        return next(split_lines(self.text), None) is None
