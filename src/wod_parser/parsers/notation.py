"""
Notation Decoder

Turns shorthand workout notation into structured movement fields:
- "Pull-ups: 21-15-9"         per-round rep list
- "Back Squat 3x10 @ 70%"     sets x reps scheme plus intensity
- "21 Thrusters 95/65"        leading reps plus Rx/scaled load
- "400m Run", "Plank :30"     distance and duration
- "Even: 10 Burpees"          interval minute tag
- "Max Pull-ups"              max-effort sentinel

Malformed numbers are filtered out rather than raised; a line with no
recognised notation decodes to its bare movement phrase.
"""

import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple

from .models import MAX_REPS, Reps

# Interval minute tag at the start of a line: "Even:", "Odd -", "Min 3:"
MINUTE_TAG_PATTERN = re.compile(r'^(even|odd|min(?:ute)?\s*\d+)\s*[:\-–]\s*(.*)$', re.IGNORECASE)

# Clock durations: "1:30", and bare seconds ":30"
CLOCK_PATTERN = re.compile(r'(?<![\d:])(\d{1,2}):([0-5]\d)(?![\d:])')
SHORT_SECONDS_PATTERN = re.compile(r'(?:^|(?<=\s)):([0-5]\d)\b')

# "3x10", "5 x 5", "3xMax"
SCHEME_PATTERN = re.compile(r'^(.+?)\s+(\d+)\s*[xX×]\s*(\d+|max)\b(.*)$', re.IGNORECASE)
TAIL_SCHEME_PATTERN = re.compile(r'^(\d+)\s*[xX×]\s*(\d+|max)\b', re.IGNORECASE)

# Leading reps before the movement name: "21 Thrusters", "21-15-9 Thrusters", "Max Pull-ups"
LEADING_REPS_PATTERN = re.compile(r'^(\d+(?:\s*-\s*\d+)+|\d+|max)\s+(?=[A-Za-z])(.*)$', re.IGNORECASE)

DISTANCE_PATTERN = re.compile(
    r'(?<![\w.])(\d+(?:\.\d+)?)\s*(m|meters?|metres?|km|mi|miles?|ft|feet|yd|yards?)\b',
    re.IGNORECASE
)
DURATION_PATTERN = re.compile(
    r'(?<![\w.])(\d+)\s*(s|secs?|seconds?|min|mins|minutes?)\b',
    re.IGNORECASE
)

# Trailing load: "95/65", "20/14 lb", "225 lb", "70%", "32kg"
DUAL_LOAD_PATTERN = re.compile(
    r'(?<![\w.])(\d+(?:\.\d+)?)\s*/\s*(\d+(?:\.\d+)?)\s*(lbs?|kg|#|pood)?\s*$',
    re.IGNORECASE
)
SINGLE_LOAD_PATTERN = re.compile(
    r'(?<![\w.])(\d+(?:\.\d+)?)\s*(lbs?|kg|#|%|pood)\s*$',
    re.IGNORECASE
)

MAX_PATTERN = re.compile(r'^max$', re.IGNORECASE)
LEADING_INT_PATTERN = re.compile(r'^\s*(\d+)')

MAX_SCHEME_SETS = 100
MINUTES_UNITS = ('min', 'mins', 'minute', 'minutes')

# Longer digit runs are not counts and stay in the phrase
MAX_COUNT_DIGITS = 9


@dataclass(frozen=True)
class DecodedLine:
    """Structured fields extracted from one movement line"""
    phrase: str
    reps: Reps = None
    weight: Optional[str] = None
    distance: Optional[str] = None
    duration_seconds: Optional[int] = None
    minute: Optional[str] = None


def to_count(digits: str) -> Optional[int]:
    """Convert a run of digits, None when it is too long or not a number."""
    digits = digits.strip()
    if not digits or len(digits) > MAX_COUNT_DIGITS:
        return None
    try:
        return int(digits)
    except ValueError:
        return None


def parse_int_token(token: Any) -> Optional[int]:
    """Read a leading integer from a token, None if there is none."""
    match = LEADING_INT_PATTERN.match(str(token))
    return to_count(match.group(1)) if match else None


def parse_rep_list(segment: str) -> Tuple[int, ...]:
    """
    Parse a dash-separated rep list, dropping non-numeric tokens.

    "21-15-9" -> (21, 15, 9); "10-abc-8" -> (10, 8)
    """
    values = (parse_int_token(token) for token in segment.replace('–', '-').split('-'))
    return tuple(value for value in values if value is not None)


def expand_rep_scheme(sets: int, reps: int) -> Tuple[int, ...]:
    """Expand a sets x reps scheme: 3x10 -> (10, 10, 10)."""
    return tuple([reps] * sets)


def normalize_reps(value: Any) -> Reps:
    """
    Normalize a stored reps value.

    Numbers and number lists pass through, "Max" passes through, numeric
    strings and dash lists are decoded, anything else is unspecified.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, (list, tuple)):
        values = (_coerce_int(item) for item in value)
        return tuple(item for item in values if item is not None)
    if isinstance(value, str):
        text = value.strip()
        if MAX_PATTERN.match(text):
            return MAX_REPS
        if text.isdigit():
            return to_count(text)
        reps = parse_rep_list(text) if '-' in text else ()
        return reps or None
    return None


def format_weight(weight: Any) -> Optional[str]:
    """
    Format a load for display.

    {"rx": "95 lb", "scaled": "65 lb"} -> "(95 lb/65 lb)"
    {"rx": "95 lb"}                    -> "(95 lb)"
    Plain strings pass through unchanged.
    """
    if weight is None or weight == '' or isinstance(weight, bool):
        return None
    if isinstance(weight, str):
        return weight
    if isinstance(weight, (int, float)):
        return str(weight)
    if isinstance(weight, Mapping):
        rx = weight.get('rx')
        scaled = weight.get('scaled')
        if rx and scaled:
            return f"({rx}/{scaled})"
        if rx:
            return f"({rx})"
    return None


def decode_movement_line(line: str) -> DecodedLine:
    """Decode one movement line into its phrase and notation fields."""
    text = " ".join(line.split())

    minute, text = _take_minute_tag(text)
    duration, text = _take_clock_duration(text)

    head, sep, tail = text.partition(':')
    if sep and head.strip() and tail.strip():
        reps, weight, distance, tail_duration = _decode_quantity(tail.strip())
        return DecodedLine(
            phrase=head.strip(),
            reps=reps,
            weight=weight,
            distance=distance,
            duration_seconds=duration if duration is not None else tail_duration,
            minute=minute,
        )

    scheme = SCHEME_PATTERN.match(text)
    scheme_reps = _scheme_reps(scheme.group(2), scheme.group(3)) if scheme else None
    if scheme_reps is not None:
        phrase, _, _, remainder = scheme.groups()
        return DecodedLine(
            phrase=phrase.strip(),
            reps=scheme_reps,
            weight=_scheme_load(remainder),
            duration_seconds=duration,
            minute=minute,
        )

    return _decode_freeform(text, minute, duration)


def _decode_freeform(text: str, minute: Optional[str], duration: Optional[int]) -> DecodedLine:
    text, weight = _split_intensity(text)

    distance = None
    distance_match = DISTANCE_PATTERN.search(text)
    if distance_match:
        distance = _compact(distance_match.group(0))
        text = _cut(text, distance_match)

    if duration is None:
        duration_match = DURATION_PATTERN.search(text)
        if duration_match:
            duration = _match_seconds(duration_match)
            if duration is not None:
                text = _cut(text, duration_match)

    if weight is None:
        weight, text = _take_trailing_load(text)

    reps: Reps = None
    leading = LEADING_REPS_PATTERN.match(text)
    if leading:
        reps = _leading_reps(leading.group(1))
        if reps is not None:
            text = leading.group(2)

    return DecodedLine(
        phrase=_clean_phrase(text),
        reps=reps,
        weight=weight,
        distance=distance,
        duration_seconds=duration,
        minute=minute,
    )


def _decode_quantity(segment: str) -> Tuple[Reps, Optional[str], Optional[str], Optional[int]]:
    """Decode the notation after "name:" into reps, weight, distance, duration."""
    segment, weight = _split_intensity(segment)

    if MAX_PATTERN.match(segment):
        return MAX_REPS, weight, None, None

    scheme = TAIL_SCHEME_PATTERN.match(segment)
    scheme_reps = _scheme_reps(scheme.group(1), scheme.group(2)) if scheme else None
    if scheme_reps is not None:
        return scheme_reps, weight, None, None

    distance_match = DISTANCE_PATTERN.fullmatch(segment)
    if distance_match:
        return None, weight, _compact(segment), None

    duration_match = DURATION_PATTERN.fullmatch(segment)
    seconds = _match_seconds(duration_match) if duration_match else None
    if seconds is not None:
        return None, weight, None, seconds

    if weight is None:
        weight, segment = _take_trailing_load(segment)

    return parse_rep_list(segment) or None, weight, None, None


def _take_minute_tag(text: str) -> Tuple[Optional[str], str]:
    match = MINUTE_TAG_PATTERN.match(text)
    if not match or not match.group(2).strip():
        return None, text
    tag = " ".join(match.group(1).split()).title()
    return re.sub(r'(?<=[A-Za-z])(?=\d)', ' ', tag), match.group(2).strip()


def _take_clock_duration(text: str) -> Tuple[Optional[int], str]:
    match = CLOCK_PATTERN.search(text)
    if match:
        seconds = int(match.group(1)) * 60 + int(match.group(2))
        return seconds, _cut(text, match)

    match = SHORT_SECONDS_PATTERN.search(text)
    if match:
        return int(match.group(1)), _cut(text, match)

    return None, text


def _split_intensity(text: str) -> Tuple[str, Optional[str]]:
    """
    Split "Back Squat @ 70%" into ("Back Squat", "70%").

    A bare Rx/scaled pair after "@" is formatted like a trailing one:
    "Thrusters @ 95/65" -> ("Thrusters", "(95/65)").
    """
    head, sep, tail = text.partition('@')
    if not sep:
        return text, None
    intensity = tail.split('@')[0].strip()
    dual = DUAL_LOAD_PATTERN.fullmatch(intensity)
    if dual:
        intensity = _format_dual(dual)
    return head.strip(), intensity or None


def _scheme_load(remainder: str) -> Optional[str]:
    """Load after a sets x reps scheme: "@ 70%" or a bare "225 lb"."""
    if "@" in remainder:
        return _split_intensity(remainder)[1]
    return _take_trailing_load(remainder.strip(), allow_leading=True)[0]


def _take_trailing_load(text: str, allow_leading: bool = False) -> Tuple[Optional[str], str]:
    dual = DUAL_LOAD_PATTERN.search(text)
    if dual:
        return _format_dual(dual), _cut(text, dual)

    single = SINGLE_LOAD_PATTERN.search(text)
    # A bare leading number is a rep count, not a load
    if single and (allow_leading or single.start() > 0):
        return _compact_load(single.group(1), single.group(2)), _cut(text, single)

    return None, text


def _format_dual(match: re.Match) -> Optional[str]:
    rx, scaled, unit = match.groups()
    suffix = f" {unit}" if unit else ""
    return format_weight({'rx': f"{rx}{suffix}", 'scaled': f"{scaled}{suffix}"})


def _scheme_reps(sets_token: str, reps_token: str) -> Reps:
    """Reps for an NxM scheme, None when either count is unusable."""
    sets = to_count(sets_token)
    if sets is None:
        return None
    if MAX_PATTERN.match(reps_token):
        return MAX_REPS
    reps = to_count(reps_token)
    if reps is None:
        return None
    if sets > MAX_SCHEME_SETS:
        # Not expanded; keep the per-set count only
        return reps
    return expand_rep_scheme(sets, reps)


def _leading_reps(token: str) -> Reps:
    if MAX_PATTERN.match(token):
        return MAX_REPS
    if '-' in token:
        return parse_rep_list(token)
    return to_count(token)


def _match_seconds(match: re.Match) -> Optional[int]:
    value = to_count(match.group(1))
    if value is None:
        return None
    return value * 60 if match.group(2).lower() in MINUTES_UNITS else value


def _coerce_int(item: Any) -> Optional[int]:
    if isinstance(item, bool):
        return None
    if isinstance(item, int):
        return item
    if isinstance(item, float):
        return int(item) if item.is_integer() else None
    if isinstance(item, str) and item.strip().isdigit():
        return to_count(item)
    return None


def _compact(token: str) -> str:
    """"400 m" -> "400m", "1 mile" stays "1 mile"."""
    token = " ".join(token.split())
    return re.sub(r'^(\d+(?:\.\d+)?)\s+(m|km|mi|ft|yd)$', r'\1\2', token, flags=re.IGNORECASE)


def _compact_load(value: str, unit: str) -> str:
    if unit in ('%', '#'):
        return f"{value}{unit}"
    return f"{value} {unit}"


def _cut(text: str, match: re.Match) -> str:
    return " ".join((text[:match.start()] + " " + text[match.end():]).split())


def _clean_phrase(text: str) -> str:
    return " ".join(text.strip(" ,;-–").split())


def split_inline_movements(segment: str) -> List[str]:
    """Split "21 Thrusters 95/65, 21 Pull-ups" into movement lines."""
    return [part.strip() for part in segment.split(',') if part.strip()]
