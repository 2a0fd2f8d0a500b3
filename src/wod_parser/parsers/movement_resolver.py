"""
Movement Resolver

Maps free-text movement phrases onto canonical dictionary names.

Matching is exact after normalization (lower-case, collapsed whitespace,
one trailing "s" stripped). There is no edit-distance matching: an unknown
phrase always falls back to a predictable title-cased name, which users rely
on when editing parsed workouts.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .models import MovementEntry

logger = logging.getLogger(__name__)

MovementSource = Union[MovementEntry, Mapping[str, Any]]


@dataclass(frozen=True)
class ResolvedMovement:
    """Result of resolving one phrase"""
    name: str
    movement_id: Optional[Union[int, str]] = None
    entry: Optional[MovementEntry] = None

    @property
    def matched(self) -> bool:
        return self.entry is not None


def lookup_key(phrase: str) -> str:
    """Lower-case, collapse whitespace and strip one trailing 's'."""
    key = " ".join(phrase.lower().split())
    return key[:-1] if key.endswith('s') else key


def title_case(phrase: str) -> str:
    """Title-case each whitespace-separated token: 'pull-UPS' -> 'Pull-ups'."""
    return " ".join(part[:1].upper() + part[1:].lower() for part in phrase.split())


def coerce_movements(movements: Optional[Iterable[MovementSource]]) -> List[MovementEntry]:
    """Validate raw catalog rows into MovementEntry records."""
    entries = []
    for movement in movements or []:
        if isinstance(movement, MovementEntry):
            entries.append(movement)
        else:
            entries.append(MovementEntry.model_validate(movement))
    return entries


class MovementResolver:
    """Resolve phrases against a movement dictionary"""

    def __init__(self, movements: Optional[Iterable[MovementSource]] = None):
        self.movements = coerce_movements(movements)
        self._by_name: Dict[str, MovementEntry] = {}
        self._by_alias: Dict[str, MovementEntry] = {}

        # First entry wins, matching dictionary order
        for entry in self.movements:
            self._by_name.setdefault(" ".join(entry.name.lower().split()), entry)
            for alias in entry.aliases:
                self._by_alias.setdefault(" ".join(alias.lower().split()), entry)

    def __len__(self) -> int:
        return len(self.movements)

    def find(self, phrase: str) -> Optional[MovementEntry]:
        """
        Exact lookup of the normalized phrase: canonical names first, then aliases.

        Dictionary keys are only lower-cased, so an entry spelled with a
        trailing 's' is reachable through a singular alias only.
        """
        key = lookup_key(phrase)
        return self._by_name.get(key) or self._by_alias.get(key)

    def resolve(self, phrase: str) -> ResolvedMovement:
        """Resolve a phrase to its canonical name, or a title-cased fallback."""
        entry = self.find(phrase)
        if entry:
            return ResolvedMovement(name=entry.name, movement_id=entry.id, entry=entry)

        logger.debug(f"No dictionary match for movement: {phrase!r}")
        return ResolvedMovement(name=title_case(phrase))


_default_movements_cache: Optional[List[MovementEntry]] = None


def load_default_movements() -> List[MovementEntry]:
    """Load the bundled movement dictionary from data/movements.json."""
    global _default_movements_cache
    if _default_movements_cache is not None:
        return _default_movements_cache

    path = Path(__file__).parent.parent / "data" / "movements.json"
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        _default_movements_cache = coerce_movements(data.get("movements", []))
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load bundled movement dictionary: {e}")
        return []

    logger.debug(f"Loaded {len(_default_movements_cache)} bundled movements")
    return _default_movements_cache
