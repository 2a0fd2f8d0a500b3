"""
Parser Models

Pydantic models for the canonical workout shape that every parser outputs to.
Field aliases follow the JSON shape stored for templates and consumed by the
workout display, so `to_dict()` output can be persisted as an opaque blob.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field

MAX_REPS: Literal["Max"] = "Max"

# Fixed count, per-round counts, the "Max" sentinel, or unspecified
Reps = Union[int, Tuple[int, ...], Literal["Max"], None]


class RepsKind(str, Enum):
    """Shape of a movement's reps value"""
    FIXED = "fixed"           # 21
    PER_ROUND = "per_round"   # 21-15-9
    MAX = "max"               # Max effort
    UNSPECIFIED = "unspecified"


def reps_kind(reps: Reps) -> RepsKind:
    """Classify a reps value into its RepsKind."""
    if reps is None:
        return RepsKind.UNSPECIFIED
    if reps == MAX_REPS:
        return RepsKind.MAX
    if isinstance(reps, tuple):
        return RepsKind.PER_ROUND
    return RepsKind.FIXED


class MovementEntry(BaseModel):
    """A movement dictionary record supplied by the movement catalog"""
    id: Optional[Union[int, str]] = None
    name: str
    aliases: List[str] = Field(default_factory=list, alias="common_aliases")
    default_reps: Optional[int] = None
    default_sets: Optional[int] = Field(default=None, alias="common_sets")

    # Catalog metadata, carried through untouched
    description: Optional[str] = None
    equipment_required: Optional[bool] = None
    common_weight_range: Optional[str] = None
    variations: Dict[str, str] = Field(default_factory=dict)

    class Config:
        extra = "ignore"
        frozen = True
        populate_by_name = True


class ParsedMovement(BaseModel):
    """One exercise instruction within a block"""
    name: str
    reps: Reps = None
    weight: Optional[str] = Field(default=None, description="Formatted load, e.g. '70%' or '(95/65)'")
    distance: Optional[str] = None
    duration_seconds: Optional[int] = None
    modality: Optional[str] = None
    notes: Tuple[str, ...] = Field(default_factory=tuple)
    scaling: Optional[Tuple[str, ...]] = None
    minute: Optional[str] = Field(default=None, description="Interval tag: 'Even', 'Odd', 'Min 3'")
    movement_id: Optional[Union[int, str]] = None

    class Config:
        extra = "ignore"
        frozen = True

    @property
    def reps_kind(self) -> RepsKind:
        return reps_kind(self.reps)


class WorkoutBlock(BaseModel):
    """An ordered group of movements sharing a title"""
    title: Optional[str] = None
    lines: Tuple[ParsedMovement, ...] = Field(default_factory=tuple)
    rounds: Optional[int] = None
    format: Optional[str] = Field(default=None, description="'for time', 'AMRAP', 'EMOM'")

    class Config:
        extra = "ignore"
        frozen = True

    def rounds_mismatches(self) -> List[ParsedMovement]:
        """
        Movements whose per-round reps disagree with the block's rounds.

        Mismatches are allowed (a coach may override the round count for one
        movement); this only reports them.
        """
        if not self.rounds:
            return []
        return [
            movement for movement in self.lines
            if movement.reps_kind == RepsKind.PER_ROUND and len(movement.reps) != self.rounds
        ]


class ParsedWorkout(BaseModel):
    """Canonical workout produced by every parser and consumed by the renderer"""
    type: str = "Unknown"
    duration: Optional[str] = None
    priority: Optional[str] = None
    workout_blocks: Tuple[WorkoutBlock, ...] = Field(default_factory=tuple, alias="workoutBlocks")
    notes: Tuple[str, ...] = Field(default_factory=tuple)
    scaling_guidelines: Optional[Dict[str, Any]] = Field(default=None, alias="scalingGuidelines")

    class Config:
        extra = "ignore"
        frozen = True
        populate_by_name = True

    @property
    def movements(self) -> List[ParsedMovement]:
        """All movements across blocks, in source order."""
        return [movement for block in self.workout_blocks for movement in block.lines]

    def replace_movement(self, block_index: int, line_index: int, movement: ParsedMovement) -> "ParsedWorkout":
        """
        Return a copy with one whole movement entry replaced.

        Raises:
            IndexError: If the block or line does not exist.
        """
        block = self.workout_blocks[block_index]
        lines = list(block.lines)
        lines[line_index] = movement

        blocks = list(self.workout_blocks)
        blocks[block_index] = block.model_copy(update={"lines": tuple(lines)})
        return self.model_copy(update={"workout_blocks": tuple(blocks)})

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict using the stored wire names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParsedWorkout":
        return cls.model_validate(data)
