"""Export service for rendering canonical workouts back into plain text."""
from typing import Any, List, Optional

from wod_parser.parsers.models import ParsedMovement, ParsedWorkout, RepsKind


class ExportService:
    """Service for rendering workouts for display and editing."""

    @staticmethod
    def render_heading(workout: ParsedWorkout) -> Optional[str]:
        """
        Derive the single heading line for a workout.

        First match wins:
        MetCon with rounds, AMRAP with duration, EMOM with duration, Hero WOD.

        Returns:
            Heading string, or None when no heading applies
        """
        rounds = next((b.rounds for b in workout.workout_blocks if b.rounds), None)

        if workout.type == "MetCon" and rounds:
            return f"{rounds} Rounds for time of:"
        if workout.type == "AMRAP" and workout.duration:
            return f"AMRAP {workout.duration}:"
        if workout.type == "EMOM" and workout.duration:
            return f"EMOM {workout.duration}"
        if "hero wod" in workout.type.lower():
            return "HERO WOD"
        return None

    @staticmethod
    def render_reps(movement: ParsedMovement) -> str:
        kind = movement.reps_kind
        if kind == RepsKind.PER_ROUND:
            return "-".join(str(r) for r in movement.reps)
        if kind == RepsKind.MAX:
            return "Max"
        if kind == RepsKind.FIXED:
            return str(movement.reps)
        return ""

    @staticmethod
    def render_movement_line(movement: ParsedMovement) -> str:
        """
        Render one movement: minute tag, reps, name, distance, load.

        "EVEN: 10 Burpees", "21-15-9 Thrusters @ (95/65)", "Run, 400m"
        """
        line = ""
        if movement.minute:
            line += f"{movement.minute.upper()}: "

        reps = ExportService.render_reps(movement)
        if reps:
            line += f"{reps} "

        line += movement.name

        if movement.distance:
            line += f", {movement.distance}"
        if movement.weight:
            line += f" @ {movement.weight}"
        return line.strip()

    @staticmethod
    def humanize_key(key: str) -> str:
        """'time_cap' -> 'Time Cap'"""
        return " ".join(word[:1].upper() + word[1:] for word in key.replace("_", " ").split())

    @staticmethod
    def render_lines(workout: ParsedWorkout) -> List[str]:
        """Render a workout as a list of text lines."""
        lines: List[str] = []

        heading = ExportService.render_heading(workout)
        if heading:
            lines.append(heading)

        for block in workout.workout_blocks:
            if block.title:
                lines.append(block.title)
            for movement in block.lines:
                lines.append(ExportService.render_movement_line(movement))

        if workout.notes:
            lines.append("")
            lines.append("Notes:")
            lines.extend(workout.notes)

        if workout.scaling_guidelines:
            lines.append("")
            lines.append("Scaling Guidelines:")
            for key, value in workout.scaling_guidelines.items():
                lines.append(f"{ExportService.humanize_key(key)}: {_display_value(value)}")

        return lines

    @staticmethod
    def render_text(workout: ParsedWorkout) -> str:
        """
        Render a workout as plain text.

        Args:
            workout: Workout to render

        Returns:
            Text with heading, block titles, movement lines, notes and scaling guidelines
        """
        return "\n".join(ExportService.render_lines(workout))


def _display_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)
