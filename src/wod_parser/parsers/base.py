"""
Base Parser

Abstract base class for every workout source. Each parser turns one kind of
payload (freeform text, stored template) into the same ParsedWorkout.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from .models import ParsedWorkout

logger = logging.getLogger(__name__)


class WorkoutInputError(TypeError):
    """Raised when a payload is not a type any parser accepts."""


class TemplateFormatError(ValueError):
    """Raised when a template payload is a string that is not valid JSON."""


class BaseParser(ABC):
    """Abstract base class for workout parsers"""

    @staticmethod
    @abstractmethod
    def source_name() -> str:
        """Return the parser identifier (e.g. 'text', 'template')."""
        ...

    @abstractmethod
    def can_parse(self, payload: Any) -> bool:
        """
        Check if this parser can handle the given payload.

        Args:
            payload: Raw input handed to the engine

        Returns:
            True if this parser can handle the payload
        """
        pass

    @abstractmethod
    def parse(self, payload: Any) -> ParsedWorkout:
        """
        Parse a payload into the canonical workout.

        Args:
            payload: Raw input handed to the engine

        Returns:
            A new ParsedWorkout

        Raises:
            WorkoutInputError: If the payload has the wrong type
        """
        pass

    def reject(self, payload: Any, expected: str) -> WorkoutInputError:
        """Build the boundary error for a payload of the wrong type."""
        message = f"{self.source_name()} parser expects {expected}, got {type(payload).__name__}"
        logger.debug(message)
        return WorkoutInputError(message)
