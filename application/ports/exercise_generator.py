"""
Exercise Generator Interface (Port).

Defines the abstract interface for turning a free-text prompt into an
exercise list. Implementations may call an LLM or return canned data.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from domain.models import ExerciseSpec


@dataclass
class GeneratedPlan:
    """Exercises produced for a prompt, plus an optional workout name/description."""

    exercises: List[ExerciseSpec] = field(default_factory=list)
    name: Optional[str] = None
    description: Optional[str] = None


class ExerciseGenerator(Protocol):
    """Abstract interface for prompt-driven exercise list generation."""

    async def generate(self, prompt: Optional[str]) -> GeneratedPlan:
        """
        Generate exercises for the given prompt.

        Args:
            prompt: Free-text description of the desired workout (may be blank)

        Returns:
            GeneratedPlan with a non-empty, normalized exercise list

        Raises:
            UpstreamGenerationError: If generation fails or yields nothing usable
        """
        ...
