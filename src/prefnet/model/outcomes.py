# src/prefnet/model/outcomes.py

from __future__ import annotations

from dataclasses import dataclass

from .assignment import Assignment
from ..errors import InvalidAssignment

__all__ = ["OptimalExample", "Comparison"]


@dataclass(frozen=True, slots=True)
class OptimalExample:
    """
    Observation that ``optimum`` is a most-preferred outcome given ``condition``.

    e.g. ``(Entree=Fish) : (Entree=Fish,Side=Pasta,Wine=White)`` says that the
    best meal, when Entree is required to be Fish, is the one shown.

    The optimum must contain every value the condition fixes; a violating pair
    raises :class:`~prefnet.errors.InvalidAssignment`.
    """

    condition: Assignment
    optimum: Assignment

    def __post_init__(self):
        if not isinstance(self.condition, Assignment) or not isinstance(self.optimum, Assignment):
            raise InvalidAssignment("condition and optimum must be Assignment instances")
        if not self.optimum.subsumes(self.condition):
            raise InvalidAssignment(
                f"optimum {self.optimum} does not agree with condition {self.condition}"
            )

    def __str__(self) -> str:
        return f"{self.condition}:{self.optimum}"


@dataclass(frozen=True, slots=True)
class Comparison:
    """Preference ``better > worse`` between two outcomes."""

    better: Assignment
    worse: Assignment

    def flipped(self) -> "Comparison":
        """The opposite comparison, ``worse > better``."""
        return Comparison(self.worse, self.better)

    def __str__(self) -> str:
        return f"{self.better}>{self.worse}"
