"""
Victory evaluation for Space Explorer.

The game is won by any one of:
- completing enough missions
- reaching the target score
- discovering every critical location
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_CRITICAL_LOCATIONS = frozenset(
    {"mars", "jupiter", "titan", "proxima_centauri_b", "venus"}
)


class VictoryCondition(str, Enum):
    """Ways to win."""

    MISSIONS = "missions"
    SCORE = "score"
    EXPLORATION = "exploration"


class VictoryReport(BaseModel):
    """Which conditions were met and the final statistics."""

    conditions: list[VictoryCondition] = Field(min_length=1)
    score: int
    missions_completed: int
    locations_visited: int
    energy_remaining: int
    missions_required: int = 5
    score_required: int = 1000

    def summary(self) -> str:
        lines = [
            "CONGRATULATIONS! You've won the game!",
            "",
            "Victory achieved through:",
        ]
        if VictoryCondition.MISSIONS in self.conditions:
            lines.append(
                f"- Completing {self.missions_completed} missions "
                f"(required: {self.missions_required})"
            )
        if VictoryCondition.SCORE in self.conditions:
            lines.append(
                f"- Achieving a score of {self.score} (required: {self.score_required})"
            )
        if VictoryCondition.EXPLORATION in self.conditions:
            lines.append("- Discovering all critical locations in the galaxy")
        lines.extend(
            [
                "",
                "Final Statistics:",
                f"- Total Score: {self.score}",
                f"- Missions Completed: {self.missions_completed}",
                f"- Locations Discovered: {self.locations_visited}",
                f"- Energy Remaining: {self.energy_remaining}",
            ]
        )
        return "\n".join(lines)


def met_conditions(
    completed_missions: int,
    score: int,
    discovered_critical: Iterable[str],
    *,
    missions_required: int = 5,
    score_required: int = 1000,
    critical_locations: Collection[str] = DEFAULT_CRITICAL_LOCATIONS,
) -> list[VictoryCondition]:
    """All victory conditions currently satisfied, in a fixed order."""
    met: list[VictoryCondition] = []
    if completed_missions >= missions_required:
        met.append(VictoryCondition.MISSIONS)
    if score >= score_required:
        met.append(VictoryCondition.SCORE)
    if critical_locations and set(critical_locations) <= set(discovered_critical):
        met.append(VictoryCondition.EXPLORATION)
    return met


def evaluate_victory(
    completed_missions: int,
    score: int,
    discovered_critical: Iterable[str],
    *,
    locations_visited: int = 0,
    energy_remaining: int = 0,
    missions_required: int = 5,
    score_required: int = 1000,
    critical_locations: Collection[str] = DEFAULT_CRITICAL_LOCATIONS,
) -> VictoryReport | None:
    """
    Evaluate the victory predicate.

    Returns:
        A VictoryReport if any condition holds, otherwise None
    """
    conditions = met_conditions(
        completed_missions,
        score,
        discovered_critical,
        missions_required=missions_required,
        score_required=score_required,
        critical_locations=critical_locations,
    )
    if not conditions:
        return None
    return VictoryReport(
        conditions=conditions,
        score=score,
        missions_completed=completed_missions,
        locations_visited=locations_visited,
        energy_remaining=energy_remaining,
        missions_required=missions_required,
        score_required=score_required,
    )
