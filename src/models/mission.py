"""
Mission models for Space Explorer.

A mission binds a target location, and optionally a target enemy, to a
score reward. Missions without a target enemy are exploration missions:
reaching the location is enough.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, Field, field_validator

from src.models.world import normalize_location_id

if TYPE_CHECKING:
    from src.skills.dice import RandomSource


class MissionType(str, Enum):
    """Kinds of missions."""

    COMBAT = "combat"  # Defeat a named enemy at the target location
    EXPLORATION = "exploration"  # Reach the target location


class Mission(BaseModel):
    """
    A single mission instance.

    `completed` only ever goes from False to True.
    """

    title: str
    target_location: str
    target_enemy: str | None = None
    """Exact enemy name (case-insensitive). None for exploration missions."""

    description: str = ""
    reward: int = Field(ge=0)
    completed: bool = False

    @field_validator("target_location")
    @classmethod
    def normalize_target(cls, value: str) -> str:
        return normalize_location_id(value)

    @property
    def mission_type(self) -> MissionType:
        if self.target_enemy is None:
            return MissionType.EXPLORATION
        return MissionType.COMBAT

    @property
    def is_exploration(self) -> bool:
        return self.target_enemy is None

    def is_complete(self, current_location: str, defeated_enemy: str | None = None) -> bool:
        """
        Evaluate completion, caching a positive answer.

        Args:
            current_location: Where the player is
            defeated_enemy: Name of the enemy just defeated, if any

        Returns:
            True once the mission has been completed
        """
        if not self.completed:
            location_matches = normalize_location_id(current_location) == self.target_location
            enemy_matches = self.target_enemy is None or (
                defeated_enemy is not None
                and defeated_enemy.strip().lower() == self.target_enemy.strip().lower()
            )
            self.completed = location_matches and enemy_matches
        return self.completed

    def describe(self) -> str:
        lines = [
            self.title,
            f"Description: {self.description}",
            f"Target Location: {self.target_location}",
        ]
        if self.target_enemy is not None:
            lines.append(f"Target Enemy: {self.target_enemy}")
        lines.append(f"Reward: {self.reward} points")
        return "\n".join(lines)


class MissionCatalog(BaseModel):
    """
    Fixed pool of mission templates.

    Templates are never handed out directly; each draw returns a fresh copy,
    so a completed instance is never issued again.
    """

    templates: Annotated[list[Mission], Field(min_length=1)]

    def __len__(self) -> int:
        return len(self.templates)

    @property
    def combat_missions(self) -> list[Mission]:
        return [m for m in self.templates if m.mission_type == MissionType.COMBAT]

    @property
    def exploration_missions(self) -> list[Mission]:
        return [m for m in self.templates if m.mission_type == MissionType.EXPLORATION]

    def draw(self, rng: RandomSource) -> Mission:
        """Pick a template uniformly, with replacement, and return a fresh instance."""
        template = self.templates[rng.next_int(len(self.templates))]
        return template.model_copy(update={"completed": False}, deep=True)


def create_default_catalog() -> MissionCatalog:
    """The ten missions of the standard galaxy: five combat, five exploration."""
    return MissionCatalog(
        templates=[
            Mission(
                title="Space Pirate Hunt",
                target_location="jupiter",
                target_enemy="Pirate",
                description="Eliminate the Pirate terrorizing Jupiter's shipping lanes.",
                reward=300,
            ),
            Mission(
                title="Scout Elimination",
                target_location="ganymede",
                target_enemy="Scout",
                description="Neutralize the Scout before it can report back to its fleet.",
                reward=350,
            ),
            Mission(
                title="Colony Defense",
                target_location="proxima_centauri_b",
                target_enemy="Invader",
                description="Defend the colony from the Invader.",
                reward=400,
            ),
            Mission(
                title="Quantum Crisis",
                target_location="neptune",
                target_enemy="Quantum",
                description="Stop the Quantum entity threatening deep space operations.",
                reward=450,
            ),
            Mission(
                title="AI Containment",
                target_location="kepler_186f",
                target_enemy="DefenseAI",
                description="Contain the rogue DefenseAI system.",
                reward=375,
            ),
            Mission(
                title="Methane Study",
                target_location="titan",
                description="Study the Beast's territory in Titan's methane lakes.",
                reward=200,
            ),
            Mission(
                title="Mars Investigation",
                target_location="mars",
                description="Investigate the Warrior's impact on Mars ruins.",
                reward=250,
            ),
            Mission(
                title="Venus Analysis",
                target_location="venus",
                description="Research the Plasma's effect on Venus's atmosphere.",
                reward=275,
            ),
            Mission(
                title="Europa Discovery",
                target_location="europa",
                description="Study the Leviathan's underwater habitat.",
                reward=225,
            ),
            Mission(
                title="Saturn Survey",
                target_location="saturn",
                description="Assess the Raider's damage to Saturn's rings.",
                reward=325,
            ),
        ]
    )
