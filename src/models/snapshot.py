"""
Save-file records for Space Explorer.

A snapshot is a flat, versioned copy of the session plus every location.
Locations are keyed by id and own their enemies outright, so the persisted
form has no shared references. Field names serialize in camelCase.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

SNAPSHOT_VERSION = 1

_SNAPSHOT_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


class EnemySnapshot(BaseModel):
    model_config = _SNAPSHOT_CONFIG

    name: str
    max_health: int
    current_health: int
    attack_power: int
    defeated: bool = False


class LocationSnapshot(BaseModel):
    model_config = _SNAPSHOT_CONFIG

    name: str
    description: str = ""
    visited: bool = False
    properties: dict[str, str] = Field(default_factory=dict)
    enemies: list[EnemySnapshot] = Field(default_factory=list)


class MissionSnapshot(BaseModel):
    model_config = _SNAPSHOT_CONFIG

    title: str
    target_location: str
    target_enemy: str | None = None
    description: str = ""
    reward: int
    completed: bool = False


class GameSnapshot(BaseModel):
    """Everything needed to put a session back exactly where it was."""

    model_config = _SNAPSHOT_CONFIG

    version: int = SNAPSHOT_VERSION
    current_location: str
    energy: int
    score: int
    current_mission: MissionSnapshot | None = None
    visited_locations: list[str] = Field(default_factory=list)
    locations: dict[str, LocationSnapshot] = Field(default_factory=dict)

    # Optional so files written without them still load
    completed_missions: int = Field(default=0, ge=0)
    discovered_critical_locations: list[str] | None = None
