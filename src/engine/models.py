"""
Engine Data Models for Space Explorer.

Defines the core data structures for a game session:
- EngineConfig: costs, thresholds and file locations
- SessionState: everything the session owns
- ActionResult: what an action reports back to the front end
"""

from __future__ import annotations

import os
from enum import Enum

from pydantic import BaseModel, Field

from src.models.mission import Mission
from src.services.victory import DEFAULT_CRITICAL_LOCATIONS
from src.skills.combat import CombatConfig


class EngineConfig(BaseModel):
    """
    Engine configuration.

    Environment overrides (see `from_env`):
        SPACE_EXPLORER_SAVE_DIR: Directory for save files (default: saves)
        SPACE_EXPLORER_SAVE_FILE: Save file name (default: savegame.json)
        SPACE_EXPLORER_START: Starting location id (default: earth)
    """

    # Energy economy
    initial_energy: int = Field(default=100, ge=1)
    move_cost: int = Field(default=10, ge=0)
    combat_cost: int = Field(default=15, ge=0)
    search_cost: int = Field(default=5, ge=0)

    # Scoring and victory
    combat_victory_score: int = Field(default=100, ge=0)
    missions_for_victory: int = Field(default=5, ge=1)
    score_for_victory: int = Field(default=1000, ge=1)
    critical_locations: list[str] = Field(
        default_factory=lambda: sorted(DEFAULT_CRITICAL_LOCATIONS)
    )

    # World
    start_location: str = "earth"

    # Persistence
    save_dir: str = "saves"
    save_filename: str = "savegame.json"

    combat: CombatConfig = Field(default_factory=CombatConfig)

    @classmethod
    def from_env(cls, **overrides) -> EngineConfig:
        """Build a config, letting environment variables replace the defaults."""
        values: dict = {}
        if os.getenv("SPACE_EXPLORER_SAVE_DIR"):
            values["save_dir"] = os.getenv("SPACE_EXPLORER_SAVE_DIR")
        if os.getenv("SPACE_EXPLORER_SAVE_FILE"):
            values["save_filename"] = os.getenv("SPACE_EXPLORER_SAVE_FILE")
        if os.getenv("SPACE_EXPLORER_START"):
            values["start_location"] = os.getenv("SPACE_EXPLORER_START")
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class SessionStatus(str, Enum):
    """Lifecycle of a session."""

    NOT_STARTED = "not_started"
    ACTIVE = "active"
    VICTORY = "victory"  # Terminal until restart
    GAME_OVER = "game_over"  # Energy exhausted; terminal until restart


class SessionState(BaseModel):
    """Mutable state owned by a GameSession."""

    current_location_id: str | None = None
    energy: int = 100
    """May dip below zero from combat damage; action guards enforce the floor."""

    score: int = Field(default=0, ge=0)
    visited_locations: set[str] = Field(default_factory=set)
    current_mission: Mission | None = None
    completed_missions: int = Field(default=0, ge=0)
    discovered_critical_locations: set[str] = Field(default_factory=set)
    status: SessionStatus = SessionStatus.NOT_STARTED

    @property
    def is_terminal(self) -> bool:
        return self.status in (SessionStatus.VICTORY, SessionStatus.GAME_OVER)


class ActionError(str, Enum):
    """Why an action was refused."""

    INVALID_MOVE = "invalid_move"
    INSUFFICIENT_ENERGY = "insufficient_energy"
    UNKNOWN_ENEMY = "unknown_enemy"
    SESSION_OVER = "session_over"
    NOT_STARTED = "not_started"


class ActionResult(BaseModel):
    """Outcome of one engine call."""

    success: bool
    messages: list[str] = Field(default_factory=list)
    error: ActionError | None = None
    results: list[str] | None = Field(
        default=None, description="Matching location ids (search only)"
    )

    @property
    def text(self) -> str:
        return "\n".join(self.messages)
