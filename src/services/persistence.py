"""
Save management for Space Explorer.

Writes a GameSnapshot as JSON and reads it back. Writes go to a temporary
file that replaces the target only once fully written, so a failed save
never leaves a half-written file behind.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from src.models.mission import Mission
from src.models.snapshot import (
    SNAPSHOT_VERSION,
    EnemySnapshot,
    GameSnapshot,
    LocationSnapshot,
    MissionSnapshot,
)
from src.models.world import Enemy, Location, WorldGraph

if TYPE_CHECKING:
    from src.engine.models import SessionState

logger = logging.getLogger(__name__)


class SaveError(Exception):
    """Base class for save related failures."""


class SaveCorruptError(SaveError):
    """Raised when a save file cannot be parsed or validated."""


# =============================================================================
# Snapshot conversion
# =============================================================================


def build_snapshot(state: SessionState, world: WorldGraph) -> GameSnapshot:
    """Copy the session and every location into a snapshot record."""
    if state.current_location_id is None:
        raise SaveError("Cannot save a session that has not started.")

    mission = state.current_mission
    mission_snapshot = None
    if mission is not None:
        mission_snapshot = MissionSnapshot(
            title=mission.title,
            target_location=mission.target_location,
            target_enemy=mission.target_enemy,
            description=mission.description,
            reward=mission.reward,
            completed=mission.completed,
        )

    locations = {
        location_id: LocationSnapshot(
            name=location.id,
            description=location.description,
            visited=location.visited,
            properties=dict(location.properties),
            enemies=[
                EnemySnapshot(
                    name=enemy.name,
                    max_health=enemy.max_health,
                    current_health=enemy.current_health,
                    attack_power=enemy.attack_power,
                    defeated=enemy.defeated,
                )
                for enemy in location.enemies
            ],
        )
        for location_id, location in world.locations.items()
    }

    return GameSnapshot(
        version=SNAPSHOT_VERSION,
        current_location=state.current_location_id,
        energy=state.energy,
        score=state.score,
        current_mission=mission_snapshot,
        visited_locations=sorted(state.visited_locations),
        locations=locations,
        completed_missions=state.completed_missions,
        discovered_critical_locations=sorted(state.discovered_critical_locations),
    )


def restore_locations(snapshot: GameSnapshot) -> dict[str, Location]:
    """
    Rebuild live locations from a snapshot.

    Raises:
        SaveCorruptError: if any record fails validation
    """
    try:
        locations: dict[str, Location] = {}
        for key, record in snapshot.locations.items():
            location = Location(
                id=record.name or key,
                description=record.description,
                visited=record.visited,
                properties=dict(record.properties),
                enemies=[
                    Enemy(
                        name=e.name,
                        max_health=e.max_health,
                        current_health=e.current_health,
                        attack_power=e.attack_power,
                        defeated=e.defeated,
                    )
                    for e in record.enemies
                ],
            )
            locations[location.id] = location
    except ValidationError as exc:
        raise SaveCorruptError(f"Invalid location record: {exc}") from exc

    if snapshot.current_location.strip().lower() not in locations:
        raise SaveCorruptError(
            f"Current location '{snapshot.current_location}' is not in the saved galaxy"
        )
    return locations


def restore_mission(snapshot: GameSnapshot) -> Mission | None:
    """
    Rebuild the active mission.

    Raises:
        SaveCorruptError: if the record is invalid or already completed
    """
    record = snapshot.current_mission
    if record is None:
        return None
    # Completed missions are replaced immediately, so none is ever saved as active
    if record.completed:
        raise SaveCorruptError(f"Active mission '{record.title}' is already completed")
    try:
        return Mission(
            title=record.title,
            target_location=record.target_location,
            target_enemy=record.target_enemy,
            description=record.description,
            reward=record.reward,
            completed=record.completed,
        )
    except ValidationError as exc:
        raise SaveCorruptError(f"Invalid mission record: {exc}") from exc


# =============================================================================
# File handling
# =============================================================================


class SaveManager:
    """Read and write snapshot files under a base directory."""

    def __init__(self, base_path: Path | str = "saves", filename: str = "savegame.json") -> None:
        self.base_path = Path(base_path)
        self.filename = filename

    def path_for(self, filename: str | None = None) -> Path:
        return self.base_path / (filename or self.filename)

    def save(self, snapshot: GameSnapshot, filename: str | None = None) -> Path:
        """
        Write a snapshot atomically.

        Raises:
            SaveError: on any I/O failure (the previous file is left intact)
        """
        save_path = self.path_for(filename)
        tmp_path = save_path.with_suffix(save_path.suffix + ".tmp")
        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as handle:
                handle.write(snapshot.model_dump_json(by_alias=True, indent=2))
                handle.write("\n")
            tmp_path.replace(save_path)
        except OSError as exc:
            if tmp_path.exists():
                tmp_path.unlink()
            logger.error("Saving to %s failed: %s", save_path, exc)
            raise SaveError(f"Could not write {save_path}: {exc}") from exc

        logger.info("Game saved to %s", save_path)
        return save_path

    def load(self, filename: str | None = None) -> GameSnapshot:
        """
        Read and validate a snapshot.

        Raises:
            SaveError: if the file is missing or unreadable
            SaveCorruptError: if the contents are not a valid snapshot
        """
        path = self.path_for(filename)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise SaveError(f"Save file missing: {path}") from exc
        except OSError as exc:
            raise SaveError(f"Could not read {path}: {exc}") from exc

        try:
            snapshot = GameSnapshot.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning("Rejected corrupt save %s", path)
            raise SaveCorruptError(f"Invalid save file {path}: {exc}") from exc

        if snapshot.version != SNAPSHOT_VERSION:
            raise SaveCorruptError(f"Unsupported save version: {snapshot.version!r}")

        logger.info("Game loaded from %s", path)
        return snapshot

    def exists(self, filename: str | None = None) -> bool:
        return self.path_for(filename).exists()
