"""
Core Data Models for Space Explorer.

These models define the galaxy (locations, enemies, adjacency), the
missions the player is sent on, and the save-file snapshot.
"""

from src.models.mission import (
    Mission,
    MissionCatalog,
    MissionType,
    create_default_catalog,
)
from src.models.snapshot import (
    SNAPSHOT_VERSION,
    EnemySnapshot,
    GameSnapshot,
    LocationSnapshot,
    MissionSnapshot,
)
from src.models.world import (
    Enemy,
    Location,
    WorldDefinitionError,
    WorldGraph,
    create_enemy,
    normalize_location_id,
)

__all__ = [
    # World
    "Enemy",
    "Location",
    "WorldGraph",
    "WorldDefinitionError",
    "create_enemy",
    "normalize_location_id",
    # Missions
    "Mission",
    "MissionCatalog",
    "MissionType",
    "create_default_catalog",
    # Snapshot
    "SNAPSHOT_VERSION",
    "EnemySnapshot",
    "GameSnapshot",
    "LocationSnapshot",
    "MissionSnapshot",
]
