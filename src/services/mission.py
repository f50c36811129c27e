"""
Mission Service for Space Explorer.

Draws missions from the catalog and decides when the active one is done.
Exploration missions complete on arrival or after any victory at the
target; combat missions complete only when the named enemy is defeated at
the target location.
"""

from __future__ import annotations

import logging

from src.models.mission import Mission, MissionCatalog, MissionType
from src.skills.dice import RandomSource

logger = logging.getLogger(__name__)


class MissionService:
    """
    Mission lifecycle: draw, check, complete.

    Draws are uniform *with replacement* across the whole catalog, so the
    same mission can come up more than once in a session.
    """

    def __init__(self, catalog: MissionCatalog, rng: RandomSource) -> None:
        self.catalog = catalog
        self.rng = rng

    def draw_mission(self) -> Mission:
        mission = self.catalog.draw(self.rng)
        logger.info(f"Mission drawn: {mission.title} ({mission.mission_type.value})")
        return mission

    def check_arrival(self, mission: Mission | None, location_id: str) -> bool:
        """
        Check an exploration mission against the location just reached.

        Returns True only if the mission was completed by this check.
        """
        if mission is None or mission.mission_type != MissionType.EXPLORATION:
            return False
        was_complete = mission.completed
        return mission.is_complete(location_id) and not was_complete

    def check_combat_victory(
        self,
        mission: Mission | None,
        location_id: str,
        defeated_enemy: str,
    ) -> bool:
        """
        Check the active mission against an enemy just defeated.

        Exploration missions count any victory at their target location.

        Returns True only if the mission was completed by this check.
        """
        if mission is None:
            return False
        was_complete = mission.completed
        return mission.is_complete(location_id, defeated_enemy) and not was_complete
