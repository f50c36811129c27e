"""Tests for the starter galaxy content."""

from __future__ import annotations

from collections import deque

import pytest

from src.content import STARTER_CONNECTIONS, create_starter_galaxy
from src.models.mission import create_default_catalog
from src.models.world import WorldGraph
from src.services.victory import DEFAULT_CRITICAL_LOCATIONS


@pytest.fixture
def galaxy() -> WorldGraph:
    return create_starter_galaxy()


def _reachable(world: WorldGraph, start: str) -> set[str]:
    seen = {start}
    queue = deque([start])
    while queue:
        for neighbor in world.neighbors(queue.popleft()):
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return seen


class TestStarterGalaxy:
    """The standard galaxy is complete and consistent."""

    def test_location_count(self, galaxy: WorldGraph):
        assert len(galaxy.locations) == 13
        assert "earth" in galaxy

    def test_connections_are_two_way(self, galaxy: WorldGraph):
        for a, b in STARTER_CONNECTIONS:
            assert galaxy.is_adjacent(a, b)
            assert galaxy.is_adjacent(b, a)

    def test_everything_reachable_from_earth(self, galaxy: WorldGraph):
        assert _reachable(galaxy, "earth") == set(galaxy.locations)

    def test_critical_locations_exist(self, galaxy: WorldGraph):
        assert DEFAULT_CRITICAL_LOCATIONS <= set(galaxy.locations)

    def test_every_mission_target_exists(self, galaxy: WorldGraph):
        for mission in create_default_catalog().templates:
            assert mission.target_location in galaxy

    def test_combat_targets_are_at_their_locations(self, galaxy: WorldGraph):
        for mission in create_default_catalog().combat_missions:
            names = {e.name.lower() for e in galaxy.locations[mission.target_location].enemies}
            assert mission.target_enemy.lower() in names, mission.title

    def test_every_location_is_described(self, galaxy: WorldGraph):
        for location in galaxy.locations.values():
            assert location.description
            assert location.get_property("type") is not None

    def test_fresh_galaxy_each_call(self, galaxy: WorldGraph):
        galaxy.locations["jupiter"].enemies[0].take_damage(60)
        assert create_starter_galaxy().locations["jupiter"].enemies[0].current_health == 60
