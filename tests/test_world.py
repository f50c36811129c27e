"""
Tests for the world models: enemies, locations and the world graph.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.models.world import (
    Enemy,
    Location,
    WorldDefinitionError,
    WorldGraph,
    create_enemy,
    normalize_location_id,
)


class TestEnemy:
    """Tests for the Enemy model."""

    def test_create_enemy_full_health(self):
        enemy = create_enemy("Pirate", 60, 15)
        assert enemy.current_health == 60
        assert enemy.max_health == 60
        assert enemy.defeated is False

    def test_current_health_defaults_to_max(self):
        enemy = Enemy(name="Scout", max_health=40, attack_power=10)
        assert enemy.current_health == 40

    @pytest.mark.parametrize(
        ("health", "damage"),
        [(60, 0), (60, 15), (60, 59), (60, 60), (60, 61), (60, 500), (1, 1)],
    )
    def test_take_damage_floors_at_zero(self, health, damage):
        """Health becomes max(0, previous - damage); defeated iff it is zero."""
        enemy = create_enemy("Target", health, 5)
        remaining = enemy.take_damage(damage)
        assert remaining == enemy.current_health == max(0, health - damage)
        assert enemy.defeated == (enemy.current_health == 0)

    def test_damage_accumulates(self):
        enemy = create_enemy("Raider", 65, 16)
        enemy.take_damage(20)
        enemy.take_damage(20)
        assert enemy.current_health == 25
        enemy.take_damage(40)
        assert enemy.current_health == 0
        assert enemy.defeated

    def test_negative_damage_rejected(self):
        enemy = create_enemy("Beast", 70, 18)
        with pytest.raises(ValueError, match="cannot be negative"):
            enemy.take_damage(-1)
        assert enemy.current_health == 70

    def test_health_above_max_rejected(self):
        with pytest.raises(ValidationError):
            Enemy(name="Bad", max_health=10, current_health=11, attack_power=1)

    def test_defeated_with_health_rejected(self):
        with pytest.raises(ValidationError):
            Enemy(name="Bad", max_health=10, current_health=5, attack_power=1, defeated=True)

    def test_zero_health_implies_defeated(self):
        enemy = Enemy(name="Wreck", max_health=10, current_health=0, attack_power=1)
        assert enemy.defeated is True

    def test_health_percentage(self):
        enemy = create_enemy("Plasma", 60, 14)
        enemy.take_damage(30)
        assert enemy.health_percentage == 50

    def test_describe(self):
        assert create_enemy("Pirate", 60, 15).describe() == "Pirate (Health: 60/60, Attack: 15)"


class TestLocation:
    """Tests for the Location model."""

    def test_id_is_normalized(self):
        assert Location(id="  Proxima_Centauri_B ").id == "proxima_centauri_b"
        assert normalize_location_id(" MARS") == "mars"

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            Location(id="   ")

    def test_find_enemy_by_fragment(self):
        location = Location(id="jupiter")
        location.add_enemy(create_enemy("Space Pirate", 60, 15))
        assert location.find_enemy("PIR").name == "Space Pirate"
        assert location.find_enemy("scout") is None
        assert location.find_enemy("") is None

    def test_find_enemy_returns_first_match(self):
        location = Location(id="saturn")
        location.add_enemy(create_enemy("Raider Alpha", 50, 10))
        location.add_enemy(create_enemy("Raider Beta", 50, 10))
        assert location.find_enemy("raider").name == "Raider Alpha"

    def test_remove_enemy_by_identity(self):
        """Removing one of two identical enemies leaves the other instance."""
        location = Location(id="mars")
        first = create_enemy("Warrior", 50, 12)
        second = create_enemy("Warrior", 50, 12)
        location.add_enemy(first)
        location.add_enemy(second)

        assert location.remove_enemy(second) is True
        assert len(location.enemies) == 1
        assert location.enemies[0] is first
        assert location.remove_enemy(second) is False

    def test_has_enemies(self):
        location = Location(id="moon")
        assert location.has_enemies is False
        location.add_enemy(create_enemy("Drone", 10, 5))
        assert location.has_enemies is True

    def test_properties(self):
        location = Location(id="earth", properties={"habitable": "yes"})
        assert location.get_property("habitable") == "yes"
        assert location.get_property("type") is None

    def test_describe_lists_enemies_and_properties(self):
        location = Location(id="venus", description="Hot.", properties={"type": "planet"})
        location.add_enemy(create_enemy("Plasma", 55, 14))
        text = location.describe()
        assert "Location: venus" in text
        assert "- Plasma" in text
        assert "- type: planet" in text


class TestWorldGraph:
    """Tests for building and querying the world graph."""

    @pytest.fixture
    def world(self) -> WorldGraph:
        return WorldGraph.from_definitions(
            locations={"Earth": "Home", "Mars": "Red", "Jupiter": "Big"},
            adjacency={"earth": ["mars"], "mars": ["Earth", "jupiter"], "jupiter": ["mars"]},
            enemies={"jupiter": [("Pirate", 30, 20)]},
            properties={"mars": {"type": "planet"}},
        )

    def test_locations_built_and_normalized(self, world: WorldGraph):
        assert set(world.locations) == {"earth", "mars", "jupiter"}
        assert world.get("MARS").description == "Red"
        assert "Jupiter" in world
        assert "pluto" not in world

    def test_enemies_attached(self, world: WorldGraph):
        pirate = world.locations["jupiter"].enemies[0]
        assert pirate.name == "Pirate"
        assert pirate.attack_power == 20
        assert pirate.current_health == 30

    def test_enemy_instances_accepted(self):
        enemy = create_enemy("Scout", 40, 10)
        world = WorldGraph.from_definitions({"ganymede": ""}, {}, {"ganymede": [enemy]})
        assert world.locations["ganymede"].enemies[0] is enemy

    def test_properties_attached(self, world: WorldGraph):
        assert world.locations["mars"].get_property("type") == "planet"

    def test_neighbors(self, world: WorldGraph):
        assert world.neighbors("mars") == {"earth", "jupiter"}
        assert world.neighbors("nowhere") == set()
        assert world.is_adjacent("earth", "MARS")
        assert not world.is_adjacent("earth", "jupiter")

    def test_neighbors_is_a_copy(self, world: WorldGraph):
        world.neighbors("earth").add("jupiter")
        assert world.neighbors("earth") == {"mars"}

    def test_adjacency_is_directed(self):
        world = WorldGraph.from_definitions({"a": "", "b": ""}, {"a": ["b"]})
        assert world.is_adjacent("a", "b")
        assert not world.is_adjacent("b", "a")

    def test_unknown_neighbor_fails_fast(self):
        with pytest.raises(WorldDefinitionError, match="pluto"):
            WorldGraph.from_definitions({"earth": ""}, {"earth": ["pluto"]})

    def test_unknown_connection_source_fails_fast(self):
        with pytest.raises(WorldDefinitionError):
            WorldGraph.from_definitions({"earth": ""}, {"pluto": ["earth"]})

    def test_unknown_enemy_location_fails_fast(self):
        with pytest.raises(WorldDefinitionError):
            WorldGraph.from_definitions({"earth": ""}, {}, {"pluto": [("Ghost", 10, 1)]})

    def test_world_definition_error_is_value_error(self):
        assert issubclass(WorldDefinitionError, ValueError)

    def test_replace_locations(self, world: WorldGraph):
        world.replace_locations({"earth": Location(id="earth", description="New")})
        assert set(world.locations) == {"earth"}
        assert world.neighbors("earth") == {"mars"}
