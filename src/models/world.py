"""
World Models for Space Explorer.

Defines the galaxy the player travels through:
- Enemy: a hostile presence owned by a location
- Location: a node of the galaxy with properties and enemies
- WorldGraph: locations plus directed adjacency

The world is built once from already-parsed definitions. Adjacency never
changes afterwards; location contents (visited flag, enemy roster) do.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Union

from pydantic import BaseModel, Field, field_validator, model_validator


class WorldDefinitionError(ValueError):
    """Raised when world definitions reference unknown locations."""


def normalize_location_id(location_id: str) -> str:
    """Normalize a location id: stripped and lower-cased."""
    return location_id.strip().lower()


class Enemy(BaseModel):
    """
    An enemy stationed at a location.

    Health only ever goes down. The enemy is defeated exactly when its
    current health reaches zero.
    """

    name: str
    max_health: int = Field(ge=1, description="Health at full strength")
    current_health: int = Field(ge=0, description="Remaining health")
    attack_power: int = Field(ge=0, description="Base damage dealt per retaliation")
    defeated: bool = False

    @model_validator(mode="before")
    @classmethod
    def default_current_health(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("current_health") is None:
            data = dict(data)
            data["current_health"] = data.get("max_health")
        return data

    @model_validator(mode="after")
    def validate_health(self) -> Enemy:
        if self.current_health > self.max_health:
            raise ValueError(
                f"current_health ({self.current_health}) cannot exceed max_health ({self.max_health})"
            )
        if self.current_health == 0:
            self.defeated = True
        elif self.defeated:
            raise ValueError("A defeated enemy must have zero health")
        return self

    @property
    def health_percentage(self) -> int:
        """Remaining health as a whole percentage (0-100)."""
        return int(self.current_health * 100 / self.max_health)

    def take_damage(self, damage: int) -> int:
        """
        Apply damage, flooring health at zero.

        Returns the health remaining.
        """
        if damage < 0:
            raise ValueError(f"Damage cannot be negative: {damage}")
        self.current_health = max(0, self.current_health - damage)
        if self.current_health == 0:
            self.defeated = True
        return self.current_health

    def describe(self) -> str:
        return (
            f"{self.name} (Health: {self.current_health}/{self.max_health}, "
            f"Attack: {self.attack_power})"
        )


def create_enemy(name: str, health: int, attack_power: int) -> Enemy:
    """Create an enemy at full health."""
    return Enemy(name=name, max_health=health, current_health=health, attack_power=attack_power)


class Location(BaseModel):
    """A place in the galaxy."""

    id: str
    description: str = ""
    properties: dict[str, str] = Field(default_factory=dict)
    enemies: list[Enemy] = Field(default_factory=list)
    visited: bool = False

    @field_validator("id")
    @classmethod
    def normalize_id(cls, value: str) -> str:
        normalized = normalize_location_id(value)
        if not normalized:
            raise ValueError("Location id cannot be empty")
        return normalized

    @property
    def has_enemies(self) -> bool:
        return bool(self.enemies)

    def get_property(self, key: str) -> str | None:
        return self.properties.get(key)

    def add_enemy(self, enemy: Enemy) -> None:
        self.enemies.append(enemy)

    def remove_enemy(self, enemy: Enemy) -> bool:
        """Remove this exact enemy instance. Returns False if it isn't here."""
        for index, present in enumerate(self.enemies):
            if present is enemy:
                del self.enemies[index]
                return True
        return False

    def find_enemy(self, fragment: str) -> Enemy | None:
        """First enemy whose name contains the fragment, ignoring case."""
        needle = fragment.strip().lower()
        if not needle:
            return None
        for enemy in self.enemies:
            if needle in enemy.name.lower():
                return enemy
        return None

    def describe(self) -> str:
        lines = [f"Location: {self.id}", f"Description: {self.description}"]
        if self.enemies:
            lines.append("Enemies present:")
            lines.extend(f"- {enemy.name}" for enemy in self.enemies)
        if self.properties:
            lines.append("Properties:")
            lines.extend(f"- {key}: {value}" for key, value in sorted(self.properties.items()))
        return "\n".join(lines)


EnemyDefinition = Union[Enemy, tuple[str, int, int]]


class WorldGraph(BaseModel):
    """
    The galaxy: locations keyed by id and directed adjacency between them.

    Adjacency only references existing ids; `from_definitions` enforces it.
    """

    locations: dict[str, Location] = Field(default_factory=dict)
    adjacency: dict[str, frozenset[str]] = Field(default_factory=dict)

    @classmethod
    def from_definitions(
        cls,
        locations: Mapping[str, str],
        adjacency: Mapping[str, Iterable[str]],
        enemies: Mapping[str, Iterable[EnemyDefinition]] | None = None,
        properties: Mapping[str, Mapping[str, str]] | None = None,
    ) -> WorldGraph:
        """
        Build a world from loader output.

        Args:
            locations: location id -> description
            adjacency: location id -> neighbor ids
            enemies: location id -> enemies or (name, max_health, attack_power)
            properties: location id -> property map

        Raises:
            WorldDefinitionError: if anything references an unknown location
        """
        built: dict[str, Location] = {}
        for raw_id, description in locations.items():
            location = Location(id=raw_id, description=description)
            built[location.id] = location

        def require(raw_id: str, what: str) -> str:
            location_id = normalize_location_id(raw_id)
            if location_id not in built:
                raise WorldDefinitionError(f"Unknown location '{raw_id}' in {what}")
            return location_id

        links: dict[str, frozenset[str]] = {}
        for raw_id, neighbors in adjacency.items():
            source = require(raw_id, "connections")
            links[source] = frozenset(require(n, f"connections of '{source}'") for n in neighbors)

        for raw_id, roster in (enemies or {}).items():
            location = built[require(raw_id, "enemies")]
            for entry in roster:
                if isinstance(entry, Enemy):
                    location.add_enemy(entry)
                else:
                    name, health, attack_power = entry
                    location.add_enemy(create_enemy(name, health, attack_power))

        for raw_id, props in (properties or {}).items():
            built[require(raw_id, "properties")].properties.update(props)

        return cls(locations=built, adjacency=links)

    def get(self, location_id: str) -> Location | None:
        return self.locations.get(normalize_location_id(location_id))

    def __contains__(self, location_id: object) -> bool:
        return isinstance(location_id, str) and normalize_location_id(location_id) in self.locations

    def neighbors(self, location_id: str) -> set[str]:
        """Direct neighbors of a location (a fresh set, empty if unknown)."""
        return set(self.adjacency.get(normalize_location_id(location_id), frozenset()))

    def is_adjacent(self, source: str, destination: str) -> bool:
        return normalize_location_id(destination) in self.adjacency.get(
            normalize_location_id(source), frozenset()
        )

    def replace_locations(self, locations: dict[str, Location]) -> None:
        """Swap the whole location map (used when restoring a save)."""
        self.locations = locations
