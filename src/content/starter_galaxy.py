"""
Starter Galaxy for Space Explorer.

The solar system plus two exoplanets, already in the parsed shape the
world builder expects: descriptions, connections, enemies and properties.
Every mission in the default catalog has its target here.
"""

from __future__ import annotations

from collections import defaultdict

from src.models.world import WorldGraph

_LOCATIONS: dict[str, str] = {
    "earth": "Humanity's home world, a blue marble wrapped in orbital shipyards.",
    "moon": "Earth's dusty companion, dotted with mining domes and relay towers.",
    "mercury": "A scorched rock racing around the Sun, its night side bristling with solar arrays.",
    "venus": "Crushing clouds of sulfuric acid hide a surface hot enough to melt lead.",
    "mars": "Red deserts and the ruins of the first colonies under a thin pink sky.",
    "jupiter": "The gas giant's storms churn beneath busy and dangerous shipping lanes.",
    "europa": "An ice shell over a hidden ocean where something large moves in the dark.",
    "ganymede": "The largest moon in the system, a frozen waypoint for scouts and smugglers.",
    "saturn": "Majestic rings of ice and rock, scarred by recent raids.",
    "titan": "Orange haze over lakes of liquid methane.",
    "neptune": "A deep blue giant at the edge of the system, pulsing with strange quantum signals.",
    "proxima_centauri_b": "A young colony under a red dwarf sun, braced for invasion.",
    "kepler_186f": "A distant Earth-sized world guarded by an abandoned defense network.",
}

STARTER_CONNECTIONS: list[tuple[str, str]] = [
    ("earth", "moon"),
    ("earth", "mars"),
    ("earth", "venus"),
    ("venus", "mercury"),
    ("mars", "jupiter"),
    ("jupiter", "europa"),
    ("jupiter", "ganymede"),
    ("jupiter", "saturn"),
    ("saturn", "titan"),
    ("saturn", "neptune"),
    ("neptune", "proxima_centauri_b"),
    ("proxima_centauri_b", "kepler_186f"),
]
"""Two-way routes between locations."""

# name, max health, attack power
_ENEMIES: dict[str, list[tuple[str, int, int]]] = {
    "venus": [("Plasma", 55, 14)],
    "mars": [("Warrior", 50, 12)],
    "jupiter": [("Pirate", 60, 15)],
    "europa": [("Leviathan", 80, 20)],
    "ganymede": [("Scout", 40, 10)],
    "saturn": [("Raider", 65, 16)],
    "titan": [("Beast", 70, 18)],
    "neptune": [("Quantum", 100, 25)],
    "proxima_centauri_b": [("Invader", 90, 22)],
    "kepler_186f": [("DefenseAI", 110, 28)],
}

_PROPERTIES: dict[str, dict[str, str]] = {
    "earth": {"type": "planet", "atmosphere": "breathable", "habitable": "yes"},
    "moon": {"type": "moon", "atmosphere": "none", "habitable": "no"},
    "mercury": {"type": "planet", "atmosphere": "none", "habitable": "no"},
    "venus": {"type": "planet", "atmosphere": "toxic", "habitable": "no"},
    "mars": {"type": "planet", "atmosphere": "thin", "habitable": "no"},
    "jupiter": {"type": "gas_giant", "atmosphere": "toxic", "habitable": "no"},
    "europa": {"type": "moon", "atmosphere": "thin", "habitable": "no"},
    "ganymede": {"type": "moon", "atmosphere": "thin", "habitable": "no"},
    "saturn": {"type": "gas_giant", "atmosphere": "toxic", "habitable": "no"},
    "titan": {"type": "moon", "atmosphere": "dense", "habitable": "no"},
    "neptune": {"type": "gas_giant", "atmosphere": "toxic", "habitable": "no"},
    "proxima_centauri_b": {"type": "exoplanet", "atmosphere": "thin", "habitable": "yes"},
    "kepler_186f": {"type": "exoplanet", "atmosphere": "breathable", "habitable": "yes"},
}


def create_starter_galaxy() -> WorldGraph:
    """
    Create the standard galaxy.

    Returns a fresh WorldGraph each call, so sessions never share enemies.
    """
    adjacency: dict[str, set[str]] = defaultdict(set)
    for a, b in STARTER_CONNECTIONS:
        adjacency[a].add(b)
        adjacency[b].add(a)

    return WorldGraph.from_definitions(
        locations=_LOCATIONS,
        adjacency=adjacency,
        enemies=_ENEMIES,
        properties=_PROPERTIES,
    )
