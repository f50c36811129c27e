"""
Location Search Skill.

Depth-first property search over the world graph. Neighbor order comes from
an unordered set, so only the set of matches is stable between runs.
"""

from __future__ import annotations

import logging

from src.models.world import WorldGraph, normalize_location_id

logger = logging.getLogger(__name__)


def search_locations_dfs(
    world: WorldGraph,
    start: str,
    property_key: str,
    property_value: str,
) -> list[str]:
    """
    Find locations whose property equals a value, exploring depth-first.

    Each reachable location is visited at most once. Matching uses exact
    string equality on the property value.

    Args:
        world: The galaxy to search
        start: Location id to start from
        property_key: Property name to test
        property_value: Required value

    Returns:
        Matching location ids in visitation order
    """
    origin = normalize_location_id(start)
    visited: set[str] = set()
    found: list[str] = []
    stack = [origin]

    while stack:
        location_id = stack.pop()
        if location_id in visited:
            continue
        visited.add(location_id)

        location = world.locations.get(location_id)
        if location is not None and location.get_property(property_key) == property_value:
            found.append(location_id)

        # Reversed so the first neighbor is explored first, as recursion would
        unexplored = [n for n in world.neighbors(location_id) if n not in visited]
        stack.extend(reversed(unexplored))

    logger.debug(
        "DFS from %s for %s=%s visited %d locations, found %d",
        origin,
        property_key,
        property_value,
        len(visited),
        len(found),
    )
    return found
