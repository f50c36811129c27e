"""
Stateless Skills for Space Explorer.

Skills are pure functions that:
- Take structured input (Pydantic models, the world graph)
- Execute game rules (damage rolls, combat, search)
- Return structured output
- NEVER touch the session directly
"""

from src.skills.combat import (
    CombatConfig,
    CombatOutcome,
    CombatResult,
    CombatRound,
    resolve_combat,
)
from src.skills.dice import (
    DamageRoll,
    RandomSource,
    ScriptedRandomSource,
    SeededRandomSource,
    SystemRandomSource,
    roll_enemy_damage,
    roll_player_damage,
)
from src.skills.search import search_locations_dfs

__all__ = [
    # Randomness
    "RandomSource",
    "SystemRandomSource",
    "SeededRandomSource",
    "ScriptedRandomSource",
    "DamageRoll",
    "roll_player_damage",
    "roll_enemy_damage",
    # Combat
    "CombatConfig",
    "CombatOutcome",
    "CombatResult",
    "CombatRound",
    "resolve_combat",
    # Search
    "search_locations_dfs",
]
