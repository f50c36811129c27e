"""
Combat Skill for Space Explorer.

Resolves a whole fight in one call. The player and the enemy trade blows
until the enemy is defeated or the player's energy drops below the cost of
continuing. The only state touched is the enemy's health; energy is
returned in the result for the caller to apply.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, Field

from src.models.world import Enemy
from src.skills.dice import RandomSource, roll_enemy_damage, roll_player_damage

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================


class CombatConfig(BaseModel):
    """Damage tuning for the exchange."""

    player_base_damage: int = Field(default=15, ge=0)
    player_damage_spread: int = Field(default=10, ge=1)
    crit_chance: float = Field(default=0.2, ge=0.0, le=1.0)
    crit_multiplier: int = Field(default=2, ge=1)

    enemy_min_damage: int = Field(default=5, ge=0)
    enemy_damage_spread: int = Field(default=10, ge=1)
    enemy_damage_offset: int = Field(default=5, ge=0)


# =============================================================================
# Result Models
# =============================================================================


class CombatOutcome(str, Enum):
    """How a fight ended."""

    REJECTED = "rejected"  # Not enough energy to start
    VICTORY = "victory"  # Enemy defeated
    DEFEAT = "defeat"  # Energy too low to keep fighting


class CombatRound(BaseModel):
    """One player strike and the enemy's answer."""

    player_damage: int
    is_critical: bool = False
    enemy_health: int = Field(description="Enemy health after the strike")
    enemy_damage: int | None = Field(
        default=None, description="Retaliation damage (None if the enemy fell)"
    )
    energy: int = Field(description="Player energy after the round")


class CombatResult(BaseModel):
    """Result of resolving a fight."""

    outcome: CombatOutcome
    enemy_name: str
    rounds: list[CombatRound] = Field(default_factory=list)
    energy_before: int
    energy_after: int

    @property
    def damage_dealt(self) -> int:
        return sum(r.player_damage for r in self.rounds)

    @property
    def damage_taken(self) -> int:
        return sum(r.enemy_damage or 0 for r in self.rounds)

    @property
    def is_victory(self) -> bool:
        return self.outcome == CombatOutcome.VICTORY


# =============================================================================
# Resolution
# =============================================================================


def resolve_combat(
    enemy: Enemy,
    energy: int,
    rng: RandomSource,
    *,
    cost: int = 15,
    config: CombatConfig | None = None,
) -> CombatResult:
    """
    Fight an enemy to a conclusion.

    Each round the player strikes first; if the enemy survives it
    retaliates against the player's energy. The loop continues while the
    enemy stands and energy is at least `cost`.

    Args:
        enemy: The opponent (its health is reduced in place)
        energy: Player energy going in
        rng: Randomness for damage rolls
        cost: Energy needed to start, and to keep, fighting
        config: Damage tuning

    Returns:
        CombatResult. REJECTED leaves the enemy untouched.
    """
    config = config or CombatConfig()

    if energy < cost:
        return CombatResult(
            outcome=CombatOutcome.REJECTED,
            enemy_name=enemy.name,
            energy_before=energy,
            energy_after=energy,
        )

    rounds: list[CombatRound] = []
    remaining = energy

    while not enemy.defeated and remaining >= cost:
        strike = roll_player_damage(
            rng,
            base=config.player_base_damage,
            spread=config.player_damage_spread,
            crit_chance=config.crit_chance,
            crit_multiplier=config.crit_multiplier,
        )
        enemy.take_damage(strike.total)

        retaliation: int | None = None
        if not enemy.defeated:
            retaliation = roll_enemy_damage(
                rng,
                enemy.attack_power,
                minimum=config.enemy_min_damage,
                spread=config.enemy_damage_spread,
                offset=config.enemy_damage_offset,
            ).total
            remaining -= retaliation

        rounds.append(
            CombatRound(
                player_damage=strike.total,
                is_critical=strike.is_critical,
                enemy_health=enemy.current_health,
                enemy_damage=retaliation,
                energy=remaining,
            )
        )
        logger.debug(
            "Round %d vs %s: dealt %d%s, took %s, energy %d",
            len(rounds),
            enemy.name,
            strike.total,
            " (critical)" if strike.is_critical else "",
            retaliation,
            remaining,
        )

    outcome = CombatOutcome.VICTORY if enemy.defeated else CombatOutcome.DEFEAT
    return CombatResult(
        outcome=outcome,
        enemy_name=enemy.name,
        rounds=rounds,
        energy_before=energy,
        energy_after=remaining,
    )
