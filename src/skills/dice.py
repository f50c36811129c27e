"""
Randomness Skill.

Every random decision in the game goes through a RandomSource so that
combat and mission draws can be replayed exactly:
- SystemRandomSource: cryptographic randomness for real play
- SeededRandomSource: reproducible stream from a seed
- ScriptedRandomSource: fixed values, for tests and demos
"""

from __future__ import annotations

import random
import secrets
from collections import deque
from collections.abc import Iterable
from typing import Protocol

from pydantic import BaseModel, Field


class RandomSource(Protocol):
    """Source of uniform random numbers."""

    def next_int(self, bound: int) -> int:
        """Uniform integer in [0, bound)."""
        ...

    def next_float(self) -> float:
        """Uniform float in [0, 1)."""
        ...


class SystemRandomSource:
    """Fair, cryptographically random draws."""

    def __init__(self) -> None:
        self._system = random.SystemRandom()

    def next_int(self, bound: int) -> int:
        if bound < 1:
            raise ValueError(f"Bound must be positive: {bound}")
        return secrets.randbelow(bound)

    def next_float(self) -> float:
        return self._system.random()


class SeededRandomSource:
    """Reproducible draws: the same seed yields the same stream."""

    def __init__(self, seed: int | str | None = None) -> None:
        self.seed = seed
        self._random = random.Random(seed)

    def next_int(self, bound: int) -> int:
        if bound < 1:
            raise ValueError(f"Bound must be positive: {bound}")
        return self._random.randrange(bound)

    def next_float(self) -> float:
        return self._random.random()


class ScriptedRandomSource:
    """
    Replays pre-recorded values.

    Integers and floats are consumed from separate queues. An integer
    outside [0, bound) is rejected rather than silently wrapped.
    """

    def __init__(self, ints: Iterable[int] = (), floats: Iterable[float] = ()) -> None:
        self._ints: deque[int] = deque(ints)
        self._floats: deque[float] = deque(floats)

    def push_ints(self, *values: int) -> None:
        self._ints.extend(values)

    def push_floats(self, *values: float) -> None:
        self._floats.extend(values)

    @property
    def remaining(self) -> tuple[int, int]:
        """(ints left, floats left)"""
        return len(self._ints), len(self._floats)

    def next_int(self, bound: int) -> int:
        if not self._ints:
            raise IndexError("Scripted integer stream exhausted")
        value = self._ints.popleft()
        if not 0 <= value < bound:
            raise ValueError(f"Scripted value {value} outside [0, {bound})")
        return value

    def next_float(self) -> float:
        if not self._floats:
            raise IndexError("Scripted float stream exhausted")
        return self._floats.popleft()


class DamageRoll(BaseModel):
    """Result of a damage roll."""

    base: int = Field(description="Damage before any multiplier")
    is_critical: bool = Field(default=False)
    total: int = Field(description="Final damage")


def roll_player_damage(
    rng: RandomSource,
    *,
    base: int = 15,
    spread: int = 10,
    crit_chance: float = 0.2,
    crit_multiplier: int = 2,
) -> DamageRoll:
    """
    Roll the player's attack.

    Base damage is uniform in [base, base + spread - 1]; a critical hit
    (probability crit_chance) multiplies it.
    """
    damage = base + rng.next_int(spread)
    is_critical = rng.next_float() < crit_chance
    total = damage * crit_multiplier if is_critical else damage
    return DamageRoll(base=damage, is_critical=is_critical, total=total)


def roll_enemy_damage(
    rng: RandomSource,
    attack_power: int,
    *,
    minimum: int = 5,
    spread: int = 10,
    offset: int = 5,
) -> DamageRoll:
    """Roll an enemy's retaliation: attack_power shifted by [-offset, spread - offset - 1]."""
    damage = max(minimum, attack_power + rng.next_int(spread) - offset)
    return DamageRoll(base=damage, total=damage)
