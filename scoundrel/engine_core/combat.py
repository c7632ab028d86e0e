"""
Combat rules - Damage and the weapon stack constraint.

A weapon can only be used against a monster strictly weaker than the
last monster it defeated. The first kill after equipping is free.
Defeated monsters stay under the weapon (the weapon stack) until the
weapon is replaced.
"""

from __future__ import annotations
from dataclasses import dataclass

from .deck import Card


@dataclass(frozen=True)
class CombatResolution:
    """How a fight would go."""
    damage: int
    weapon_used: bool


def can_attack(monster: Card, weapon: Card | None, weapon_stack: list[Card]) -> bool:
    """True if ``weapon`` may be used against ``monster``."""
    if weapon is None:
        return False
    if not weapon_stack:
        return True
    return monster.value < weapon_stack[-1].value


def resolve_combat(
    monster: Card,
    weapon: Card | None,
    weapon_stack: list[Card],
    use_bare_hands: bool = False,
) -> CombatResolution | None:
    """
    Work out damage for a fight.

    Returns None when the weapon path is chosen but the weapon is too
    weak for this monster.
    """
    if use_bare_hands or weapon is None:
        return CombatResolution(damage=monster.value, weapon_used=False)

    if not can_attack(monster, weapon, weapon_stack):
        return None

    return CombatResolution(damage=max(0, monster.value - weapon.value), weapon_used=True)


def check_weapon_stack(weapon_stack: list[Card]) -> bool:
    """Values must be strictly decreasing in append order."""
    return all(
        later.value < earlier.value
        for earlier, later in zip(weapon_stack, weapon_stack[1:])
    )
