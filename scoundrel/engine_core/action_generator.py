"""
Action Generator - Generates all legal actions from the engine's state.

The action generator is used by:
1. Bots to enumerate possible moves
2. UI to show available actions
3. Tests (every generated action must succeed)

Each distinct effect is generated once: a monster with no usable weapon
appears as play_card only, not also as fight_bare_handed.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .action import Action
from .rules import PLAYS_PER_ROOM

if TYPE_CHECKING:
    from .engine import Engine


@dataclass
class ActionGenerator:
    """Generates legal actions for the engine's current state."""
    engine: Engine

    def generate(self) -> list[Action]:
        state = self.engine.state
        if not state.game_active:
            return []

        if state.cards_played_this_room >= PLAYS_PER_ROOM:
            return [Action.advance_room()]

        actions = []
        for slot, card in enumerate(state.room_cards):
            actions.extend(self._generate_card_actions(slot, card))

        if self.engine.skip_blocker() is None:
            actions.append(Action.skip_room())

        return actions

    def _generate_card_actions(self, slot, card) -> list[Action]:
        if card.is_potion:
            return [Action.play_card(slot)]
        if card.is_weapon:
            return [Action.equip_weapon(slot)]

        # Monster
        if self.engine.state.current_weapon is None:
            return [Action.play_card(slot)]
        actions = [Action.fight_bare_handed(slot)]
        if self.engine.can_attack_with_weapon(slot):
            actions.insert(0, Action.play_card(slot))
        return actions


def legal_actions(engine: Engine) -> list[Action]:
    """Convenience function to list legal actions."""
    return ActionGenerator(engine).generate()
