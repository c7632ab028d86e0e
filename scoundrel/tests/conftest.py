"""
Pytest fixtures for Scoundrel tests.
"""

import random

import pytest

from ..engine_core.engine import Engine
from ..engine_core.state import GameState
from .helpers import card, cards


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def engine(rng) -> Engine:
    """An engine with a freshly started game."""
    engine = Engine()
    engine.start_game(rng)
    return engine


@pytest.fixture
def make_engine():
    """
    Build an engine in a specific position.

    Cards are given as ids ("8_of_clubs"). Zones not given are empty, so
    the 44-card total does not hold for arranged positions.
    """
    def _make(
        room=(),
        deck=(),
        discard=(),
        weapon=None,
        stack=(),
        carry=None,
        health=20,
        max_health=20,
        played=0,
        potion_used=False,
        skipped=False,
        seed=0,
    ) -> Engine:
        state = GameState(
            player_health=health,
            max_health=max_health,
            current_weapon=card(weapon) if weapon else None,
            deck=cards(*deck),
            discard_pile=cards(*discard),
            room_cards=cards(*room),
            weapon_stack=cards(*stack),
            carry_over_card=card(carry) if carry else None,
            game_active=True,
            cards_played_this_room=played,
            potion_used_this_room=potion_used,
            last_action_was_skip=skipped,
        )
        return Engine.from_state(state, rng=random.Random(seed))

    return _make
