"""
Card helpers for tests.
"""

from ..engine_core.deck import Card


def card(card_id: str) -> Card:
    """Card from an id such as "8_of_clubs"."""
    return Card.from_id(card_id)


def cards(*card_ids: str) -> list[Card]:
    return [card(c) for c in card_ids]
