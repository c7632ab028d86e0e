"""
Deck - Card model and deck operations for Scoundrel.

Cards are immutable values. Decks are plain lists with the front
(index 0) being the next card to draw. Every operation returns a new
list and leaves its input untouched.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class Suit(Enum):
    """The four suits, in canonical deck order."""
    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"


class Rank(Enum):
    """Ranks with their numeric value (ace low)."""
    ACE = ("ace", 1)
    TWO = ("2", 2)
    THREE = ("3", 3)
    FOUR = ("4", 4)
    FIVE = ("5", 5)
    SIX = ("6", 6)
    SEVEN = ("7", 7)
    EIGHT = ("8", 8)
    NINE = ("9", 9)
    TEN = ("10", 10)
    JACK = ("jack", 11)
    QUEEN = ("queen", 12)
    KING = ("king", 13)

    def __init__(self, label: str, value_: int):
        self.label = label
        self.numeric = value_

    @classmethod
    def from_label(cls, label: str) -> Rank:
        for rank in cls:
            if rank.label == label:
                return rank
        raise ValueError(f"Unknown rank: {label}")


# Removed from the full deck before play
TRIMMED_RANKS = (Rank.ACE, Rank.JACK, Rank.QUEEN, Rank.KING)
TRIMMED_SUITS = (Suit.HEARTS, Suit.DIAMONDS)

FULL_DECK_SIZE = 52
TRIMMED_DECK_SIZE = 44


class DeckError(Exception):
    """Base class for deck precondition failures."""


class InsufficientCardsError(DeckError):
    """Raised when dealing more cards than the deck holds."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(f"Cannot deal {requested} cards from a deck of {available}")


class InvalidDeckError(DeckError):
    """Raised when a deck is not in the shape an operation expects."""


class RandomSource(Protocol):
    """Anything with a ``random()`` returning a float in [0, 1)."""

    def random(self) -> float: ...


@dataclass(frozen=True)
class Card:
    """
    A playing card.

    Identity is structural: two cards with the same suit and rank are
    equal and hash the same.
    """
    suit: Suit
    rank: Rank

    @property
    def value(self) -> int:
        return self.rank.numeric

    @property
    def id(self) -> str:
        return f"{self.rank.label}_of_{self.suit.value}"

    @property
    def is_monster(self) -> bool:
        return self.suit in (Suit.CLUBS, Suit.SPADES)

    @property
    def is_weapon(self) -> bool:
        return self.suit is Suit.DIAMONDS

    @property
    def is_potion(self) -> bool:
        return self.suit is Suit.HEARTS

    @property
    def sort_key(self) -> tuple[int, int]:
        """Position in the canonical suit-major order."""
        return (list(Suit).index(self.suit), self.value)

    @classmethod
    def from_id(cls, card_id: str) -> Card:
        """Parse an id such as ``"7_of_diamonds"``."""
        try:
            label, suit = card_id.split("_of_")
            return cls(suit=Suit(suit), rank=Rank.from_label(label))
        except ValueError as e:
            raise ValueError(f"Invalid card id: {card_id!r}") from e

    def __str__(self) -> str:
        return f"{self.rank.label} of {self.suit.value}"


def create_deck() -> list[Card]:
    """All 52 cards in canonical (suit-major) order."""
    return [Card(suit=suit, rank=rank) for suit in Suit for rank in Rank]


def trim_for_variant(deck: list[Card]) -> list[Card]:
    """
    Remove the red aces and face cards.

    Raises InvalidDeckError unless each of the 8 cards to remove is
    present exactly once.
    """
    to_remove = {Card(suit=s, rank=r) for s in TRIMMED_SUITS for r in TRIMMED_RANKS}
    found = [c for c in deck if c in to_remove]
    if len(found) != len(to_remove) or set(found) != to_remove:
        missing = sorted(c.id for c in to_remove - set(found))
        raise InvalidDeckError(
            f"Deck must contain each red ace/face card exactly once "
            f"(found {len(found)}, missing {missing})"
        )
    return [c for c in deck if c not in to_remove]


def shuffle(deck: list[Card], rng: RandomSource) -> list[Card]:
    """Fisher-Yates shuffle driven by ``rng``. Returns a new list."""
    shuffled = list(deck)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def deal(deck: list[Card], count: int) -> tuple[list[Card], list[Card]]:
    """Return (dealt, remaining) taking ``count`` cards from the front."""
    if count < 0:
        raise ValueError("count must be >= 0")
    if count > len(deck):
        raise InsufficientCardsError(count, len(deck))
    return list(deck[:count]), list(deck[count:])


def create_play_deck(rng: RandomSource) -> list[Card]:
    """A trimmed, shuffled 44-card deck ready for play."""
    return shuffle(trim_for_variant(create_deck()), rng)
