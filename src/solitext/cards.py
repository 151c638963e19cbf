"""Card values and deck construction."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional


class Suit(Enum):
    HEARTS = 0
    SPADES = 1
    DIAMONDS = 2
    CLUBS = 3

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]

    def __str__(self) -> str:
        return self.symbol


_SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
}


class Rank(IntEnum):
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def label(self) -> str:
        return _RANK_LABELS.get(self, str(int(self)))

    def __str__(self) -> str:
        return self.label


_RANK_LABELS = {Rank.ACE: "A", Rank.JACK: "J", Rank.QUEEN: "Q", Rank.KING: "K"}


@dataclass(frozen=True)
class Card:
    """Immutable playing card; two cards are equal iff suit and rank match."""

    suit: Suit
    rank: Rank

    @property
    def is_red(self) -> bool:
        return self.suit.is_red

    def __str__(self) -> str:
        return f"{self.rank.label}{self.suit.symbol}"


def ordered_deck() -> List[Card]:
    """Return the 52 cards suit-major, rank-ascending."""
    return [Card(suit, rank) for suit in Suit for rank in Rank]


def shuffled_deck(rng: Optional[random.Random] = None) -> List[Card]:
    """Return a uniformly shuffled deck.

    ``rng`` is any object with a ``shuffle`` method (normally a seeded
    :class:`random.Random`); the module-level generator is used otherwise.
    """
    deck = ordered_deck()
    (rng or random).shuffle(deck)
    return deck
