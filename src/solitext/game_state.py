"""Piles and the aggregate game state.

Every card of the deck lives in exactly one collection of a :class:`GameState`
at any moment: the face-down deck, the drawn (waste) pile, one of the seven
tableau columns or one of the four foundations.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence, Tuple

from solitext.cards import Card, Rank, Suit, ordered_deck

if TYPE_CHECKING:
    from solitext.selection import Selection

logger = logging.getLogger(__name__)

COLUMN_COUNT = 7
PILE_COUNT = 4


class CardState(Enum):
    FACE_UP = "up"
    FACE_DOWN = "down"


class GameMode(Enum):
    DRAW_ONE = 1
    DRAW_THREE = 3

    @property
    def draw_count(self) -> int:
        return self.value

    @property
    def label(self) -> str:
        return "Draw One" if self is GameMode.DRAW_ONE else "Draw Three"


class CardCollection(ABC):
    """Common contract of the piles cards can be moved between.

    ``take`` and ``receive`` report failure through their return value
    (``None`` / ``False``) and leave the collection untouched in that case.
    """

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def take(self, n: int) -> Optional[List[Card]]:
        """Remove and return the top ``n`` cards, bottom-most first."""

    @abstractmethod
    def receive(self, cards: Sequence[Card]) -> bool:
        """Place ``cards`` on top, in order."""

    @abstractmethod
    def peek_n(self, n: int) -> Optional[List[Card]]:
        """Return the top ``n`` cards, bottom-most first, without removing them."""

    def peek(self) -> Optional[Card]:
        top = self.peek_n(1)
        return top[0] if top else None

    def is_empty(self) -> bool:
        return len(self) == 0


@dataclass
class DrawnPile(CardCollection):
    """Face-up waste pile fed from the deck; only its top card is playable."""

    cards: List[Card] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def take(self, n: int) -> Optional[List[Card]]:
        if n < 1 or n > len(self.cards):
            return None
        taken = self.cards[-n:]
        del self.cards[-n:]
        return taken

    def receive(self, cards: Sequence[Card]) -> bool:
        if len(cards) != 1:
            return False
        self.cards.append(cards[0])
        return True

    def peek_n(self, n: int) -> Optional[List[Card]]:
        if n < 1 or n > len(self.cards):
            return None
        return self.cards[-n:]


@dataclass
class CardColumn(CardCollection):
    """A tableau column: (card, state) entries from bottom to top."""

    entries: List[Tuple[Card, CardState]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Tuple[Card, CardState]]:
        return iter(self.entries)

    def face_up_cards(self) -> int:
        """Length of the contiguous face-up run at the top of the column."""
        count = 0
        for _card, state in reversed(self.entries):
            if state is not CardState.FACE_UP:
                break
            count += 1
        return count

    def expose_top(self) -> bool:
        """Turn the top card face-up; returns True if it was face-down."""
        if not self.entries:
            return False
        card, state = self.entries[-1]
        if state is CardState.FACE_UP:
            return False
        self.entries[-1] = (card, CardState.FACE_UP)
        return True

    def accepts(self, card: Card) -> bool:
        top = self.peek()
        if top is None:
            return card.rank == Rank.KING
        return top.is_red != card.is_red and top.rank == card.rank + 1

    def take(self, n: int) -> Optional[List[Card]]:
        if n < 1 or n > len(self.entries):
            return None
        taken = [card for card, _state in self.entries[-n:]]
        del self.entries[-n:]
        return taken

    def receive(self, cards: Sequence[Card]) -> bool:
        if not cards:
            return False
        self.entries.extend((card, CardState.FACE_UP) for card in cards)
        return True

    def peek_n(self, n: int) -> Optional[List[Card]]:
        if n < 1 or n > len(self.entries):
            return None
        return [card for card, _state in self.entries[-n:]]


@dataclass
class Foundation(CardCollection):
    """Ascending same-suit pile, built up from the Ace."""

    suit: Suit
    cards: List[Card] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def accepts(self, card: Card) -> bool:
        if card.suit is not self.suit:
            return False
        top = self.peek()
        if top is None:
            return card.rank == Rank.ACE
        return card.rank == top.rank + 1

    def is_complete(self) -> bool:
        top = self.peek()
        return top is not None and top.rank == Rank.KING

    def take(self, n: int) -> Optional[List[Card]]:
        if n != 1 or not self.cards:
            return None
        return [self.cards.pop()]

    def receive(self, cards: Sequence[Card]) -> bool:
        if len(cards) != 1:
            return False
        self.cards.append(cards[0])
        return True

    def peek_n(self, n: int) -> Optional[List[Card]]:
        if n < 1 or n > len(self.cards):
            return None
        return self.cards[-n:]


def _empty_columns() -> List[CardColumn]:
    return [CardColumn() for _ in range(COLUMN_COUNT)]


def _empty_foundations() -> List[Foundation]:
    return [Foundation(Suit(i)) for i in range(PILE_COUNT)]


@dataclass
class GameState:
    deck: List[Card] = field(default_factory=list)
    deck_drawn: DrawnPile = field(default_factory=DrawnPile)
    columns: List[CardColumn] = field(default_factory=_empty_columns)
    foundations: List[Foundation] = field(default_factory=_empty_foundations)
    game_mode: GameMode = GameMode.DRAW_ONE
    dealt_from: Tuple[Card, ...] = ()

    @classmethod
    def init(cls, deck: Sequence[Card], game_mode: GameMode = GameMode.DRAW_ONE) -> "GameState":
        """Deal ``deck`` (top is the last element) into a new game.

        Column ``i`` receives ``i + 1`` cards, all face-down; the rest stays in
        the deck. Exposing the column tops is left to the turn pipeline.
        """
        state = cls(game_mode=game_mode, dealt_from=tuple(deck))
        remaining = list(deck)
        for i, column in enumerate(state.columns):
            for _ in range(i + 1):
                if not remaining:
                    raise ValueError("deck should have enough cards to deal")
                column.entries.append((remaining.pop(), CardState.FACE_DOWN))
        state.deck = remaining
        logger.debug("Dealt %s game, %d cards left in deck", game_mode.label, len(state.deck))
        return state

    @classmethod
    def victory(cls) -> "GameState":
        """A finished game: every foundation holds its full suit."""
        state = cls(dealt_from=tuple(ordered_deck()))
        for foundation in state.foundations:
            foundation.cards = [Card(foundation.suit, rank) for rank in Rank]
        return state

    @classmethod
    def almost_victory(cls) -> "GameState":
        """A finished game with one King put back into the tableau."""
        state = cls.victory()
        king = state.foundations[0].take(1)
        state.columns[0].receive(king)
        return state

    def column_is_empty(self, index: int) -> bool:
        return self.columns[index].is_empty()

    def collections(self) -> List[CardCollection]:
        return [self.deck_drawn, *self.columns, *self.foundations]

    def collection(self, selection: "Selection") -> CardCollection:
        """The pile a selection points at."""
        if selection.is_deck:
            return self.deck_drawn
        if selection.is_column:
            return self.columns[selection.index]
        return self.foundations[selection.index]

    def all_cards(self) -> List[Card]:
        cards = list(self.deck) + list(self.deck_drawn)
        for column in self.columns:
            cards.extend(card for card, _state in column)
        for foundation in self.foundations:
            cards.extend(foundation)
        return cards

    def card_count(self) -> int:
        return len(self.deck) + sum(len(c) for c in self.collections())

    def visible_drawn(self) -> List[Card]:
        """Top drawn cards shown to the player: one, or up to three."""
        n = self.game_mode.draw_count
        return self.deck_drawn.cards[-n:] if self.deck_drawn.cards else []

    def deck_hit(self) -> None:
        """Draw a batch from the deck, or recycle the drawn pile when the deck is empty."""
        if not self.deck:
            if not self.deck_drawn.cards:
                return
            self.deck = list(reversed(self.deck_drawn.cards))
            self.deck_drawn.cards.clear()
            logger.debug("Recycled %d drawn cards into the deck", len(self.deck))
            return
        n = min(self.game_mode.draw_count, len(self.deck))
        for _ in range(n):
            self.deck_drawn.cards.append(self.deck.pop())
        logger.debug("Drew %d card(s), %d left in deck", n, len(self.deck))

    def auto_hit(self) -> None:
        """Draw when the deck has cards and nothing is showing on the drawn pile."""
        if self.deck and not self.deck_drawn.cards:
            self.deck_hit()
