"""Compact builders for table positions used across the unit tests."""

from typing import List, Tuple

from solitext.cards import Card, Rank, Suit
from solitext.game_state import CardColumn, CardState, GameState

_SUIT_LETTERS = {"H": Suit.HEARTS, "S": Suit.SPADES, "D": Suit.DIAMONDS, "C": Suit.CLUBS}
_RANK_LETTERS = {"A": Rank.ACE, "J": Rank.JACK, "Q": Rank.QUEEN, "K": Rank.KING}


def card(code: str) -> Card:
    """``"AH"`` -> Ace of Hearts, ``"10S"`` -> Ten of Spades."""
    rank_text, suit_text = code[:-1], code[-1]
    rank = _RANK_LETTERS.get(rank_text) or Rank(int(rank_text))
    return Card(_SUIT_LETTERS[suit_text], rank)


def column(*codes: str, face_down: int = 0) -> CardColumn:
    """Build a column bottom-to-top; the first ``face_down`` cards are hidden."""
    entries: List[Tuple[Card, CardState]] = []
    for i, code in enumerate(codes):
        state = CardState.FACE_DOWN if i < face_down else CardState.FACE_UP
        entries.append((card(code), state))
    return CardColumn(entries)


def empty_state(mode=None) -> GameState:
    state = GameState()
    if mode is not None:
        state.game_mode = mode
    return state
