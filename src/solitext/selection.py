"""Cursor and picked-up selections.

A :class:`Selection` names a location on the table: the drawn pile, a run of
cards at the top of a tableau column, or a foundation. It is an immutable
value; every navigation method returns a new selection.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Optional

from solitext.game_state import COLUMN_COUNT, PILE_COUNT

if TYPE_CHECKING:
    from solitext.game_state import CardCollection, GameState


class SelectionKind(Enum):
    DECK = "deck"
    COLUMN = "column"
    PILE = "pile"


class CursorAction(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    EXTEND_UP = "extend_up"
    EXTEND_DOWN = "extend_down"
    JUMP_TO_DECK = "jump_to_deck"
    JUMP_TO_LAST_PILE = "jump_to_last_pile"


@dataclass(frozen=True)
class Selection:
    kind: SelectionKind
    index: int = 0
    card_count: int = 0

    def __post_init__(self):
        if self.kind is SelectionKind.COLUMN and not 0 <= self.index < COLUMN_COUNT:
            raise ValueError(f"column index out of range: {self.index}")
        if self.kind is SelectionKind.PILE and not 0 <= self.index < PILE_COUNT:
            raise ValueError(f"pile index out of range: {self.index}")
        if self.card_count < 0:
            raise ValueError(f"negative card count: {self.card_count}")

    @classmethod
    def deck(cls) -> "Selection":
        return cls(SelectionKind.DECK)

    @classmethod
    def column(cls, index: int, card_count: int = 0) -> "Selection":
        return cls(SelectionKind.COLUMN, index, card_count)

    @classmethod
    def pile(cls, index: int) -> "Selection":
        return cls(SelectionKind.PILE, index)

    @property
    def is_deck(self) -> bool:
        return self.kind is SelectionKind.DECK

    @property
    def is_column(self) -> bool:
        return self.kind is SelectionKind.COLUMN

    @property
    def is_pile(self) -> bool:
        return self.kind is SelectionKind.PILE

    def __str__(self) -> str:
        if self.is_deck:
            return "Deck"
        if self.is_column:
            return f"Column {self.index} ({self.card_count})"
        return f"Pile {self.index}"

    def same_collection(self, other: "Selection") -> bool:
        """Is ``other`` in the same deck, column or pile (card count ignored)?"""
        if self.kind is not other.kind:
            return False
        return self.is_deck or self.index == other.index

    def card_count_selected(self) -> int:
        """Number of cards selected; the deck and piles always offer one."""
        return self.card_count if self.is_column else 1

    def _landing_column(self, index: int, selected: Optional["Selection"]) -> "Selection":
        if selected is not None and selected.is_column and selected.index == index:
            return Selection.column(index, selected.card_count)
        return Selection.column(index, 0)

    def move_left(self, selected: Optional["Selection"] = None) -> "Selection":
        if self.is_deck:
            return self
        if self.is_column:
            if self.index > 0:
                return self._landing_column(self.index - 1, selected)
            return Selection.deck()
        return self._landing_column(COLUMN_COUNT - 1, selected)

    def move_right(self, selected: Optional["Selection"] = None) -> "Selection":
        if self.is_deck:
            return self._landing_column(0, selected)
        if self.is_column:
            if self.index < COLUMN_COUNT - 1:
                return self._landing_column(self.index + 1, selected)
            return Selection.pile(0)
        return self

    def select_up(self) -> "Selection":
        if self.is_column:
            return replace(self, card_count=self.card_count + 1)
        if self.is_pile and self.index > 0:
            return Selection.pile(self.index - 1)
        return self

    def select_down(self) -> "Selection":
        if self.is_column and self.card_count > 0:
            return replace(self, card_count=self.card_count - 1)
        if self.is_pile and self.index < PILE_COUNT - 1:
            return Selection.pile(self.index + 1)
        return self

    def apply_column_selection_rules(self, game_state: "GameState", debug_mode: bool = False) -> "Selection":
        """Clamp a column selection to the cards that may be selected.

        A non-empty column always has at least one card selected. Outside
        debug mode only the face-up run counts; debug mode allows selecting
        face-down cards too.
        """
        if not self.is_column:
            return self
        column = game_state.columns[self.index]
        card_count = self.card_count
        if len(column) > 0 and card_count == 0:
            card_count = 1
        max_count = len(column) if debug_mode else column.face_up_cards()
        card_count = min(card_count, max_count)
        if card_count == self.card_count:
            return self
        return replace(self, card_count=card_count)

    def selected_collection(self, game_state: "GameState") -> "CardCollection":
        return game_state.collection(self)


def apply_cursor_action(
    action: CursorAction,
    game_state: "GameState",
    selection: Selection,
    selected: Optional[Selection] = None,
) -> Selection:
    """Return the cursor after ``action``; clamping is left to the turn pipeline."""
    if action is CursorAction.MOVE_LEFT:
        return selection.move_left(selected)
    if action is CursorAction.MOVE_RIGHT:
        return selection.move_right(selected)
    if action is CursorAction.EXTEND_UP:
        return selection.select_up()
    if action is CursorAction.EXTEND_DOWN:
        return selection.select_down()
    if action is CursorAction.JUMP_TO_DECK:
        return Selection.deck()
    if action is CursorAction.JUMP_TO_LAST_PILE:
        return Selection.pile(0)
    raise ValueError(f"unknown cursor action: {action!r}")
