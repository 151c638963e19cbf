"""Klondike rules: move validation, card transfers and the per-turn pipeline."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from solitext.cards import Card, Rank, shuffled_deck
from solitext.game_state import PILE_COUNT, CardColumn, GameMode, GameState
from solitext.selection import Selection

logger = logging.getLogger(__name__)


class MoveResult(Enum):
    OK = "ok"
    INVALID_MOVE = "invalid move"
    TRANSFER_FAILED = "move attempt failed"

    @property
    def ok(self) -> bool:
        return self is MoveResult.OK


class TurnOutcome(Enum):
    CONTINUE = "continue"
    VICTORY = "victory"


@dataclass(frozen=True)
class TurnReport:
    outcome: TurnOutcome
    cursor: Optional[Selection]
    selected: Optional[Selection]
    help_text: str


def new_game(mode: GameMode = GameMode.DRAW_ONE, rng: Optional[random.Random] = None) -> GameState:
    """Deal a freshly shuffled game with the column tops turned up."""
    state = GameState.init(shuffled_deck(rng), mode)
    face_up_on_columns(state)
    return state


def restart_game(seed_deck: Sequence[Card], mode: GameMode = GameMode.DRAW_ONE) -> GameState:
    """Deal again from a captured deck order (``GameState.dealt_from``)."""
    state = GameState.init(seed_deck, mode)
    face_up_on_columns(state)
    return state


def victory(game_state: GameState) -> bool:
    for pile in game_state.foundations:
        top = pile.peek()
        if top is None or top.rank != Rank.KING:
            return False
    return True


def face_up_on_columns(game_state: GameState) -> None:
    for column in game_state.columns:
        column.expose_top()


def draw_from_deck(game_state: GameState) -> None:
    game_state.deck_hit()


def valid_move(from_: Selection, to: Selection, game_state: GameState) -> MoveResult:
    """Decide whether the cards selected by ``from_`` may be placed at ``to``.

    Pure: neither selection's collection is modified.
    """
    if from_.same_collection(to) or to.is_deck:
        return MoveResult.INVALID_MOVE
    if from_.is_pile and to.is_pile:
        return MoveResult.INVALID_MOVE

    source = game_state.collection(from_)
    if from_.is_column:
        run = source.peek_n(from_.card_count)
        if run is None:
            return MoveResult.INVALID_MOVE
        if to.is_pile and len(run) != 1:
            return MoveResult.INVALID_MOVE
        card = run[0]
    else:
        card = source.peek()
        if card is None:
            return MoveResult.INVALID_MOVE

    if to.is_pile:
        accepted = game_state.foundations[to.index].accepts(card)
    else:
        accepted = game_state.columns[to.index].accepts(card)
    return MoveResult.OK if accepted else MoveResult.INVALID_MOVE


def move_cards(from_: Selection, to: Selection, game_state: GameState) -> MoveResult:
    """Transfer the selected cards without checking the game rules."""
    if from_.same_collection(to):
        return MoveResult.TRANSFER_FAILED
    source = game_state.collection(from_)
    # Column entries carry face state that receive() would not restore
    saved_entries = list(source.entries) if isinstance(source, CardColumn) else None
    cards = source.take(from_.card_count_selected())
    if cards is None:
        return MoveResult.TRANSFER_FAILED
    if not game_state.collection(to).receive(cards):
        if saved_entries is not None:
            source.entries[:] = saved_entries
        else:
            source.receive(cards)
        return MoveResult.TRANSFER_FAILED
    return MoveResult.OK


def attempt_move(from_: Selection, to: Selection, game_state: GameState) -> MoveResult:
    result = valid_move(from_, to, game_state)
    if not result.ok:
        logger.debug("Rejected move %s -> %s", from_, to)
        return result
    result = move_cards(from_, to, game_state)
    if result.ok:
        logger.debug("Moved %s -> %s", from_, to)
    return result


def auto_place_to_foundation(column_index: int, game_state: GameState) -> MoveResult:
    """Move the top card of a column to the first foundation that takes it."""
    from_ = Selection.column(column_index, 1)
    for i in range(PILE_COUNT):
        result = attempt_move(from_, Selection.pile(i), game_state)
        if result.ok:
            return result
    return MoveResult.INVALID_MOVE


def context_help(cursor: Optional[Selection]) -> str:
    if cursor is None:
        return ""
    if cursor.is_deck:
        return "Enter: Hit"
    if cursor.is_column:
        return "Enter: Try to Move to Stack"
    return ""


def run_turn_pipeline(
    game_state: GameState,
    cursor: Optional[Selection] = None,
    selected: Optional[Selection] = None,
    *,
    debug_mode: bool = False,
    auto_draw: bool = True,
) -> TurnReport:
    """Restore the table invariants after a user action.

    Turns column tops face-up, draws when the drawn pile is empty, clamps
    both selections, derives the context help line and checks for victory.
    """
    face_up_on_columns(game_state)
    if auto_draw:
        game_state.auto_hit()
    if cursor is not None:
        cursor = cursor.apply_column_selection_rules(game_state, debug_mode)
    if selected is not None:
        selected = selected.apply_column_selection_rules(game_state, debug_mode)
    help_text = context_help(cursor)
    outcome = TurnOutcome.VICTORY if victory(game_state) else TurnOutcome.CONTINUE
    return TurnReport(outcome, cursor, selected, help_text)
