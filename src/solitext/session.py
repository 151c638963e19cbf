"""Turn loop owner: one game, its cursor and the player's picked-up cards."""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Optional

from solitext import game_logic
from solitext.game_logic import TurnOutcome
from solitext.game_state import GameMode, GameState
from solitext.selection import CursorAction, Selection, apply_cursor_action

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    PLAYING = "playing"
    WON = "won"


class GameSession:
    """Processes player actions one at a time against a single game state.

    Every action method mutates the state and/or selections and then runs the
    turn pipeline via :meth:`end_turn`. Once the game is won, actions are
    ignored until :meth:`new_game` or :meth:`restart`.
    """

    def __init__(
        self,
        mode: GameMode = GameMode.DRAW_ONE,
        *,
        rng: Optional[random.Random] = None,
        debug_mode: bool = False,
        auto_draw: bool = True,
    ):
        self.rng = rng
        self.debug_mode = debug_mode
        self.auto_draw = auto_draw
        self.state: GameState = GameState()
        self.cursor: Selection = Selection.deck()
        self.selected: Optional[Selection] = None
        self.debug_message = ""
        self.help_text = ""
        self.phase = GamePhase.PLAYING
        self.new_game(mode)

    @property
    def mode(self) -> GameMode:
        return self.state.game_mode

    @property
    def won(self) -> bool:
        return self.phase is GamePhase.WON

    def _reset(self, state: GameState) -> None:
        self.state = state
        self.cursor = Selection.deck()
        self.selected = None
        self.debug_message = ""
        self.help_text = ""
        self.phase = GamePhase.PLAYING
        self.end_turn()

    def new_game(self, mode: Optional[GameMode] = None) -> None:
        mode = mode or self.state.game_mode
        logger.info("New %s game", mode.label)
        self._reset(game_logic.new_game(mode, self.rng))

    def restart(self) -> None:
        logger.info("Restarting current %s game", self.mode.label)
        self._reset(game_logic.restart_game(self.state.dealt_from, self.mode))

    def end_turn(self) -> TurnOutcome:
        report = game_logic.run_turn_pipeline(
            self.state,
            self.cursor,
            self.selected,
            debug_mode=self.debug_mode,
            auto_draw=self.auto_draw,
        )
        self.cursor = report.cursor
        self.selected = report.selected
        self.help_text = report.help_text
        if report.outcome is TurnOutcome.VICTORY:
            self.debug_message = "Victory"
            self.phase = GamePhase.WON
            logger.info("Game won")
        return report.outcome

    def cursor_action(self, action: CursorAction) -> TurnOutcome:
        if self.won:
            return TurnOutcome.VICTORY
        self.cursor = apply_cursor_action(action, self.state, self.cursor, self.selected)
        return self.end_turn()

    def cards_action(self) -> TurnOutcome:
        """Pick up the cursor's cards, or drop the picked-up cards at the cursor."""
        if self.won:
            return TurnOutcome.VICTORY
        if self.selected is not None:
            from_, self.selected = self.selected, None
            result = game_logic.attempt_move(from_, self.cursor, self.state)
            self.debug_message = "move OK" if result.ok else result.value
        elif self.cursor.card_count_selected() > 0:
            self.selected = self.cursor
        return self.end_turn()

    def enter_action(self) -> TurnOutcome:
        """Draw from the deck, or send a column's top card to a foundation."""
        if self.won:
            return TurnOutcome.VICTORY
        if self.cursor.is_deck:
            game_logic.draw_from_deck(self.state)
        elif self.cursor.is_column:
            result = game_logic.auto_place_to_foundation(self.cursor.index, self.state)
            self.debug_message = "move OK" if result.ok else result.value
        return self.end_turn()

    def clear_selection(self) -> TurnOutcome:
        if self.won:
            return TurnOutcome.VICTORY
        self.selected = None
        return self.end_turn()

    def toggle_debug(self) -> TurnOutcome:
        self.debug_mode = not self.debug_mode
        if self.won:
            return TurnOutcome.VICTORY
        return self.end_turn()

    def debug_unchecked_move(self) -> TurnOutcome:
        """Debug only: move the picked-up cards to the cursor ignoring the rules."""
        if self.won:
            return TurnOutcome.VICTORY
        if not self.debug_mode:
            return TurnOutcome.CONTINUE
        if self.selected is not None:
            from_, self.selected = self.selected, None
            result = game_logic.move_cards(from_, self.cursor, self.state)
            self.debug_message = "move OK" if result.ok else result.value
        else:
            self.selected = self.cursor
        return self.end_turn()

    def debug_check_valid(self) -> TurnOutcome:
        """Debug only: report whether the pending move would be accepted."""
        if self.won:
            return TurnOutcome.VICTORY
        if not self.debug_mode:
            return TurnOutcome.CONTINUE
        if self.selected is not None:
            result = game_logic.valid_move(self.selected, self.cursor, self.state)
            self.debug_message = result.name
        else:
            self.debug_message = ""
        return self.end_turn()
