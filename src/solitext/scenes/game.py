import pygame

from solitext import common as C
from solitext.game_state import CardState, GameMode
from solitext.selection import CursorAction, Selection
from solitext.session import GameSession

KEY_CURSOR_ACTIONS = {
    pygame.K_LEFT: CursorAction.MOVE_LEFT,
    pygame.K_RIGHT: CursorAction.MOVE_RIGHT,
    pygame.K_UP: CursorAction.EXTEND_UP,
    pygame.K_DOWN: CursorAction.EXTEND_DOWN,
    pygame.K_HOME: CursorAction.JUMP_TO_DECK,
    pygame.K_END: CursorAction.JUMP_TO_LAST_PILE,
}

HELP_LINES = [
    "Controls:",
    "",
    " Arrow keys, Home, End: Move cursor",
    " Enter: Hit/move card to stack",
    " Space: Select/move cards",
    " x: Clear selection",
    " Esc: Menu",
]

MENU_LINES = [
    "1: New Game (Draw One)",
    "3: New Game (Draw Three)",
    "r: Restart current game",
    "q: Quit",
    "Esc: Return to game",
]


# ---------- Table layout ----------
def drawn_pos(i):
    return C.DECK_X, C.ROW_Y + C.CARD_H + 24 + i * C.CARD_FAN_Y


def column_pos(index, row):
    return C.COLUMNS_X + index * (C.CARD_W + C.CARD_GAP_X), C.ROW_Y + row * C.CARD_FAN_Y


def pile_pos(index):
    return C.PILES_X, C.ROW_Y + index * (C.CARD_H + C.PILE_GAP_Y)


def selection_rect(session: GameSession, selection: Selection):
    """Screen rect covering the cards a selection points at."""
    state = session.state
    if selection.is_deck:
        shown = max(1, len(state.visible_drawn()))
        x, y = drawn_pos(shown - 1)
        return pygame.Rect(x, y, C.CARD_W, C.CARD_H)
    if selection.is_pile:
        x, y = pile_pos(selection.index)
        return pygame.Rect(x, y, C.CARD_W, C.CARD_H)
    length = len(state.columns[selection.index])
    count = max(1, selection.card_count)
    first = max(0, length - count)
    x, y = column_pos(selection.index, first)
    rows = max(1, length - first)
    return pygame.Rect(x, y, C.CARD_W, C.CARD_H + (rows - 1) * C.CARD_FAN_Y)


def draw_table(screen, session: GameSession, show_cursor=True):
    state = session.state
    screen.fill(C.TABLE_BG)
    # Deck
    if state.deck:
        C.draw_card(screen, state.deck[-1], C.DECK_X, C.ROW_Y, face_up=False)
    else:
        C.draw_empty_slot(screen, C.DECK_X, C.ROW_Y, "O")
    # Drawn pile
    visible = state.visible_drawn()
    if visible:
        for i, card in enumerate(visible):
            x, y = drawn_pos(i)
            C.draw_card(screen, card, x, y)
    else:
        x, y = drawn_pos(0)
        C.draw_empty_slot(screen, x, y)
    # Columns
    for index, column in enumerate(state.columns):
        if column.is_empty():
            x, y = column_pos(index, 0)
            C.draw_empty_slot(screen, x, y, "K")
        for row, (card, card_state) in enumerate(column):
            x, y = column_pos(index, row)
            C.draw_card(screen, card, x, y, face_up=card_state is CardState.FACE_UP)
    # Foundations
    for index, pile in enumerate(state.foundations):
        x, y = pile_pos(index)
        top = pile.peek()
        if top is None:
            C.draw_empty_slot(screen, x, y, pile.suit.symbol)
        else:
            C.draw_card(screen, top, x, y)

    if show_cursor:
        if session.selected is not None:
            C.draw_brackets(screen, selection_rect(session, session.selected), C.CYAN)
        C.draw_brackets(screen, selection_rect(session, session.cursor), C.GOLD)


class GameScene(C.Scene):
    def __init__(self, settings, mode=None, session=None):
        super().__init__(settings)
        if session is None:
            session = GameSession(
                mode or settings.game_mode,
                rng=settings.make_rng(),
                debug_mode=settings.debug_mode,
                auto_draw=settings.auto_draw,
            )
        self.session = session
        self.show_help = False
        self.menu_open = False

    def _handle_menu_key(self, key):
        if key == pygame.K_1:
            self.session.new_game(GameMode.DRAW_ONE)
        elif key == pygame.K_3:
            self.session.new_game(GameMode.DRAW_THREE)
        elif key == pygame.K_r:
            self.session.restart()
        elif key == pygame.K_q:
            self.request_quit()
        elif key != pygame.K_ESCAPE:
            return
        self.menu_open = False

    def handle_event(self, e):
        if e.type != pygame.KEYDOWN:
            return
        if self.menu_open:
            self._handle_menu_key(e.key)
            return
        if self.show_help:
            # Any key closes help
            self.show_help = False
            return

        s = self.session
        key = e.key
        if key in KEY_CURSOR_ACTIONS:
            s.cursor_action(KEY_CURSOR_ACTIONS[key])
        elif key == pygame.K_SPACE:
            s.cards_action()
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            s.enter_action()
        elif key == pygame.K_x:
            s.clear_selection()
        elif key == pygame.K_d:
            s.toggle_debug()
        elif key == pygame.K_c:
            s.debug_unchecked_move()
        elif key == pygame.K_z:
            s.debug_check_valid()
        elif key == pygame.K_h:
            self.show_help = True
        elif key == pygame.K_ESCAPE:
            self.menu_open = True

        if s.won:
            from solitext.scenes.victory import VictoryScene
            self.next_scene = VictoryScene(self.settings, s)

    def draw(self, screen):
        s = self.session
        draw_table(screen, s)
        self.draw_top_bar(screen, "Solitext", f"{s.mode.label}    h: Help  Esc: Menu")

        C.draw_text(screen, "Space: Select/Move cards", 20, C.INFO_Y, C.LIGHT, C.FONT_SMALL)
        C.draw_text(screen, s.help_text, 20, C.INFO_Y + 26, C.LIGHT, C.FONT_SMALL)
        if s.debug_mode:
            C.draw_text(screen, f"[debug] {s.debug_message}", 20, C.INFO_Y + 52, C.GOLD, C.FONT_SMALL)

        if self.menu_open:
            C.draw_text_box(screen, MENU_LINES, title="Menu")
        elif self.show_help:
            C.draw_text_box(screen, HELP_LINES)
