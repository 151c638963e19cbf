import pygame

from solitext import common as C
from solitext.game_state import GameMode

START_LINES = [
    "1: New Game (Draw One)",
    "3: New Game (Draw Three)",
    "Esc: Quit",
]


class TitleScene(C.Scene):
    """Start screen: pick a draw mode or quit."""

    def _start(self, mode):
        from solitext.scenes.game import GameScene
        self.next_scene = GameScene(self.settings, mode=mode)

    def handle_event(self, e):
        if e.type != pygame.KEYDOWN:
            return
        if e.key in (pygame.K_1, pygame.K_KP1):
            self._start(GameMode.DRAW_ONE)
        elif e.key in (pygame.K_3, pygame.K_KP3):
            self._start(GameMode.DRAW_THREE)
        elif e.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self._start(self.settings.game_mode)
        elif e.key in (pygame.K_ESCAPE, pygame.K_q):
            self.request_quit()

    def draw(self, screen):
        screen.fill(C.TABLE_BG)
        title = C.FONT_TITLE.render("Solitext", True, C.GOLD)
        screen.blit(title, (C.SCREEN_W // 2 - title.get_width() // 2, 90))
        suits = C.FONT_RANK.render("♥  ♠  ♦  ♣", True, C.WHITE)
        screen.blit(suits, (C.SCREEN_W // 2 - suits.get_width() // 2, 90 + title.get_height() + 10))
        C.draw_text_box(screen, START_LINES)
