import pygame

from solitext import common as C
from solitext.scenes.game import draw_table


class VictoryScene(C.Scene):
    def __init__(self, settings, session):
        super().__init__(settings)
        self.session = session

    def handle_event(self, e):
        if e.type != pygame.KEYDOWN:
            return
        if e.key == pygame.K_y:
            from solitext.scenes.game import GameScene
            self.session.new_game()
            self.next_scene = GameScene(self.settings, session=self.session)
        elif e.key in (pygame.K_n, pygame.K_ESCAPE, pygame.K_q):
            self.request_quit()

    def draw(self, screen):
        draw_table(screen, self.session, show_cursor=False)
        self.draw_top_bar(screen, "Solitext", self.session.mode.label)
        C.draw_text_box(screen, ["Play again? (y/n)"], title="YOU WIN")
