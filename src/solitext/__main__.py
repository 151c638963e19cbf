# __main__.py - entry point
import os
import logging
import pygame
from solitext import common as C
from solitext.settings import load_settings
from solitext.scenes.title import TitleScene

logger = logging.getLogger(__name__)


def _allowed_keys_set():
    keys = [
        "K_ESCAPE", "K_RETURN", "K_KP_ENTER", "K_SPACE",
        "K_LEFT", "K_RIGHT", "K_UP", "K_DOWN", "K_HOME", "K_END",
        "K_1", "K_3", "K_KP1", "K_KP3",
        "K_c", "K_d", "K_h", "K_n", "K_q", "K_r", "K_x", "K_y", "K_z",
    ]
    out = set()
    for n in keys:
        v = getattr(pygame, n, None)
        if isinstance(v, int):
            out.add(v)
    return out


def main():
    settings = load_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug_mode else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Center window and init
    os.environ.setdefault("SDL_VIDEO_CENTERED", "1")
    pygame.init()

    screen = pygame.display.set_mode((C.SCREEN_W, C.SCREEN_H))
    pygame.display.set_caption("Solitext")
    C.setup_fonts()
    clock = pygame.time.Clock()

    scene = TitleScene(settings)
    allowed_keys = _allowed_keys_set()

    running = True
    while running:
        clock.tick(30)
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
                break
            # Ctrl+C quits from anywhere, as in a terminal
            if e.type == pygame.KEYDOWN and e.key == pygame.K_c and getattr(e, "mod", 0) & pygame.KMOD_CTRL:
                running = False
                break
            if e.type == pygame.KEYDOWN and e.key not in allowed_keys:
                continue
            scene.handle_event(e)
            if scene.quit_requested:
                running = False
                break
            if scene.next_scene is not None:
                scene = scene.next_scene
        if not running:
            break
        scene.draw(screen)
        pygame.display.flip()
    logger.debug("Shutting down")
    pygame.quit()


if __name__ == "__main__":
    main()
