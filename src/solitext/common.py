# common.py - shared drawing helpers and the base Scene for the pygame front end
import pygame
from typing import Optional, Sequence

from solitext.cards import Card

# ---------- Configuration ----------
SCREEN_W, SCREEN_H = 1024, 720
TABLE_BG = (2, 100, 40)

CARD_W, CARD_H = 72, 100
CARD_RADIUS = 8
CARD_GAP_X = 18
CARD_FAN_Y = 26

TOP_BAR_H = 48
ROW_Y = TOP_BAR_H + 24
DECK_X = 30
COLUMNS_X = DECK_X + CARD_W + 40
PILES_X = COLUMNS_X + 7 * (CARD_W + CARD_GAP_X) + 22
PILE_GAP_Y = 16
INFO_Y = SCREEN_H - 96

# Colors
BLACK = (20, 20, 20)
WHITE = (245, 245, 245)
RED = (200, 20, 20)
BLUE = (34, 96, 200)
GOLD = (230, 190, 80)
CYAN = (80, 220, 230)
LIGHT = (220, 220, 220)
GREY = (150, 150, 150)

# Fonts are initialized via setup_fonts() AFTER pygame.init() in __main__
FONT_NAME = None
FONT_RANK = None
FONT_SMALL = None
FONT_UI = None
FONT_TITLE = None


def setup_fonts():
    global FONT_NAME, FONT_RANK, FONT_SMALL, FONT_UI, FONT_TITLE
    FONT_NAME = pygame.font.get_default_font()
    # Suit glyphs need a Unicode-capable face; SysFont falls back to the default
    FONT_RANK = pygame.font.SysFont("dejavusans,segoeuisymbol", 24, bold=True)
    FONT_SMALL = pygame.font.SysFont(FONT_NAME, 20, bold=True)
    FONT_UI = pygame.font.SysFont(FONT_NAME, 26, bold=True)
    FONT_TITLE = pygame.font.SysFont(FONT_NAME, 44, bold=True)
    invalidate_card_caches()


# ---------- Cards ----------
_card_face_cache = {}
_card_back_cache = None


def invalidate_card_caches():
    global _card_face_cache, _card_back_cache
    _card_face_cache = {}
    _card_back_cache = None


def get_card_surface(card: Card):
    if card in _card_face_cache:
        return _card_face_cache[card]
    surf = pygame.Surface((CARD_W, CARD_H), pygame.SRCALPHA)
    pygame.draw.rect(surf, WHITE, (0, 0, CARD_W, CARD_H), border_radius=CARD_RADIUS)
    pygame.draw.rect(surf, BLACK, (0, 0, CARD_W, CARD_H), width=2, border_radius=CARD_RADIUS)
    color = RED if card.is_red else BLACK
    label = FONT_RANK.render(str(card), True, color)
    surf.blit(label, (6, 3))
    big = FONT_TITLE.render(card.suit.symbol, True, color)
    surf.blit(big, (CARD_W // 2 - big.get_width() // 2, CARD_H // 2 - big.get_height() // 2 + 8))
    _card_face_cache[card] = surf
    return surf


def get_back_surface():
    global _card_back_cache
    if _card_back_cache is not None:
        return _card_back_cache
    surf = pygame.Surface((CARD_W, CARD_H), pygame.SRCALPHA)
    pygame.draw.rect(surf, WHITE, (0, 0, CARD_W, CARD_H), border_radius=CARD_RADIUS)
    pygame.draw.rect(surf, BLACK, (0, 0, CARD_W, CARD_H), width=2, border_radius=CARD_RADIUS)
    inset = 6
    pygame.draw.rect(surf, BLUE, (inset, inset, CARD_W - 2 * inset, CARD_H - 2 * inset), border_radius=6)
    for i in range(-CARD_H, CARD_W, 12):
        pygame.draw.line(surf, LIGHT, (i, inset), (i + CARD_H, CARD_H - inset), 1)
    _card_back_cache = surf
    return surf


def draw_card(screen, card: Card, x: int, y: int, face_up: bool = True):
    surf = get_card_surface(card) if face_up else get_back_surface()
    screen.blit(surf, (x, y))


def draw_empty_slot(screen, x: int, y: int, label: str = ""):
    pygame.draw.rect(screen, LIGHT, (x, y, CARD_W, CARD_H), width=2, border_radius=CARD_RADIUS)
    if label:
        t = FONT_SMALL.render(label, True, LIGHT)
        screen.blit(t, (x + CARD_W // 2 - t.get_width() // 2, y + CARD_H // 2 - t.get_height() // 2))


def draw_brackets(screen, rect: pygame.Rect, color):
    pygame.draw.rect(screen, color, rect.inflate(8, 8), width=3, border_radius=CARD_RADIUS + 2)


def draw_text(screen, text: str, x: int, y: int, color=WHITE, font=None):
    if not text:
        return
    t = (font or FONT_UI).render(text, True, color)
    screen.blit(t, (x, y))


def draw_text_box(screen, lines: Sequence[str], title: Optional[str] = None):
    """Centered modal box with a dimmed table behind it."""
    overlay = pygame.Surface((SCREEN_W, SCREEN_H), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 140))
    screen.blit(overlay, (0, 0))
    rendered = [FONT_UI.render(line, True, BLACK) for line in lines]
    title_surf = FONT_TITLE.render(title, True, BLACK) if title else None
    width = max([r.get_width() for r in rendered] + [title_surf.get_width() if title_surf else 0]) + 60
    line_h = FONT_UI.get_height() + 6
    height = len(rendered) * line_h + 50 + (title_surf.get_height() + 12 if title_surf else 0)
    box = pygame.Rect(0, 0, width, height)
    box.center = (SCREEN_W // 2, SCREEN_H // 2)
    pygame.draw.rect(screen, (240, 240, 240), box, border_radius=16)
    pygame.draw.rect(screen, (80, 80, 80), box, width=2, border_radius=16)
    y = box.y + 25
    if title_surf:
        screen.blit(title_surf, (box.centerx - title_surf.get_width() // 2, y))
        y += title_surf.get_height() + 12
    for r in rendered:
        screen.blit(r, (box.x + 30, y))
        y += line_h
    return box


# ---------- Base Scene ----------
class Scene:
    def __init__(self, settings):
        self.settings = settings
        self.next_scene = None
        self.quit_requested = False

    def handle_event(self, e): pass
    def update(self, dt): pass
    def draw(self, screen): pass

    def request_quit(self):
        self.quit_requested = True

    def draw_top_bar(self, screen, title, extra=""):
        pygame.draw.rect(screen, (0, 0, 0), (0, 0, SCREEN_W, TOP_BAR_H))
        t = FONT_UI.render(title, True, GOLD)
        screen.blit(t, (20, TOP_BAR_H // 2 - t.get_height() // 2))
        if extra:
            s = FONT_SMALL.render(extra, True, GREY)
            screen.blit(s, (SCREEN_W - s.get_width() - 20, TOP_BAR_H // 2 - s.get_height() // 2))
