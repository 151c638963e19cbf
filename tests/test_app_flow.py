import importlib
import types

import pytest


@pytest.fixture
def pygame_dummy(monkeypatch, tmp_path):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    monkeypatch.setenv("SOLITEXT_SETTINGS", str(tmp_path / "settings.json"))
    monkeypatch.setenv("SOLITEXT_SEED", "1")
    monkeypatch.delenv("SOLITEXT_MODE", raising=False)
    monkeypatch.delenv("SOLITEXT_DEBUG", raising=False)

    pygame = importlib.import_module("pygame")

    class DummyFont:
        def __init__(self, size):
            self._size = max(1, int(size) if size else 1)

        def render(self, text, *_, **__):
            width = max(1, len(str(text)) * max(self._size // 2, 1))
            height = max(1, self._size)
            return pygame.Surface((width, height), pygame.SRCALPHA)

        def size(self, text):
            width = max(1, len(str(text)) * max(self._size // 2, 1))
            return width, max(1, self._size)

        def get_height(self):
            return max(1, self._size)

    def _make_font(size):
        return DummyFont(size or 24)

    monkeypatch.setattr(
        pygame.font,
        "SysFont",
        lambda *args, size=None, **kwargs: _make_font(size if size is not None else (args[1] if len(args) > 1 else None)),
        raising=False,
    )
    monkeypatch.setattr(pygame.font, "get_default_font", lambda: "dummy", raising=False)

    class DummyClock:
        def tick(self, _fps):
            return 33

    monkeypatch.setattr(pygame.time, "Clock", lambda: DummyClock())
    monkeypatch.setattr(pygame.display, "set_mode", lambda size, flags=0: pygame.Surface(size))
    monkeypatch.setattr(pygame.display, "flip", lambda: None)
    monkeypatch.setattr(pygame.display, "set_caption", lambda _title: None)

    quit_calls = []
    real_quit = pygame.quit

    def tracked_quit():
        quit_calls.append(True)
        real_quit()

    monkeypatch.setattr(pygame, "quit", tracked_quit)
    return types.SimpleNamespace(pygame=pygame, quit_calls=quit_calls)


def _script(monkeypatch, pygame, keys):
    """Feed one KEYDOWN per frame, then a QUIT so the loop always ends."""
    steps = [[pygame.event.Event(pygame.KEYDOWN, {"key": k, "mod": 0})] for k in keys]
    index = {"value": 0}

    def scripted_events():
        step = index["value"]
        index["value"] += 1
        if step < len(steps):
            return steps[step]
        return [pygame.event.Event(pygame.QUIT, {})]

    monkeypatch.setattr(pygame.event, "get", scripted_events)
    return index


def _capture_scenes(monkeypatch):
    game_module = importlib.import_module("solitext.scenes.game")
    captured = {"games": []}
    orig_game_cls = game_module.GameScene

    class LoggedGameScene(orig_game_cls):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            captured["games"].append(self)

    monkeypatch.setattr(game_module, "GameScene", LoggedGameScene)
    return captured


def test_start_play_and_quit_from_menu(monkeypatch, pygame_dummy):
    pygame = pygame_dummy.pygame
    entry = importlib.import_module("solitext.__main__")
    captured = _capture_scenes(monkeypatch)

    keys = [
        pygame.K_1,        # title: new Draw One game
        pygame.K_RIGHT,    # cursor to column 0
        pygame.K_SPACE,    # pick it up
        pygame.K_x,        # put it back
        pygame.K_HOME,
        pygame.K_RETURN,   # hit
        pygame.K_h,        # help
        pygame.K_ESCAPE,   # close help
        pygame.K_ESCAPE,   # open menu
        pygame.K_3,        # new Draw Three game
        pygame.K_ESCAPE,   # open menu
        pygame.K_q,        # quit
    ]
    index = _script(monkeypatch, pygame, keys)

    entry.main()

    assert pygame_dummy.quit_calls, "pygame.quit() should be called"
    assert index["value"] == len(keys), "menu quit should end the loop"
    assert len(captured["games"]) == 1
    scene = captured["games"][0]
    from solitext.game_state import GameMode
    assert scene.session.mode is GameMode.DRAW_THREE
    assert scene.session.selected is None
    assert not scene.menu_open
    assert scene.session.state.card_count() == 52


def test_escape_on_title_quits(monkeypatch, pygame_dummy):
    pygame = pygame_dummy.pygame
    entry = importlib.import_module("solitext.__main__")
    captured = _capture_scenes(monkeypatch)
    index = _script(monkeypatch, pygame, [pygame.K_ESCAPE])

    entry.main()

    assert pygame_dummy.quit_calls
    assert index["value"] == 1
    assert captured["games"] == []


def test_victory_offers_new_game(monkeypatch, pygame_dummy):
    pygame = pygame_dummy.pygame
    entry = importlib.import_module("solitext.__main__")
    captured = _capture_scenes(monkeypatch)
    from solitext.game_state import GameState
    from solitext.selection import Selection
    from solitext.scenes.victory import VictoryScene

    victories = []
    orig_init = VictoryScene.__init__

    def logged_init(self, *args, **kwargs):
        orig_init(self, *args, **kwargs)
        victories.append(self)

    monkeypatch.setattr(VictoryScene, "__init__", logged_init)

    def rig_almost_won(scene):
        scene.session.state = GameState.almost_victory()
        scene.session.cursor = Selection.column(0, 1)
        scene.session.end_turn()

    keys = [pygame.K_1, pygame.K_RETURN, pygame.K_y, pygame.K_ESCAPE, pygame.K_q]
    steps = [[pygame.event.Event(pygame.KEYDOWN, {"key": k, "mod": 0})] for k in keys]
    index = {"value": 0}

    def scripted_events():
        step = index["value"]
        index["value"] += 1
        if step == 1:
            rig_almost_won(captured["games"][0])
        if step < len(steps):
            return steps[step]
        return [pygame.event.Event(pygame.QUIT, {})]

    monkeypatch.setattr(pygame.event, "get", scripted_events)

    entry.main()

    assert pygame_dummy.quit_calls
    assert len(victories) == 1
    assert len(captured["games"]) == 2
    replay = captured["games"][1]
    assert replay.session is captured["games"][0].session
    assert not replay.session.won
    assert replay.session.state.card_count() == 52
