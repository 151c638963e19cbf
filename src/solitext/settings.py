# settings.py - persisted preferences and environment overrides
import os
import json
import logging
import random
from dataclasses import dataclass
from typing import Optional

from solitext.game_state import GameMode

logger = logging.getLogger(__name__)

# Defaults (may be overridden by persisted settings, then by environment)
_DEFAULT_SETTINGS = {
    "game_mode": "draw_one",   # draw_one | draw_three
    "auto_draw": True,
    "debug_mode": False,
    "seed": None,              # int for reproducible deals
}

_MODE_NAMES = {
    "1": GameMode.DRAW_ONE,
    "one": GameMode.DRAW_ONE,
    "draw_one": GameMode.DRAW_ONE,
    "3": GameMode.DRAW_THREE,
    "three": GameMode.DRAW_THREE,
    "draw_three": GameMode.DRAW_THREE,
}

_TRUE_WORDS = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    game_mode: GameMode = GameMode.DRAW_ONE
    auto_draw: bool = True
    debug_mode: bool = False
    seed: Optional[int] = None

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)


def _settings_dir() -> str:
    # Prefer %APPDATA% on Windows, else ~/.solitext
    base = os.environ.get("APPDATA")
    if base:
        return os.path.join(base, "Solitext")
    return os.path.join(os.path.expanduser("~"), ".solitext")


def settings_path() -> str:
    return os.environ.get("SOLITEXT_SETTINGS") or os.path.join(_settings_dir(), "settings.json")


def parse_game_mode(value) -> GameMode:
    if isinstance(value, GameMode):
        return value
    try:
        return _MODE_NAMES[str(value).strip().lower()]
    except KeyError:
        raise ValueError(f"unknown game mode: {value!r}") from None


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_WORDS


def _read_file(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return {}
    return {k: data[k] for k in _DEFAULT_SETTINGS if k in data}


def _read_env(environ) -> dict:
    values = {}
    if environ.get("SOLITEXT_MODE"):
        values["game_mode"] = environ["SOLITEXT_MODE"]
    if environ.get("SOLITEXT_DEBUG"):
        values["debug_mode"] = environ["SOLITEXT_DEBUG"]
    if environ.get("SOLITEXT_AUTO_DRAW"):
        values["auto_draw"] = environ["SOLITEXT_AUTO_DRAW"]
    if environ.get("SOLITEXT_SEED"):
        values["seed"] = environ["SOLITEXT_SEED"]
    return values


def _build(raw: dict) -> Settings:
    defaults = Settings()
    try:
        game_mode = parse_game_mode(raw["game_mode"])
    except ValueError as exc:
        logger.warning("%s; using %s", exc, defaults.game_mode.label)
        game_mode = defaults.game_mode
    seed = raw["seed"]
    if seed is not None:
        try:
            seed = int(seed)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-integer seed %r", seed)
            seed = None
    return Settings(
        game_mode=game_mode,
        auto_draw=_parse_bool(raw["auto_draw"]),
        debug_mode=_parse_bool(raw["debug_mode"]),
        seed=seed,
    )


def load_settings(path: Optional[str] = None, environ=None) -> Settings:
    """Merge defaults, the settings file and ``SOLITEXT_*`` environment variables."""
    environ = os.environ if environ is None else environ
    raw = dict(_DEFAULT_SETTINGS)
    raw.update(_read_file(path or settings_path()))
    raw.update(_read_env(environ))
    return _build(raw)


def save_settings(new_values: dict, path: Optional[str] = None) -> None:
    # Merge with what is on disk and write back; only known keys are kept
    path = path or settings_path()
    current = dict(_DEFAULT_SETTINGS)
    current.update(_read_file(path))
    for k in _DEFAULT_SETTINGS:
        if k not in new_values:
            continue
        value = new_values[k]
        if isinstance(value, GameMode):
            value = value.name.lower()
        current[k] = value
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(current, f, indent=2)
