import pytest

from helpers import empty_state
from solitext.game_state import GameState


@pytest.fixture
def state() -> GameState:
    return empty_state()
