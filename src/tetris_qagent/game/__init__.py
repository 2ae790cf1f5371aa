from __future__ import annotations

from tetris_qagent.game.api import GameCounter, GameView
from tetris_qagent.game.constants import BUFFER_ROWS, OCCUPIED_ACTIVE, OCCUPIED_SETTLED, UNOCCUPIED

__all__ = [
    "BUFFER_ROWS",
    "GameCounter",
    "GameView",
    "OCCUPIED_ACTIVE",
    "OCCUPIED_SETTLED",
    "UNOCCUPIED",
]
