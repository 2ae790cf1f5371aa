# src/tetris_qagent/game/api.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence, runtime_checkable

import numpy as np


@runtime_checkable
class GameView(Protocol):
    """
    Read-only view of the running game, supplied by the game engine.

    Contract:
      - board(): current snapshot, or None before the first piece spawns.
      - board_for(candidate): snapshot as it would look with `candidate` placed
        (pure; the placed piece shows up as OCCUPIED_ACTIVE cells).
      - final_placements(): legal final resting positions for the current piece.
      - score_this_turn() / total_score() / did_agent_lose(): scoring signals.
    """

    def board(self) -> np.ndarray | None: ...

    def board_for(self, candidate: Any) -> np.ndarray: ...

    def final_placements(self) -> Sequence[Any]: ...

    def score_this_turn(self) -> int: ...

    def total_score(self) -> int: ...

    def did_agent_lose(self) -> bool: ...


@dataclass(frozen=True)
class GameCounter:
    """Progress of the outer training harness."""

    total_games_played: int = 0
    current_game_idx: int = 0


__all__ = ["GameCounter", "GameView"]
