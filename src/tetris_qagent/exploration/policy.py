# src/tetris_qagent/exploration/policy.py
from __future__ import annotations

import logging
from typing import Any, Callable, Sequence, TypeVar

import numpy as np

from tetris_qagent.exploration.params import ExplorationParams
from tetris_qagent.features.board import FeatureExtractionError, visible_grid
from tetris_qagent.game.constants import OCCUPIED_ACTIVE, OCCUPIED_SETTLED

LOG = logging.getLogger(__name__)

CandidateT = TypeVar("CandidateT")


class EpsilonGreedyExploration:
    """
    Epsilon-greedy exploration with a score-trend adjustment and a near-tetris override.

    epsilon:
      base  = clamp(initial * decay**games_played, min, initial)
      eps   = clamp(base * trend, min, initial)
      trend = improving_factor / regressing_factor / 1.0 from comparing the
              current total score against score_history[-2]

    score_history is shared with RewardState and grows once per reward call,
    so score_history[-2] is a recent TURN's score, not the previous game's.

    Randomness:
      one generator seeded once; should_explore draws one uniform,
      choose_exploratory_move draws one integer only when no candidate
      triggers the override.
    """

    def __init__(
        self,
        *,
        params: ExplorationParams | None = None,
        score_history: list[int] | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.params = params or ExplorationParams()
        self.score_history = score_history if score_history is not None else []
        self.rng = rng if rng is not None else np.random.default_rng(int(self.params.seed))

    def _clamp(self, value: float) -> float:
        lo = float(self.params.min_epsilon)
        hi = float(self.params.initial_epsilon)
        return float(min(hi, max(lo, float(value))))

    def base_epsilon(self, games_played: int) -> float:
        if int(games_played) < 0:
            raise ValueError("games_played must be >= 0")
        p = self.params
        return self._clamp(float(p.initial_epsilon) * float(p.epsilon_decay) ** int(games_played))

    def trend_factor(self, *, current_game_index: int, total_score: int) -> float:
        if int(current_game_index) <= 1:
            return 1.0
        if len(self.score_history) < 2:
            return 1.0
        reference = int(self.score_history[-2])
        if int(total_score) > reference:
            return float(self.params.improving_factor)
        if int(total_score) < reference:
            return float(self.params.regressing_factor)
        return 1.0

    def epsilon(self, *, games_played: int, current_game_index: int, total_score: int) -> float:
        base = self.base_epsilon(games_played)
        trend = self.trend_factor(current_game_index=current_game_index, total_score=total_score)
        return self._clamp(base * trend)

    def should_explore(self, *, games_played: int, current_game_index: int, total_score: int) -> bool:
        eps = self.epsilon(
            games_played=games_played,
            current_game_index=current_game_index,
            total_score=total_score,
        )
        draw = float(self.rng.random())
        explore = draw < eps
        LOG.debug("epsilon=%.4f draw=%.4f explore=%s", eps, draw, explore)
        return bool(explore)

    def is_near_tetris(self, board: Any) -> bool:
        """Reference column has >= tetris_min_cells occupied among its bottom tetris_window cells."""
        p = self.params
        grid = visible_grid(board)
        col = int(p.tetris_column)
        if col >= int(grid.shape[1]):
            raise FeatureExtractionError(
                f"tetris_column={col} out of range for board with {grid.shape[1]} columns"
            )
        floor_first = grid[::-1, col][: int(p.tetris_window)]
        occupied = np.isin(floor_first, (OCCUPIED_SETTLED, OCCUPIED_ACTIVE))
        return int(np.count_nonzero(occupied)) >= int(p.tetris_min_cells)

    def choose_exploratory_move(
        self,
        candidates: Sequence[CandidateT],
        *,
        board_for: Callable[[CandidateT], Any],
    ) -> CandidateT | None:
        options = list(candidates)
        if not options:
            return None

        for idx, cand in enumerate(options):
            try:
                board = board_for(cand)
            except Exception as exc:
                raise FeatureExtractionError(f"snapshot for candidate {idx} failed: {exc}") from exc
            if self.is_near_tetris(board):
                LOG.debug("near-tetris override picked candidate %d/%d", idx, len(options))
                return cand

        return options[int(self.rng.integers(len(options)))]


__all__ = ["EpsilonGreedyExploration"]
