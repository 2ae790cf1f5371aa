# src/tetris_qagent/rewards/shaped.py
from __future__ import annotations

import logging
from typing import Any

from tetris_qagent.features.board import BoardFeatures
from tetris_qagent.rewards.params import RewardShapingParams
from tetris_qagent.rewards.state import RewardState

LOG = logging.getLogger(__name__)


def line_clear_bonus(
    *,
    completed_lines: int,
    turns_since_last_clear: int,
    params: RewardShapingParams,
) -> float:
    """Bonus for `completed_lines` clears, scaled by how quickly they followed the last clear."""
    n = int(completed_lines)
    if n <= 0:
        return 0.0
    if n <= len(params.line_bonuses):
        base = float(params.line_bonuses[n - 1])
    else:
        base = float(params.per_line_bonus) * float(n)
    efficiency = max(
        float(params.efficiency_floor),
        float(params.efficiency_start) - float(params.efficiency_decay) * float(turns_since_last_clear),
    )
    return base * efficiency


def board_penalty(features: BoardFeatures, *, params: RewardShapingParams) -> float:
    return (
        float(params.w_holes) * float(features.holes)
        + float(params.w_bumpiness) * float(features.bumpiness)
        + float(params.w_vertical_range) * float(features.vertical_range)
        + float(params.w_top_holes) * float(features.top_holes)
        + float(params.w_lowest_occupied_row) * float(features.lowest_occupied_row)
    )


class ShapedReward:
    """
    Per-turn training reward for the value function.

    Reward:
      r = score_scale * turn_score_delta
          + line_clear_bonus(completed_lines, turns_since_last_clear)
          - board_penalty(features)
          + milestone_bonus * [total_score > highest_score_seen]
          - terminal_penalty * [is_terminal]

    State updates (in order): clear counter, best score, score history.
    A None board returns 0.0 and leaves the state untouched.
    """

    def __init__(self, *, params: RewardShapingParams | None = None, state: RewardState | None = None) -> None:
        self.params = params or RewardShapingParams()
        self.state = state if state is not None else RewardState()

    def __call__(
        self,
        *,
        board: Any | None,
        features: BoardFeatures,
        turn_score_delta: float,
        total_score: int,
        is_terminal: bool,
    ) -> float:
        if board is None:
            return 0.0

        p = self.params
        st = self.state

        r = float(p.score_scale) * float(turn_score_delta)

        if int(features.completed_lines) > 0:
            bonus = line_clear_bonus(
                completed_lines=int(features.completed_lines),
                turns_since_last_clear=int(st.turns_since_last_clear),
                params=p,
            )
            LOG.debug(
                "line bonus %.1f (lines=%d, turns_since_last_clear=%d)",
                bonus,
                int(features.completed_lines),
                int(st.turns_since_last_clear),
            )
            st.turns_since_last_clear = 0
            r += bonus
        else:
            st.turns_since_last_clear += 1

        r -= board_penalty(features, params=p)

        if int(total_score) > int(st.highest_score_seen):
            st.highest_score_seen = int(total_score)
            r += float(p.milestone_bonus)

        if bool(is_terminal):
            r -= float(p.terminal_penalty)

        st.record_score(int(total_score))
        return float(r)


__all__ = ["ShapedReward", "board_penalty", "line_clear_bonus"]
