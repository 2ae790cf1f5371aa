from __future__ import annotations

from tetris_qagent.rewards.params import RewardShapingParams
from tetris_qagent.rewards.shaped import ShapedReward, board_penalty, line_clear_bonus
from tetris_qagent.rewards.state import RewardState

__all__ = [
    "RewardShapingParams",
    "RewardState",
    "ShapedReward",
    "board_penalty",
    "line_clear_bonus",
]
