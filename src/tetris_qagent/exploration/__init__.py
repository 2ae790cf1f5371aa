from __future__ import annotations

from tetris_qagent.exploration.params import ExplorationParams
from tetris_qagent.exploration.policy import EpsilonGreedyExploration

__all__ = ["EpsilonGreedyExploration", "ExplorationParams"]
