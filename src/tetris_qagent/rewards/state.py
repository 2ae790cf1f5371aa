# src/tetris_qagent/rewards/state.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RewardState:
    """
    Running state of reward shaping for one agent.

    score_history gets one entry per reward evaluation (every turn), and the
    exploration policy reads the same list object for its score-trend check.
    """

    highest_score_seen: int = 0
    turns_since_last_clear: int = 0
    score_history: list[int] = field(default_factory=list)

    def record_score(self, score: int) -> None:
        self.score_history.append(int(score))


__all__ = ["RewardState"]
