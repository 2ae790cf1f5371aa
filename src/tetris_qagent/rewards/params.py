# src/tetris_qagent/rewards/params.py
from __future__ import annotations

from pydantic import model_validator

from tetris_qagent.config.base import ConfigBase


class RewardShapingParams(ConfigBase):
    # base reward per point scored this turn
    score_scale: float = 1000.0

    # line-clear bonus by count (index 0 -> 1 line); larger counts pay per line
    line_bonuses: tuple[float, ...] = (150.0, 350.0, 800.0, 1100.0)
    per_line_bonus: float = 150.0

    # efficiency = max(floor, start - decay * turns_since_last_clear)
    efficiency_start: float = 2.0
    efficiency_decay: float = 0.2
    efficiency_floor: float = 0.5

    # board penalty weights (POSITIVE magnitudes, subtracted)
    w_holes: float = 0.75
    w_bumpiness: float = 2.0
    w_vertical_range: float = 1.5
    w_top_holes: float = 10.0
    w_lowest_occupied_row: float = 0.5

    milestone_bonus: float = 500.0
    terminal_penalty: float = 1000.0

    @model_validator(mode="after")
    def _validate_ranges(self) -> "RewardShapingParams":
        if not self.line_bonuses:
            raise ValueError("line_bonuses must be non-empty")
        if not (0.0 <= float(self.efficiency_floor) <= float(self.efficiency_start)):
            raise ValueError("efficiency_floor must be in [0, efficiency_start]")
        if float(self.efficiency_decay) < 0.0:
            raise ValueError("efficiency_decay must be >= 0")
        for name in (
            "w_holes",
            "w_bumpiness",
            "w_vertical_range",
            "w_top_holes",
            "w_lowest_occupied_row",
            "milestone_bonus",
            "terminal_penalty",
        ):
            if float(getattr(self, name)) < 0.0:
                raise ValueError(f"{name} must be >= 0")
        return self


__all__ = ["RewardShapingParams"]
