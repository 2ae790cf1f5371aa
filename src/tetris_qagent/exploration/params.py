# src/tetris_qagent/exploration/params.py
from __future__ import annotations

from pydantic import Field, model_validator

from tetris_qagent.config.base import ConfigBase


class ExplorationParams(ConfigBase):
    initial_epsilon: float = Field(default=1.0, gt=0.0, le=1.0)
    min_epsilon: float = Field(default=0.05, ge=0.0, le=1.0)
    epsilon_decay: float = Field(default=0.995, gt=0.0, le=1.0)

    # score-trend multipliers (improving -> explore less)
    improving_factor: float = Field(default=0.9, gt=0.0)
    regressing_factor: float = Field(default=1.1, gt=0.0)

    # near-tetris override: column, floor window and occupied-cell threshold
    tetris_column: int = Field(default=0, ge=0)
    tetris_window: int = Field(default=6, ge=1)
    tetris_min_cells: int = Field(default=4, ge=1)

    seed: int = 12345

    @model_validator(mode="after")
    def _validate_epsilon_range(self) -> "ExplorationParams":
        if float(self.min_epsilon) > float(self.initial_epsilon):
            raise ValueError("min_epsilon must be <= initial_epsilon")
        if int(self.tetris_min_cells) > int(self.tetris_window):
            raise ValueError("tetris_min_cells must be <= tetris_window")
        return self


__all__ = ["ExplorationParams"]
