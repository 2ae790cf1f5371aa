# src/tetris_qagent/config/root.py
from __future__ import annotations

from pydantic import Field, field_validator

from tetris_qagent.config.base import ConfigBase
from tetris_qagent.exploration.params import ExplorationParams
from tetris_qagent.rewards.params import RewardShapingParams


class TrainerParams(ConfigBase):
    """
    Value-fit settings. `seed` drives only the ArrayDataset shuffle order.
    """

    n_epochs: int = Field(default=1, ge=0)
    batch_size: int = Field(default=32, ge=1)
    learning_rate: float = Field(default=1e-3, gt=0.0)
    hidden_dim: int | None = Field(default=None, ge=1)
    seed: int = 12345


class AgentConfig(ConfigBase):
    """
    Root agent config. Three independent seeds:
      - seed: value-model weight init (TetrisQAgent.init_q_function) and the
        global python/numpy/torch streams that tetris-qagent-fit seeds via seed_all
      - exploration.seed: the exploration generator (explore draws, random picks)
      - trainer.seed: mini-batch shuffle order during fitting
    """

    name: str = "tetris_q_agent"
    log_level: str = "info"
    seed: int = 12345
    reward: RewardShapingParams = RewardShapingParams()
    exploration: ExplorationParams = ExplorationParams()
    trainer: TrainerParams = TrainerParams()

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        level = str(v).strip().lower()
        if level not in {"debug", "info", "warning", "error", "critical"}:
            raise ValueError(f"log_level must be one of debug|info|warning|error|critical (got {v!r})")
        return level


__all__ = ["AgentConfig", "TrainerParams"]
