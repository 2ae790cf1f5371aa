# src/tetris_qagent/config/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any

from omegaconf import OmegaConf
from pydantic import BaseModel

from tetris_qagent.config.root import AgentConfig


def to_plain_dict(cfg: BaseModel) -> dict[str, Any]:
    return cfg.model_dump(mode="json")


def load_yaml(path: Path) -> dict[str, Any]:
    cfg_path = Path(path)
    cfg = OmegaConf.load(cfg_path)
    data = OmegaConf.to_container(cfg, resolve=True)
    if not isinstance(data, dict):
        raise TypeError(f"config({path}) must be a mapping")
    return data


def load_agent_config(path: Path | None = None, *, overrides: list[str] | None = None) -> AgentConfig:
    """
    Load an AgentConfig from YAML (or defaults when path is None).

    overrides are dotlist entries such as ["exploration.seed=7", "trainer.n_epochs=3"].
    """
    base = OmegaConf.create(load_yaml(path) if path is not None else {})
    if overrides:
        base = OmegaConf.merge(base, OmegaConf.from_dotlist(list(overrides)))
    data = OmegaConf.to_container(base, resolve=True)
    if not isinstance(data, dict):
        raise TypeError("agent config must resolve to a mapping")
    return AgentConfig.model_validate(data)


__all__ = ["load_agent_config", "load_yaml", "to_plain_dict"]
