# src/value_rl/train/types.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FitStats:
    epoch: int
    batches: int
    mean_loss: float
    last_loss: float


__all__ = ["FitStats"]
