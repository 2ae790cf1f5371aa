# src/value_rl/train/model.py
from __future__ import annotations

import torch
from torch import nn


class ValueMLP(nn.Module):
    """Dense -> ReLU -> Dense scalar value head; hidden width defaults to 2x the input."""

    def __init__(self, *, num_features: int = 6, hidden_dim: int | None = None) -> None:
        super().__init__()
        if num_features <= 0:
            raise ValueError("num_features must be >= 1")
        hidden = 2 * int(num_features) if hidden_dim is None else int(hidden_dim)
        if hidden <= 0:
            raise ValueError("hidden_dim must be >= 1")

        self.num_features = int(num_features)
        self.hidden_dim = hidden
        self.net = nn.Sequential(
            nn.Linear(self.num_features, self.hidden_dim),
            nn.ReLU(),
            nn.Linear(self.hidden_dim, 1),
        )

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        if x.dim() != 2 or int(x.shape[1]) != self.num_features:
            raise ValueError("input must be (B,F) with F == num_features")
        return self.net(x)


__all__ = ["ValueMLP"]
