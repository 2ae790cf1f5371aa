# src/value_rl/train/dataset.py
from __future__ import annotations

from typing import Iterator, Protocol, Sequence, runtime_checkable

import numpy as np
import torch


@runtime_checkable
class Dataset(Protocol):
    """Anything `fit` can train on: reshuffles in place, iterates (inputs, targets) batches."""

    def shuffle(self) -> None: ...

    def __iter__(self) -> Iterator[tuple[torch.Tensor, torch.Tensor]]: ...


class ArrayDataset:
    """
    In-memory (features, targets) pairs served as float32 torch batches.

    Targets given as a flat vector are stored as a column (N, 1) to match the
    value model's output shape. Shuffling permutes the batch order with its own
    seeded generator; the last batch may be short.
    """

    def __init__(
        self,
        features: np.ndarray | Sequence[Sequence[float]],
        targets: np.ndarray | Sequence[float],
        *,
        batch_size: int = 32,
        seed: int = 12345,
    ) -> None:
        x = np.asarray(features, dtype=np.float32)
        y = np.asarray(targets, dtype=np.float32)
        if x.ndim != 2:
            raise ValueError(f"features must be 2D (N,F), got shape={x.shape}")
        if y.ndim == 1:
            y = y.reshape(-1, 1)
        if y.ndim != 2 or int(y.shape[0]) != int(x.shape[0]):
            raise ValueError(f"targets must have {x.shape[0]} rows, got shape={y.shape}")
        if int(batch_size) <= 0:
            raise ValueError("batch_size must be >= 1")

        self.features = x
        self.targets = y
        self.batch_size = int(batch_size)
        self._rng = np.random.default_rng(int(seed))
        self._order = np.arange(int(x.shape[0]))

    def __len__(self) -> int:
        return int(self.features.shape[0])

    @property
    def num_batches(self) -> int:
        n = len(self)
        return (n + self.batch_size - 1) // self.batch_size

    def shuffle(self) -> None:
        self._rng.shuffle(self._order)

    def __iter__(self) -> Iterator[tuple[torch.Tensor, torch.Tensor]]:
        for start in range(0, len(self), self.batch_size):
            idx = self._order[start : start + self.batch_size]
            yield torch.from_numpy(self.features[idx]), torch.from_numpy(self.targets[idx])


__all__ = ["ArrayDataset", "Dataset"]
