# src/value_rl/callbacks/history.py
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import torch

from value_rl.callbacks.base import FitCallback

if TYPE_CHECKING:
    from value_rl.train.types import FitStats


class LossHistoryCallback(FitCallback):
    """Collects per-batch or per-epoch losses in memory."""

    def __init__(self, *, event: str = "epoch", every: int = 1) -> None:
        super().__init__()
        if event not in {"batch", "epoch"}:
            raise ValueError(f"event must be 'batch' or 'epoch' (got {event!r})")
        self.event = str(event)
        self.every = max(1, int(every))
        self.losses: list[float] = []
        self.aborted = False
        self._seen = 0

    def on_start(self, *, model: torch.nn.Module, n_epochs: int) -> None:
        super().on_start(model=model, n_epochs=n_epochs)
        self.losses = []
        self.aborted = False
        self._seen = 0

    def _record(self, loss: float) -> None:
        self._seen += 1
        if self._seen % self.every == 0:
            self.losses.append(float(loss))

    def on_batch(self, *, epoch: int, batch: int, step: int, loss: float) -> None:
        if self.event == "batch":
            self._record(loss)

    def on_epoch(self, stats: FitStats) -> None:
        if self.event == "epoch":
            self._record(stats.mean_loss)

    def on_end(self, *, stats: Sequence[FitStats], error: BaseException | None = None) -> None:
        self.aborted = error is not None


__all__ = ["LossHistoryCallback"]
