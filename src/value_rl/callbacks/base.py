# src/value_rl/callbacks/base.py
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Sequence

import torch

if TYPE_CHECKING:
    from value_rl.train.types import FitStats


class FitCallback:
    """
    Hooks around one `fit` call.

    `on_end` always runs, also when the fit aborts; `error` is then the
    TrainingError that is about to propagate and `stats` holds the epochs that
    completed before it.
    """

    def __init__(self) -> None:
        self.model: torch.nn.Module | None = None

    def on_start(self, *, model: torch.nn.Module, n_epochs: int) -> None:
        self.model = model

    def on_batch(self, *, epoch: int, batch: int, step: int, loss: float) -> None:
        pass

    def on_epoch(self, stats: FitStats) -> None:
        pass

    def on_end(self, *, stats: Sequence[FitStats], error: BaseException | None = None) -> None:
        pass


class CallbackList(FitCallback):
    def __init__(self, callbacks: Iterable[FitCallback]) -> None:
        super().__init__()
        self.callbacks = list(callbacks)

    def on_start(self, *, model: torch.nn.Module, n_epochs: int) -> None:
        self.model = model
        for cb in self.callbacks:
            cb.on_start(model=model, n_epochs=n_epochs)

    def on_batch(self, *, epoch: int, batch: int, step: int, loss: float) -> None:
        for cb in self.callbacks:
            cb.on_batch(epoch=epoch, batch=batch, step=step, loss=loss)

    def on_epoch(self, stats: FitStats) -> None:
        for cb in self.callbacks:
            cb.on_epoch(stats)

    def on_end(self, *, stats: Sequence[FitStats], error: BaseException | None = None) -> None:
        # every callback gets torn down even if an earlier one fails
        first_exc: Exception | None = None
        for cb in self.callbacks:
            try:
                cb.on_end(stats=stats, error=error)
            except Exception as exc:
                if first_exc is None:
                    first_exc = exc
        if first_exc is not None:
            raise first_exc


def wrap_callbacks(callbacks: FitCallback | Iterable[FitCallback] | None) -> FitCallback | None:
    if callbacks is None:
        return None
    if isinstance(callbacks, FitCallback):
        return callbacks
    return CallbackList(callbacks)


__all__ = ["FitCallback", "CallbackList", "wrap_callbacks"]
