# src/value_rl/train/fit.py
from __future__ import annotations

import logging
from typing import Callable, Iterator

import torch

from value_rl.callbacks.base import FitCallback, wrap_callbacks
from value_rl.errors import TrainingError
from value_rl.logging import ScalarLogger
from value_rl.train.dataset import Dataset
from value_rl.train.types import FitStats

LOG = logging.getLogger(__name__)

LossFn = Callable[[torch.Tensor, torch.Tensor], torch.Tensor]


def _next_batch(
    batches: Iterator[tuple[torch.Tensor, torch.Tensor]],
    *,
    epoch: int,
    batch: int,
) -> tuple[torch.Tensor, torch.Tensor] | None:
    try:
        return next(batches)
    except StopIteration:
        return None
    except Exception as exc:
        raise TrainingError(f"dataset iteration failed: {exc}", epoch=epoch, batch=batch) from exc


def fit(
    *,
    model: torch.nn.Module,
    dataset: Dataset,
    loss_fn: LossFn,
    optimizer: torch.optim.Optimizer,
    n_epochs: int,
    callback: FitCallback | list[FitCallback] | None = None,
    logger: ScalarLogger | None = None,
) -> list[FitStats]:
    """
    Supervised fitting of a value model on (features, target) batches.

    Per epoch the dataset is reshuffled, then every batch runs:
      forward -> optimizer.zero_grad -> loss -> backward -> optimizer.step

    Any failure in that sequence (including shuffling and batch iteration) raises
    TrainingError immediately. Nothing is skipped or retried; the caller decides
    how to end the run. Callbacks still get `on_end(stats=..., error=...)` on
    that path, with the epochs completed so far.
    """
    n_epochs = int(n_epochs)
    if n_epochs < 0:
        raise ValueError("n_epochs must be >= 0")

    cb = wrap_callbacks(callback)
    if cb is not None:
        cb.on_start(model=model, n_epochs=n_epochs)

    model.train()
    stats: list[FitStats] = []
    error: BaseException | None = None
    try:
        step = 0
        for epoch in range(n_epochs):
            try:
                dataset.shuffle()
                batches = iter(dataset)
            except Exception as exc:
                raise TrainingError(f"dataset shuffle failed: {exc}", epoch=epoch, batch=0) from exc

            losses: list[float] = []
            batch_idx = 0
            while True:
                pair = _next_batch(batches, epoch=epoch, batch=batch_idx)
                if pair is None:
                    break
                inputs, targets = pair
                try:
                    preds = model(inputs)
                    optimizer.zero_grad(set_to_none=True)
                    loss = loss_fn(preds, targets)
                    loss.backward()
                    optimizer.step()
                    loss_val = float(loss.detach().cpu().item())
                except Exception as exc:
                    raise TrainingError(f"training step failed: {exc}", epoch=epoch, batch=batch_idx) from exc

                losses.append(loss_val)
                step += 1
                if cb is not None:
                    cb.on_batch(epoch=epoch, batch=batch_idx, step=step, loss=loss_val)
                batch_idx += 1

            mean_loss = float(sum(losses) / len(losses)) if losses else 0.0
            last_loss = float(losses[-1]) if losses else 0.0
            epoch_stats = FitStats(epoch=epoch, batches=len(losses), mean_loss=mean_loss, last_loss=last_loss)
            stats.append(epoch_stats)

            LOG.info("epoch %d/%d: batches=%d mean_loss=%.6g", epoch + 1, n_epochs, len(losses), mean_loss)
            if logger is not None:
                logger.log_scalar("train/loss", mean_loss, epoch)
            if cb is not None:
                cb.on_epoch(epoch_stats)
    except BaseException as exc:
        error = exc
        raise
    finally:
        if cb is not None:
            cb.on_end(stats=list(stats), error=error)
    return stats


__all__ = ["LossFn", "fit"]
