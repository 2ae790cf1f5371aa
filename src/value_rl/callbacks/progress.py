# src/value_rl/callbacks/progress.py
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import torch
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from value_rl.callbacks.base import FitCallback

if TYPE_CHECKING:
    from value_rl.train.types import FitStats


class RichProgressCallback(FitCallback):
    """Epoch progress bar with the latest mean loss."""

    def __init__(self, *, description: str = "fit") -> None:
        super().__init__()
        self.description = str(description)
        self.progress: Progress | None = None
        self._task: TaskID | None = None

    @property
    def live(self) -> bool:
        return self._task is not None

    def on_start(self, *, model: torch.nn.Module, n_epochs: int) -> None:
        super().on_start(model=model, n_epochs=n_epochs)
        self.progress = Progress(
            TextColumn("[bold]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TextColumn("loss={task.fields[loss]}"),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
        )
        self.progress.start()
        self._task = self.progress.add_task(self.description, total=int(n_epochs), loss="-")

    def on_epoch(self, stats: FitStats) -> None:
        if self.progress is None or self._task is None:
            return
        self.progress.update(self._task, advance=1, loss=f"{float(stats.mean_loss):.4g}")

    def on_end(self, *, stats: Sequence[FitStats], error: BaseException | None = None) -> None:
        if self.progress is None:
            return
        if error is not None and self._task is not None:
            self.progress.update(self._task, description=f"{self.description} (aborted)")
        self.progress.stop()
        self._task = None


__all__ = ["RichProgressCallback"]
