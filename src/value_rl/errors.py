# src/value_rl/errors.py
from __future__ import annotations


class TrainingError(RuntimeError):
    """A forward/backward/optimizer step failed; the run must not continue."""

    def __init__(self, message: str, *, epoch: int, batch: int) -> None:
        super().__init__(f"{message} (epoch={int(epoch)}, batch={int(batch)})")
        self.epoch = int(epoch)
        self.batch = int(batch)


__all__ = ["TrainingError"]
