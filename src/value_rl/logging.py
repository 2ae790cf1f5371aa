# src/value_rl/logging.py
from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable


@runtime_checkable
class ScalarLogger(Protocol):
    def log_scalar(self, name: str, value: float, step: int) -> None:
        raise NotImplementedError


class NullLogger:
    def log_scalar(self, name: str, value: float, step: int) -> None:
        _ = name
        _ = value
        _ = step


class PythonScalarLogger:
    """Forwards scalars to a stdlib logger (one line per scalar)."""

    def __init__(self, logger: logging.Logger, *, level: int = logging.INFO) -> None:
        self.logger = logger
        self.level = int(level)

    def log_scalar(self, name: str, value: float, step: int) -> None:
        self.logger.log(self.level, "%s=%.6g step=%d", str(name), float(value), int(step))


__all__ = ["NullLogger", "PythonScalarLogger", "ScalarLogger"]
