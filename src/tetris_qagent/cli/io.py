# src/tetris_qagent/cli/io.py
from __future__ import annotations

from pathlib import Path

import numpy as np


def load_board(path: Path) -> np.ndarray:
    """
    Load a board snapshot.

    Formats:
      - .npy: a 2D array of cell codes
      - anything else: whitespace-separated cell codes, one board row per line
    """
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"board file not found: {p}")
    if p.suffix.lower() == ".npy":
        return np.asarray(np.load(p, allow_pickle=False), dtype=np.float64)
    return np.loadtxt(p, dtype=np.float64, ndmin=2)


def load_training_arrays(path: Path) -> tuple[np.ndarray, np.ndarray]:
    """Read `features` (N,F) and `targets` (N,) arrays from an .npz archive."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"training data not found: {p}")
    with np.load(p, allow_pickle=False) as data:
        missing = [k for k in ("features", "targets") if k not in data.files]
        if missing:
            raise KeyError(f"{p} is missing arrays: {missing}")
        return np.asarray(data["features"]), np.asarray(data["targets"])


__all__ = ["load_board", "load_training_arrays"]
