# src/tetris_qagent/features/board.py
from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import Any

import numpy as np

from tetris_qagent.game.constants import BUFFER_ROWS, UNOCCUPIED

FEATURE_NAMES: tuple[str, ...] = (
    "holes",
    "bumpiness",
    "vertical_range",
    "top_holes",
    "lowest_occupied_row",
    "completed_lines",
)
NUM_FEATURES: int = len(FEATURE_NAMES)


class FeatureExtractionError(ValueError):
    """Board snapshot cannot be turned into features (wrong shape, bad cell values)."""


@dataclass(frozen=True)
class ColumnProfile:
    """
    Statistics of ONE column of the scanned (non-buffer) region.

    height:
      scanned rows minus the index of the first occupied cell (0 if empty)
    holes:
      unoccupied cells strictly below the first occupied cell
    top_hole:
      the cell right under the first occupied cell is unoccupied
    first_occupied:
      scanned-row index of the first occupied cell, None for an empty column
    filled:
      no unoccupied cell anywhere in the scanned column
    """
    height: int
    holes: int
    top_hole: bool
    first_occupied: int | None
    filled: bool


@dataclass(frozen=True)
class BoardFeatures:
    """
    Value-function input for one board snapshot.

    Field order is the order of the model input vector (see FEATURE_NAMES).

    completed_lines counts fully occupied COLUMNS of the scanned region, not
    horizontal rows. Reward shaping and trained models depend on this meaning.
    """
    holes: int
    bumpiness: float
    vertical_range: int
    top_holes: int
    lowest_occupied_row: int
    completed_lines: int

    @classmethod
    def zeros(cls) -> "BoardFeatures":
        return cls(
            holes=0,
            bumpiness=0.0,
            vertical_range=0,
            top_holes=0,
            lowest_occupied_row=0,
            completed_lines=0,
        )

    def as_array(self) -> np.ndarray:
        return np.asarray(astuple(self), dtype=np.float32)

    def as_dict(self) -> dict[str, float]:
        return {name: float(v) for name, v in zip(FEATURE_NAMES, astuple(self))}


def extract_features(board: Any | None) -> BoardFeatures:
    """
    Compute the 6 board features of a snapshot.

    Input contract:
      - None -> BoardFeatures.zeros()
      - otherwise a 2D grid of cell codes (np.ndarray or nested sequences);
        the top BUFFER_ROWS rows are ignored

    Raises FeatureExtractionError for malformed grids; never returns a
    partially computed record.
    """
    if board is None:
        return BoardFeatures.zeros()

    occ = _occ_from_visible(visible_grid(board))
    heights, holes, top_hole, first, any_filled, filled = _column_stats(occ)

    lowest = int(first[any_filled].max()) if bool(any_filled.any()) else 0

    return BoardFeatures(
        holes=int(holes.sum()),
        bumpiness=_population_std(heights),
        vertical_range=int(heights.max() - heights.min()),
        top_holes=int(np.count_nonzero(top_hole)),
        lowest_occupied_row=lowest,
        completed_lines=int(np.count_nonzero(filled)),
    )


def column_profiles(board: Any) -> list[ColumnProfile]:
    """Per-column statistics of the scanned region, left to right."""
    occ = _occ_from_visible(visible_grid(board))
    heights, holes, top_hole, first, any_filled, filled = _column_stats(occ)

    out: list[ColumnProfile] = []
    for c in range(int(occ.shape[1])):
        out.append(
            ColumnProfile(
                height=int(heights[c]),
                holes=int(holes[c]),
                top_hole=bool(top_hole[c]),
                first_occupied=int(first[c]) if bool(any_filled[c]) else None,
                filled=bool(filled[c]),
            )
        )
    return out


def visible_grid(board: Any) -> np.ndarray:
    """Return the scanned region (everything below the buffer rows) as float64."""
    try:
        grid = np.asarray(board, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise FeatureExtractionError(f"board is not a numeric grid: {exc}") from exc

    if grid.ndim != 2:
        raise FeatureExtractionError(f"board must be 2D, got shape={grid.shape}")
    if int(grid.shape[0]) <= BUFFER_ROWS:
        raise FeatureExtractionError(
            f"board needs more than {BUFFER_ROWS} rows (buffer), got shape={grid.shape}"
        )
    if int(grid.shape[1]) == 0:
        raise FeatureExtractionError("board has no columns")
    if not bool(np.isfinite(grid).all()):
        raise FeatureExtractionError("board contains non-finite cell values")

    return grid[BUFFER_ROWS:, :]


# -----------------------------------------------------------------------------
# Internals
# -----------------------------------------------------------------------------
def _occ_from_visible(grid: np.ndarray) -> np.ndarray:
    # settled and active cells both count as occupied
    return np.not_equal(grid, UNOCCUPIED)


def _column_stats(
    occ: np.ndarray,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    rows, cols = occ.shape
    col_idx = np.arange(cols)

    any_filled = occ.any(axis=0)
    # argmax returns 0 when all-false; any_filled masks those columns
    first = np.argmax(occ, axis=0).astype(np.int64, copy=False)
    heights = np.where(any_filled, rows - first, 0).astype(np.int64, copy=False)

    # filled_seen[y,x] True if any filled cell exists at or above y in that column
    filled_seen = np.maximum.accumulate(occ, axis=0)
    holes = np.sum((~occ) & filled_seen, axis=0).astype(np.int64, copy=False)

    below = first + 1
    has_below = any_filled & (below < rows)
    top_hole = np.zeros((cols,), dtype=bool)
    top_hole[has_below] = ~occ[below[has_below], col_idx[has_below]]

    filled = occ.all(axis=0)
    return heights, holes, top_hole, first, any_filled, filled


def _population_std(heights: np.ndarray) -> float:
    if heights.size == 0:
        return 0.0
    return float(np.std(heights.astype(np.float64), ddof=0))


__all__ = [
    "FEATURE_NAMES",
    "NUM_FEATURES",
    "BoardFeatures",
    "ColumnProfile",
    "FeatureExtractionError",
    "column_profiles",
    "extract_features",
    "visible_grid",
]
