from __future__ import annotations

import math

import numpy as np
import pytest

from tetris_qagent.features import (
    FEATURE_NAMES,
    BoardFeatures,
    ColumnProfile,
    FeatureExtractionError,
    column_profiles,
    extract_features,
)
from tetris_qagent.game.constants import BUFFER_ROWS, OCCUPIED_ACTIVE, OCCUPIED_SETTLED, UNOCCUPIED

S = OCCUPIED_SETTLED
A = OCCUPIED_ACTIVE
E = UNOCCUPIED


def _board(visible: list[list[float]], *, buffer_value: float = E) -> np.ndarray:
    cols = len(visible[0])
    buffer = [[buffer_value] * cols for _ in range(BUFFER_ROWS)]
    return np.asarray(buffer + visible, dtype=np.float64)


def _holes_by_scan(board: np.ndarray) -> int:
    vis = board[BUFFER_ROWS:]
    total = 0
    for c in range(vis.shape[1]):
        seen = False
        for r in range(vis.shape[0]):
            if vis[r, c] != E:
                seen = True
            elif seen:
                total += 1
    return total


def test_absent_board_yields_zero_vector() -> None:
    feats = extract_features(None)
    assert feats == BoardFeatures.zeros()
    assert feats.as_array().tolist() == [0.0] * 6


def test_empty_board_is_all_zero() -> None:
    board = np.zeros((22, 10), dtype=np.float64)
    feats = extract_features(board)
    assert feats == BoardFeatures.zeros()


def test_mixed_board_features() -> None:
    board = _board(
        [
            [E, S, E],
            [E, E, E],
            [S, A, E],
            [E, S, S],
        ],
        buffer_value=A,
    )
    feats = extract_features(board)

    assert feats.holes == 2
    assert feats.top_holes == 2
    assert feats.vertical_range == 3
    assert feats.lowest_occupied_row == 3
    assert feats.completed_lines == 0
    # heights (2, 4, 1): population std = sqrt(14) / 3
    assert feats.bumpiness == pytest.approx(math.sqrt(14.0) / 3.0)


def test_column_profiles_report_per_column_stats() -> None:
    board = _board(
        [
            [E, S, E],
            [E, E, E],
            [S, A, E],
            [E, S, S],
        ]
    )
    profiles = column_profiles(board)
    assert profiles == [
        ColumnProfile(height=2, holes=1, top_hole=True, first_occupied=2, filled=False),
        ColumnProfile(height=4, holes=1, top_hole=True, first_occupied=0, filled=False),
        ColumnProfile(height=1, holes=0, top_hole=False, first_occupied=3, filled=False),
    ]


def test_completed_lines_counts_full_columns_not_rows() -> None:
    full_column = _board(
        [
            [S, E],
            [S, E],
            [A, E],
        ]
    )
    feats = extract_features(full_column)
    assert feats.completed_lines == 1
    assert feats.vertical_range == 3
    assert feats.bumpiness == pytest.approx(1.5)
    assert feats.lowest_occupied_row == 0

    full_row = _board(
        [
            [E, E, E],
            [E, E, E],
            [S, S, S],
        ]
    )
    assert extract_features(full_row).completed_lines == 0


def test_flat_board_has_no_bumpiness_or_range() -> None:
    board = _board(
        [
            [E, E, E, E],
            [S, S, S, S],
            [S, S, S, S],
        ]
    )
    feats = extract_features(board)
    assert feats.bumpiness == 0.0
    assert feats.vertical_range == 0
    assert feats.holes == 0


def test_buffer_rows_are_ignored() -> None:
    board = _board([[E, E], [E, E]], buffer_value=S)
    assert extract_features(board) == BoardFeatures.zeros()


def test_feature_array_order_and_shape() -> None:
    feats = BoardFeatures(
        holes=1,
        bumpiness=2.5,
        vertical_range=3,
        top_holes=4,
        lowest_occupied_row=5,
        completed_lines=6,
    )
    arr = feats.as_array()
    assert arr.shape == (6,)
    assert arr.dtype == np.float32
    assert arr.tolist() == [1.0, 2.5, 3.0, 4.0, 5.0, 6.0]
    assert list(feats.as_dict().keys()) == list(FEATURE_NAMES)


def test_random_boards_match_reference_scan() -> None:
    rng = np.random.default_rng(0)
    for _ in range(50):
        rows = int(rng.integers(BUFFER_ROWS + 1, 24))
        cols = int(rng.integers(1, 12))
        board = rng.choice(np.asarray([E, E, S, A]), size=(rows, cols))
        feats = extract_features(board)
        arr = feats.as_array()
        assert arr.shape == (6,)
        assert np.isfinite(arr).all()
        assert feats.holes == _holes_by_scan(board)

        heights = np.asarray([p.height for p in column_profiles(board)], dtype=np.float64)
        assert feats.bumpiness == pytest.approx(float(np.std(heights)))
        assert feats.vertical_range == int(heights.max() - heights.min())


def test_nested_lists_are_accepted() -> None:
    board = [[0, 0], [0, 0], [0, 0.5], [0.5, 0.5]]
    feats = extract_features(board)
    assert feats.holes == 0
    assert feats.vertical_range == 1


@pytest.mark.parametrize(
    "board, match",
    [
        (np.zeros((5,)), "must be 2D"),
        (np.zeros((BUFFER_ROWS, 4)), "buffer"),
        (np.zeros((6, 0)), "no columns"),
        (np.full((6, 3), np.nan), "non-finite"),
        ([[0, 0], [0], [0, 0]], "numeric grid"),
        ([["x", "y"], ["z", "w"], ["a", "b"]], "numeric grid"),
    ],
)
def test_malformed_boards_raise(board: object, match: str) -> None:
    with pytest.raises(FeatureExtractionError, match=match):
        extract_features(board)
