# src/tetris_qagent/cli/inspect_board.py
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.table import Table

from tetris_qagent.cli.io import load_board
from tetris_qagent.features import FeatureExtractionError, column_profiles, extract_features
from tetris_qagent.rewards import RewardShapingParams, ShapedReward
from tetris_qagent.utils.logging import setup_logger


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Print column profiles, value-function features and shaped reward of a board snapshot.",
        allow_abbrev=False,
    )
    ap.add_argument("board", type=str, help="board file (.npy or whitespace-separated text grid)")
    ap.add_argument("--score-delta", type=float, default=0.0, help="score gained this turn")
    ap.add_argument("--total-score", type=int, default=0, help="total game score")
    ap.add_argument("--terminal", action="store_true", help="treat the board as game over")
    ap.add_argument("--log-level", type=str, default="info")
    return ap.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logger = setup_logger(name="tetris_qagent.inspect", use_rich=True, level=str(args.log_level))
    console = Console()

    try:
        board = load_board(Path(args.board))
        profiles = column_profiles(board)
        features = extract_features(board)
    except (OSError, ValueError, FeatureExtractionError) as exc:
        logger.error(f"[inspect] {exc}")
        return 1

    cols = Table(title="columns")
    for name in ("col", "height", "holes", "top_hole", "first_occupied", "filled"):
        cols.add_column(name, justify="right")
    for idx, prof in enumerate(profiles):
        cols.add_row(
            str(idx),
            str(prof.height),
            str(prof.holes),
            "x" if prof.top_hole else "",
            "-" if prof.first_occupied is None else str(prof.first_occupied),
            "x" if prof.filled else "",
        )
    console.print(cols)

    feats = Table(title="features")
    feats.add_column("feature")
    feats.add_column("value", justify="right")
    for name, value in features.as_dict().items():
        feats.add_row(name, f"{value:.4g}")
    console.print(feats)

    shaped = ShapedReward(params=RewardShapingParams())
    reward = shaped(
        board=board,
        features=features,
        turn_score_delta=float(args.score_delta),
        total_score=int(args.total_score),
        is_terminal=bool(args.terminal),
    )
    console.print(f"reward (fresh state): {reward:.3f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
