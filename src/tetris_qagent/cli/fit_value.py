# src/tetris_qagent/cli/fit_value.py
from __future__ import annotations

import argparse
import time
from pathlib import Path
from typing import Sequence

import torch
from omegaconf.errors import OmegaConfBaseException
from torch import nn

from tetris_qagent.agent import TetrisQAgent
from tetris_qagent.cli.io import load_training_arrays
from tetris_qagent.config.io import load_agent_config
from tetris_qagent.utils.logging import setup_logger
from tetris_qagent.utils.seed import seed_all
from value_rl import ArrayDataset, PythonScalarLogger, RichProgressCallback, TrainingError


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Fit the value function on stored (features, targets) pairs.",
        allow_abbrev=False,
    )
    ap.add_argument("data", type=str, help=".npz archive with `features` (N,6) and `targets` (N,)")
    ap.add_argument("-cfg", "--config-file", dest="config_file", default=None, help="path to a YAML agent config")
    ap.add_argument("--no-progress", action="store_true", help="disable the progress bar")
    ap.add_argument("--deterministic", action="store_true", help="force deterministic torch kernels")
    ap.add_argument("overrides", nargs=argparse.REMAINDER, help="dotlist overrides (after --)")
    return ap.parse_args(argv)


def _normalize_overrides(overrides: Sequence[str]) -> list[str]:
    if not overrides:
        return []
    if overrides[0] == "--":
        return list(overrides[1:])
    return list(overrides)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    cfg_path = Path(args.config_file) if args.config_file else None
    try:
        cfg = load_agent_config(cfg_path, overrides=_normalize_overrides(args.overrides))
    except (OSError, TypeError, ValueError, OmegaConfBaseException) as exc:
        # pydantic.ValidationError is a ValueError
        setup_logger(name="tetris_qagent.fit", use_rich=True).error(f"[config] {exc}")
        return 1

    logger = setup_logger(name="tetris_qagent.fit", use_rich=True, level=str(cfg.log_level))
    seed_all(int(cfg.seed), deterministic=bool(args.deterministic))

    t0 = time.perf_counter()
    try:
        features, targets = load_training_arrays(Path(args.data))
        dataset = ArrayDataset(
            features,
            targets,
            batch_size=int(cfg.trainer.batch_size),
            seed=int(cfg.trainer.seed),
        )
    except (OSError, KeyError, ValueError) as exc:
        logger.error(f"[data] {exc}")
        return 1
    logger.info(f"[data] samples={len(dataset)} batches={dataset.num_batches} ({time.perf_counter() - t0:.2f}s)")

    agent = TetrisQAgent(config=cfg)
    optimizer = torch.optim.Adam(agent.q_function.parameters(), lr=float(cfg.trainer.learning_rate))
    callbacks = [] if args.no_progress else [RichProgressCallback(description="value fit")]

    try:
        stats = agent.train_q_function(
            dataset=dataset,
            loss_fn=nn.MSELoss(),
            optimizer=optimizer,
            n_epochs=int(cfg.trainer.n_epochs),
            callback=callbacks,
            logger=PythonScalarLogger(logger),
        )
    except TrainingError as exc:
        logger.exception(f"[fit] aborting run: {exc}")
        return 1

    if stats:
        logger.info(f"[fit] epochs={len(stats)} final_mean_loss={stats[-1].mean_loss:.6g}")
    logger.info("[done]")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
