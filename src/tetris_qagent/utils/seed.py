from __future__ import annotations

import random

import numpy as np
import torch


def seed_all(seed: int, *, deterministic: bool = False) -> None:
    """
    Seed Python, NumPy, and Torch once per run.

    The exploration generator is seeded separately by the agent; this covers
    weight init and anything else drawing from the global streams.
    deterministic=True additionally forces deterministic torch kernels so value
    fits replay bit-for-bit.
    """
    seed = int(seed)
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)
    if torch.cuda.is_available():
        torch.cuda.manual_seed_all(seed)
    if deterministic:
        torch.use_deterministic_algorithms(True)


__all__ = ["seed_all"]
