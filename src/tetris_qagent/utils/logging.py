from __future__ import annotations

import logging
from typing import Optional, Sequence

from rich.logging import RichHandler

LIBRARY_LOGGERS: tuple[str, ...] = ("tetris_qagent", "value_rl")


def setup_logger(
    *,
    name: str,
    use_rich: bool = True,
    level: str = "info",
    capture: Sequence[str] = LIBRARY_LOGGERS,
) -> logging.Logger:
    """
    Configure the CLI logger `name` and route the `capture` library loggers
    (feature/reward/exploration debug lines, fit epoch summaries) through the
    same handler at the same level.
    """
    lvl = getattr(logging, str(level).upper(), logging.INFO)

    handler: Optional[logging.Handler] = None
    if use_rich:
        handler = RichHandler(
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s"))

    for logger_name in (str(name), *capture):
        lib = logging.getLogger(logger_name)
        lib.handlers.clear()
        lib.propagate = False
        lib.setLevel(lvl)
        lib.addHandler(handler)

    return logging.getLogger(str(name))


__all__ = ["LIBRARY_LOGGERS", "setup_logger"]
