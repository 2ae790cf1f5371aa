# src/tetris_qagent/game/constants.py
from __future__ import annotations

# Board / cell encoding (grayscale snapshot values)
UNOCCUPIED: float = 0.0
OCCUPIED_SETTLED: float = 0.5
OCCUPIED_ACTIVE: float = 1.0

# Spawn rows at the top of every snapshot; never scored
BUFFER_ROWS: int = 2
