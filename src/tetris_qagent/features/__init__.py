from __future__ import annotations

from tetris_qagent.features.board import (
    FEATURE_NAMES,
    NUM_FEATURES,
    BoardFeatures,
    ColumnProfile,
    FeatureExtractionError,
    column_profiles,
    extract_features,
    visible_grid,
)

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
