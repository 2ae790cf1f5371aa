# src/tetris_qagent/__init__.py
from .agent import TetrisQAgent
from .config.root import AgentConfig, TrainerParams
from .exploration import EpsilonGreedyExploration, ExplorationParams
from .features import FEATURE_NAMES, BoardFeatures, ColumnProfile, FeatureExtractionError, extract_features
from .game import GameCounter, GameView
from .rewards import RewardShapingParams, RewardState, ShapedReward

__all__ = [
    "FEATURE_NAMES",
    "AgentConfig",
    "BoardFeatures",
    "ColumnProfile",
    "EpsilonGreedyExploration",
    "ExplorationParams",
    "FeatureExtractionError",
    "GameCounter",
    "GameView",
    "RewardShapingParams",
    "RewardState",
    "ShapedReward",
    "TetrisQAgent",
    "TrainerParams",
    "extract_features",
]
