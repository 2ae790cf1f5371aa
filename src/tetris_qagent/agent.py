# src/tetris_qagent/agent.py
from __future__ import annotations

import logging
from typing import Any

import numpy as np
import torch

from tetris_qagent.config.root import AgentConfig
from tetris_qagent.exploration.policy import EpsilonGreedyExploration
from tetris_qagent.features.board import (
    NUM_FEATURES,
    BoardFeatures,
    FeatureExtractionError,
    extract_features,
)
from tetris_qagent.game.api import GameCounter, GameView
from tetris_qagent.rewards.shaped import ShapedReward
from tetris_qagent.rewards.state import RewardState
from value_rl.callbacks import FitCallback
from value_rl.logging import ScalarLogger
from value_rl.train import Dataset, FitStats, LossFn, ValueMLP, fit

LOG = logging.getLogger(__name__)


class TetrisQAgent:
    """
    Value-function agent for one training session.

    Owns every piece of mutable state: reward bookkeeping, the exploration
    generator (seeded once here) and the value model. The reward state and the
    exploration policy share one score_history list.
    """

    def __init__(
        self,
        *,
        config: AgentConfig | None = None,
        name: str | None = None,
        q_function: torch.nn.Module | None = None,
    ) -> None:
        self.config = config or AgentConfig()
        self.name = str(name) if name is not None else str(self.config.name)

        self.reward_state = RewardState()
        self.reward_fn = ShapedReward(params=self.config.reward, state=self.reward_state)
        self.exploration = EpsilonGreedyExploration(
            params=self.config.exploration,
            score_history=self.reward_state.score_history,
        )
        self.q_function = q_function if q_function is not None else self.init_q_function()
        self.last_features = BoardFeatures.zeros()

    @property
    def random(self) -> np.random.Generator:
        return self.exploration.rng

    def init_q_function(self) -> torch.nn.Module:
        """Fresh value model whose weights depend only on `config.seed`."""
        with torch.random.fork_rng(devices=[]):
            torch.manual_seed(int(self.config.seed))
            return ValueMLP(num_features=NUM_FEATURES, hidden_dim=self.config.trainer.hidden_dim)

    # ------------------------------------------------------------------
    # Features / reward
    # ------------------------------------------------------------------
    def _board_for(self, game: GameView, candidate: Any) -> Any:
        try:
            return game.board_for(candidate)
        except FeatureExtractionError:
            raise
        except Exception as exc:
            raise FeatureExtractionError(f"board snapshot for candidate failed: {exc}") from exc

    def q_function_input(self, game: GameView | None, candidate: Any | None) -> np.ndarray:
        if game is None or candidate is None:
            return BoardFeatures.zeros().as_array()
        return extract_features(self._board_for(game, candidate)).as_array()

    def reward(self, game: GameView | None) -> float:
        if game is None:
            return 0.0
        board = game.board()
        if board is None:
            return 0.0
        self.last_features = extract_features(board)
        return self.reward_fn(
            board=board,
            features=self.last_features,
            turn_score_delta=float(game.score_this_turn()),
            total_score=int(game.total_score()),
            is_terminal=bool(game.did_agent_lose()),
        )

    # ------------------------------------------------------------------
    # Move selection
    # ------------------------------------------------------------------
    def should_explore(self, game: GameView, counter: GameCounter) -> bool:
        return self.exploration.should_explore(
            games_played=int(counter.total_games_played),
            current_game_index=int(counter.current_game_idx),
            total_score=int(game.total_score()),
        )

    def exploration_move(self, game: GameView) -> Any | None:
        return self.exploration.choose_exploratory_move(
            list(game.final_placements()),
            board_for=lambda cand: self._board_for(game, cand),
        )

    def best_move(self, game: GameView) -> Any | None:
        candidates = list(game.final_placements())
        if not candidates:
            return None
        inputs = np.stack([self.q_function_input(game, cand) for cand in candidates], axis=0)
        with torch.no_grad():
            values = self.q_function(torch.from_numpy(inputs)).reshape(-1)
        return candidates[int(torch.argmax(values).item())]

    def select_move(self, game: GameView, counter: GameCounter) -> Any | None:
        if self.should_explore(game, counter):
            return self.exploration_move(game)
        return self.best_move(game)

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------
    def train_q_function(
        self,
        *,
        dataset: Dataset,
        loss_fn: LossFn,
        optimizer: torch.optim.Optimizer,
        n_epochs: int,
        callback: FitCallback | list[FitCallback] | None = None,
        logger: ScalarLogger | None = None,
    ) -> list[FitStats]:
        LOG.debug("[%s] fitting value function for %d epochs", self.name, int(n_epochs))
        return fit(
            model=self.q_function,
            dataset=dataset,
            loss_fn=loss_fn,
            optimizer=optimizer,
            n_epochs=int(n_epochs),
            callback=callback,
            logger=logger,
        )


__all__ = ["TetrisQAgent"]
