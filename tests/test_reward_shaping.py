from __future__ import annotations

import numpy as np
import pytest
from pydantic import ValidationError

from tetris_qagent.features import BoardFeatures
from tetris_qagent.rewards import (
    RewardShapingParams,
    RewardState,
    ShapedReward,
    board_penalty,
    line_clear_bonus,
)

BOARD = np.zeros((22, 10), dtype=np.float64)


def _features(**kwargs: float) -> BoardFeatures:
    base = dict(
        holes=0,
        bumpiness=0.0,
        vertical_range=0,
        top_holes=0,
        lowest_occupied_row=0,
        completed_lines=0,
    )
    base.update(kwargs)
    return BoardFeatures(**base)  # type: ignore[arg-type]


def _call(
    shaper: ShapedReward,
    *,
    features: BoardFeatures | None = None,
    turn_score_delta: float = 0.0,
    total_score: int = 0,
    is_terminal: bool = False,
    board: object = BOARD,
) -> float:
    return shaper(
        board=board,
        features=features if features is not None else _features(),
        turn_score_delta=turn_score_delta,
        total_score=total_score,
        is_terminal=is_terminal,
    )


def test_absent_board_gives_zero_and_keeps_state() -> None:
    state = RewardState(highest_score_seen=3, turns_since_last_clear=2, score_history=[1, 3])
    shaper = ShapedReward(state=state)
    r = _call(shaper, board=None, features=_features(completed_lines=2), total_score=99, is_terminal=True)
    assert r == 0.0
    assert state == RewardState(highest_score_seen=3, turns_since_last_clear=2, score_history=[1, 3])


def test_base_reward_scales_turn_score() -> None:
    shaper = ShapedReward()
    assert _call(shaper, turn_score_delta=2.0) == pytest.approx(2000.0)


def test_single_clear_after_five_turns_pays_base_bonus() -> None:
    state = RewardState(turns_since_last_clear=5)
    shaper = ShapedReward(state=state)
    r = _call(shaper, features=_features(completed_lines=1))
    assert r == pytest.approx(150.0)
    assert state.turns_since_last_clear == 0


def test_immediate_four_clear_doubles_bonus() -> None:
    shaper = ShapedReward(state=RewardState(turns_since_last_clear=0))
    assert _call(shaper, features=_features(completed_lines=4)) == pytest.approx(2200.0)


def test_large_clear_counts_pay_per_line() -> None:
    params = RewardShapingParams()
    assert line_clear_bonus(completed_lines=5, turns_since_last_clear=0, params=params) == pytest.approx(1500.0)
    assert line_clear_bonus(completed_lines=3, turns_since_last_clear=1, params=params) == pytest.approx(1440.0)
    assert line_clear_bonus(completed_lines=0, turns_since_last_clear=0, params=params) == 0.0


def test_efficiency_never_drops_below_floor() -> None:
    params = RewardShapingParams()
    assert line_clear_bonus(completed_lines=1, turns_since_last_clear=100, params=params) == pytest.approx(75.0)


def test_no_clear_increments_turn_counter() -> None:
    state = RewardState()
    shaper = ShapedReward(state=state)
    for expected in (1, 2, 3):
        assert _call(shaper) == 0.0
        assert state.turns_since_last_clear == expected
    _call(shaper, features=_features(completed_lines=2))
    assert state.turns_since_last_clear == 0


def test_board_penalty_weights() -> None:
    feats = _features(holes=4, bumpiness=1.5, vertical_range=2, top_holes=1, lowest_occupied_row=10)
    assert board_penalty(feats, params=RewardShapingParams()) == pytest.approx(24.0)
    assert _call(ShapedReward(), features=feats) == pytest.approx(-24.0)


def test_milestone_only_on_new_best_score() -> None:
    state = RewardState()
    shaper = ShapedReward(state=state)

    assert _call(shaper, total_score=10) == pytest.approx(500.0)
    assert state.highest_score_seen == 10

    assert _call(shaper, total_score=10) == 0.0
    assert _call(shaper, total_score=5) == 0.0
    assert state.highest_score_seen == 10

    assert _call(shaper, total_score=11) == pytest.approx(500.0)
    assert state.highest_score_seen == 11


def test_terminal_subtracts_fixed_penalty() -> None:
    feats = _features(holes=3, completed_lines=1, bumpiness=0.5)
    alive = _call(ShapedReward(), features=feats, turn_score_delta=1.0, total_score=4)
    dead = _call(ShapedReward(), features=feats, turn_score_delta=1.0, total_score=4, is_terminal=True)
    assert alive - dead == pytest.approx(1000.0)


def test_score_history_grows_once_per_call() -> None:
    state = RewardState()
    shaper = ShapedReward(state=state)
    _call(shaper, total_score=1)
    _call(shaper, total_score=4, is_terminal=True)
    _call(shaper, board=None, total_score=9)
    assert state.score_history == [1, 4]


def test_custom_params_are_respected() -> None:
    params = RewardShapingParams(line_bonuses=(10.0,), per_line_bonus=1.0, efficiency_start=1.0, efficiency_floor=1.0)
    shaper = ShapedReward(params=params)
    assert _call(shaper, features=_features(completed_lines=1)) == pytest.approx(10.0)
    assert _call(shaper, features=_features(completed_lines=3)) == pytest.approx(3.0)


@pytest.mark.parametrize(
    "data, match",
    [
        ({"efficiency_floor": 3.0}, "efficiency_floor"),
        ({"w_holes": -1.0}, "w_holes"),
        ({"line_bonuses": []}, "line_bonuses"),
        ({"unknown_weight": 1.0}, "unknown_weight"),
    ],
)
def test_invalid_reward_params_rejected(data: dict, match: str) -> None:
    with pytest.raises(ValidationError, match=match):
        RewardShapingParams.model_validate(data)
