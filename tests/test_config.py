import pytest

from sumstack.config import GameConfig
from sumstack.constants import GRID_COLS, GRID_ROWS, TIME_PER_ROUND


def test_defaults_match_constants():
    config = GameConfig()
    assert (config.rows, config.cols) == (GRID_ROWS, GRID_COLS)
    assert config.time_per_round == TIME_PER_ROUND
    assert 0 < config.target_min <= config.target_max


@pytest.mark.parametrize(
    "overrides",
    [
        {"rows": 0},
        {"cols": -1},
        {"initial_rows": 11},
        {"target_min": 30, "target_max": 20},
        {"target_min": 0},
        {"time_per_round": 0},
        {"row_append_delay": -0.5},
        {"points_per_tile": -1},
    ],
)
def test_invalid_config_rejected(overrides):
    with pytest.raises(ValueError):
        GameConfig(**overrides)


def test_from_env_reads_prefixed_overrides():
    config = GameConfig.from_env(
        {
            "SUMSTACK_TIME_PER_ROUND": "45",
            "SUMSTACK_ROW_APPEND_DELAY": "0.5",
            "SUMSTACK_SEED": "7",
            "SUMSTACK_ROWS": "",
            "UNRELATED": "1",
        }
    )
    assert config.time_per_round == 45
    assert config.row_append_delay == 0.5
    assert config.seed == 7
    assert config.rows == GRID_ROWS


def test_from_env_rejects_non_numeric_values():
    with pytest.raises(ValueError, match="SUMSTACK_TARGET_MAX"):
        GameConfig.from_env({"SUMSTACK_TARGET_MAX": "lots"})


def test_from_env_validates_result():
    with pytest.raises(ValueError):
        GameConfig.from_env({"SUMSTACK_TARGET_MIN": "50"})
