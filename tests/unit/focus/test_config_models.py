"""Tests for joidu/focus/config_models.py"""

import pytest

from joidu.focus import CONFIG_PATH
from joidu.focus.config_models import (
    EnergyConfig,
    EnergyThresholdsConfig,
    FocusConfig,
    HyperfocusConfig,
    HyperfocusThresholdsConfig,
    load_and_validate,
)


class TestFocusConfig:
    def test_defaults(self):
        config = FocusConfig()
        assert config.energy.history_cap == 20
        assert config.energy.recent_window == 5
        assert config.energy.default_priors["morning"] == "high"
        assert config.hyperfocus.thresholds.gentle == 25
        assert config.hyperfocus.thresholds.emergency == 120
        assert config.hyperfocus.tick_interval_seconds == 60
        assert config.hyperfocus.session_history_cap == 100

    def test_valid_overrides(self):
        config = FocusConfig(
            energy={"history_cap": 10},
            hyperfocus={"thresholds": {"gentle": 20}},
        )
        assert config.energy.history_cap == 10
        assert config.hyperfocus.thresholds.gentle == 20
        assert config.hyperfocus.thresholds.strong == 45

    def test_extra_keys_allowed(self):
        config = FocusConfig(energy={"unknown_field": "value"})
        assert config.energy.history_cap == 20

    def test_thresholds_must_ascend(self):
        with pytest.raises(ValueError):
            HyperfocusThresholdsConfig(gentle=50, strong=45)

    def test_energy_thresholds_must_be_ordered(self):
        with pytest.raises(ValueError):
            EnergyThresholdsConfig(high=0.3, medium=0.5)
        assert EnergyThresholdsConfig(high=0.5, medium=0.5).medium == 0.5

    def test_tick_must_be_at_least_once_a_minute(self):
        with pytest.raises(ValueError):
            HyperfocusConfig(tick_interval_seconds=120)

    def test_invalid_cap_rejected(self):
        with pytest.raises(ValueError):
            EnergyConfig(history_cap=0)


class TestLoadAndValidate:
    def test_shipped_config_matches_defaults(self):
        assert CONFIG_PATH.exists()
        config = load_and_validate()
        assert config.energy == FocusConfig().energy
        assert config.hyperfocus == FocusConfig().hyperfocus

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_and_validate(tmp_path / "nope.yaml")
        assert config.energy.history_cap == 20

    def test_invalid_file_uses_defaults(self, tmp_path):
        path = tmp_path / "focus.yaml"
        path.write_text("focus:\n  hyperfocus:\n    thresholds:\n      gentle: 200\n")
        config = load_and_validate(path)
        assert config.hyperfocus.thresholds.gentle == 25

    def test_unwrapped_file(self, tmp_path):
        path = tmp_path / "focus.yaml"
        path.write_text("energy:\n  recent_window: 7\n")
        assert load_and_validate(path).energy.recent_window == 7
