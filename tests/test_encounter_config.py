"""Tests for per-phase encounter configuration."""

import orjson
import pytest

from angler.config.encounter_config import EncounterConfig
from angler.config.fishing import BITE_BASE_PROBABILITY, LOST_DISPLAY_DURATION
from angler.exceptions import ConfigurationError
from angler.fishing.phase import Phase
from angler.fishing.phases import build_phase_behaviors


class TestEncounterConfig:
    def test_defaults_come_from_constants(self):
        config = EncounterConfig()
        assert config.bite_check.base_probability == BITE_BASE_PROBABILITY
        assert config.lost.duration == LOST_DISPLAY_DURATION
        assert config.caught.duration == 2.0

    def test_from_dict_overrides_only_given_keys(self):
        config = EncounterConfig.from_dict({"bite_check": {"base_probability": 0.9}})
        assert config.bite_check.base_probability == 0.9
        assert config.bite_check.check_duration == 0.3
        assert config.reeling.max_tension == 1.0

    def test_from_dict_empty(self):
        assert EncounterConfig.from_dict(None) == EncounterConfig()

    @pytest.mark.parametrize(
        "data",
        [
            {"fishing_rod": {"length": 2}},
            {"reeling": {"max_tension_ratio": 2}},
            {"reeling": {"max_tension": "high"}},
            {"reeling": {"max_tension": True}},
            {"casting": 5},
            {"casting": ["duration", 1.0]},
            [{"casting": {"duration": 1.0}}],
            [],
            "casting",
        ],
    )
    def test_from_dict_rejects_bad_input(self, data):
        with pytest.raises(ConfigurationError):
            EncounterConfig.from_dict(data)

    def test_from_dict_skips_null_sections(self):
        assert EncounterConfig.from_dict({"casting": None}) == EncounterConfig()

    def test_load_reads_json_file(self, tmp_path):
        path = tmp_path / "tuning.json"
        path.write_bytes(orjson.dumps({"hooked": {"duration": 0.6}}))

        config = EncounterConfig.load(path)

        assert config.hooked.duration == 0.6
        assert config.casting == EncounterConfig().casting

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read"):
            EncounterConfig.load(tmp_path / "missing.json")

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "tuning.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="not valid JSON"):
            EncounterConfig.load(path)

    def test_to_dict_round_trips(self):
        config = EncounterConfig.from_dict({"stillness": {"threshold": 1.5}})
        assert EncounterConfig.from_dict(config.to_dict()) == config


class TestBuildPhaseBehaviors:
    def test_every_phase_has_a_behavior(self):
        behaviors = build_phase_behaviors()
        assert set(behaviors) == set(Phase)
        for phase, behavior in behaviors.items():
            assert behavior.phase is phase

    def test_config_reaches_behaviors(self):
        config = EncounterConfig.from_dict(
            {"hook_opportunity": {"window_duration": 1.2}, "lost": {"duration": 0.5}}
        )
        behaviors = build_phase_behaviors(config)
        assert behaviors[Phase.HOOK_OPPORTUNITY].window_duration == 1.2
        assert behaviors[Phase.LOST].duration == 0.5

    def test_behaviors_clamp_config_minimums(self):
        config = EncounterConfig.from_dict({"casting": {"duration": 0.0}})
        behaviors = build_phase_behaviors(config)
        assert behaviors[Phase.CASTING].duration == pytest.approx(0.1)
