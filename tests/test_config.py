# Area: Tests
"""Tests for configuration loading."""

import json

import pytest
from flip6.config import EngineConfig, load_config, validate_config
from flip6.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from FLIP6_* variables and any .env file."""
    for key in ("FLIP6_DB_PATH", "FLIP6_LOG_FILE", "FLIP6_LOG_LEVEL",
                "FLIP6_COMPLETION_BONUS", "FLIP6_CLAMP_AT_ZERO",
                "FLIP6_PREVIEW_COUNT", "FLIP6_SEED"):
        # setenv first so teardown also clears values a .env file loaded
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self):
        """Test defaults apply without file or environment."""
        config = load_config()
        assert config == EngineConfig()
        assert config.streak_lengths == (2, 3)

    def test_json_file(self, tmp_path):
        """Test values are read from a JSON file."""
        path = tmp_path / "engine.json"
        path.write_text(json.dumps({"completion_bonus": 10, "streak_lengths": [2]}))
        config = load_config(str(path))
        assert config.completion_bonus == 10
        assert config.streak_lengths == (2,)

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        """Test environment variables win over the file."""
        path = tmp_path / "engine.json"
        path.write_text(json.dumps({"preview_count": 1}))
        monkeypatch.setenv("FLIP6_PREVIEW_COUNT", "4")
        monkeypatch.setenv("FLIP6_CLAMP_AT_ZERO", "false")
        monkeypatch.setenv("FLIP6_SEED", "99")

        config = load_config(str(path))

        assert config.preview_count == 4
        assert config.clamp_at_zero is False
        assert config.seed == 99

    def test_env_file(self, tmp_path):
        """Test a .env file is loaded through python-dotenv."""
        env_file = tmp_path / "custom.env"
        env_file.write_text("FLIP6_COMPLETION_BONUS=20\n")
        assert load_config(env_file=str(env_file)).completion_bonus == 20

    def test_missing_file(self):
        """Test a missing config file is an error."""
        with pytest.raises(ConfigError):
            load_config("nope.json")

    def test_unknown_key(self, tmp_path):
        """Test unknown keys are rejected."""
        path = tmp_path / "engine.json"
        path.write_text(json.dumps({"bonus": 3}))
        with pytest.raises(ConfigError, match="bonus"):
            load_config(str(path))

    def test_bad_env_value(self, monkeypatch):
        """Test unparsable environment values are reported."""
        monkeypatch.setenv("FLIP6_SEED", "abc")
        with pytest.raises(ConfigError, match="FLIP6_SEED"):
            load_config()

    def test_malformed_json(self, tmp_path):
        """Test a file that is not valid JSON raises ConfigError."""
        path = tmp_path / "engine.json"
        path.write_text("{\"completion_bonus\": ")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(str(path))

    def test_json_not_an_object(self, tmp_path):
        """Test a JSON list is rejected."""
        path = tmp_path / "engine.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError):
            load_config(str(path))

    @pytest.mark.parametrize("values", [
        {"completion_bonus": "x"},
        {"streak_lengths": 2},
        {"streak_lengths": ["2"]},
        {"clamp_at_zero": "no"},
        {"catalog": {"5": "three"}},
    ])
    def test_wrong_types_in_file(self, tmp_path, values):
        """Test wrongly typed values raise ConfigError, not TypeError."""
        path = tmp_path / "engine.json"
        path.write_text(json.dumps(values))
        with pytest.raises(ConfigError):
            load_config(str(path))


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid(self):
        """Test the defaults validate."""
        validate_config(EngineConfig())

    @pytest.mark.parametrize("changes", [
        {"log_level": "LOUD"},
        {"completion_bonus": -1},
        {"completion_min_cards": 0},
        {"streak_lengths": (1,)},
        {"action_cap": -1},
        {"preview_count": -2},
        {"catalog": {}},
        {"catalog": {"5": -1}},
        {"catalog": {"Joker": 2}},
        {"completion_bonus": True},
        {"log_level": 5},
        {"seed": "7"},
    ])
    def test_invalid(self, changes):
        """Test out-of-range values raise ConfigError."""
        with pytest.raises(ConfigError):
            validate_config(EngineConfig(**changes))

    def test_config_error_is_value_error(self):
        """Test ConfigError can be caught as ValueError."""
        with pytest.raises(ValueError):
            validate_config(EngineConfig(action_cap=-1))
