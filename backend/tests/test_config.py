"""Tests for Settings."""

import pytest

from stockdash.config import DEFAULT_STATIC_DIR, ConfigError, Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.port == 3000
        assert settings.tick_interval == 5.0
        assert settings.max_delta == 5.0
        assert settings.price_floor == 1.0
        assert settings.static_dir == DEFAULT_STATIC_DIR
        assert settings.seed is None

    def test_env_overrides(self):
        settings = Settings.from_env(
            {
                "STOCKDASH_PORT": "8080",
                "STOCKDASH_TICK_INTERVAL": "0.5",
                "STOCKDASH_MAX_DELTA": "2.5",
                "STOCKDASH_PRICE_FLOOR": "0.01",
                "STOCKDASH_STREAM_QUEUE_SIZE": "10",
                "STOCKDASH_HOST": "0.0.0.0",
                "STOCKDASH_SEED": "7",
                "STOCKDASH_LOG_LEVEL": "debug",
            }
        )
        assert settings.port == 8080
        assert settings.tick_interval == 0.5
        assert settings.max_delta == 2.5
        assert settings.price_floor == 0.01
        assert settings.stream_queue_size == 10
        assert settings.host == "0.0.0.0"
        assert settings.seed == 7
        assert settings.log_level == "DEBUG"

    def test_blank_values_use_defaults(self):
        settings = Settings.from_env({"STOCKDASH_PORT": "  ", "STOCKDASH_HOST": ""})
        assert settings.port == 3000
        assert settings.host == "127.0.0.1"

    def test_unparseable_value(self):
        with pytest.raises(ConfigError, match="STOCKDASH_PORT"):
            Settings.from_env({"STOCKDASH_PORT": "http"})

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"tick_interval": 0},
            {"max_delta": -1},
            {"price_floor": 0},
            {"heartbeat_interval": -5},
            {"stream_queue_size": 0},
            {"port": 70000},
        ],
    )
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ConfigError):
            Settings(**kwargs)

    def test_unknown_log_level_from_env(self):
        with pytest.raises(ConfigError, match="log_level"):
            Settings.from_env({"STOCKDASH_LOG_LEVEL": "verbose"})

    def test_unknown_log_level(self):
        with pytest.raises(ConfigError):
            Settings(log_level="loud")

    @pytest.mark.parametrize("level", ["debug", "Warning", "CRITICAL"])
    def test_known_log_levels_any_case(self, level):
        assert Settings(log_level=level).log_level == level

    def test_frozen(self):
        settings = Settings()
        with pytest.raises(AttributeError):
            settings.port = 1
