"""Tests for environment-driven settings."""

import pytest

from passaudit import BreachConfig, ConfigError, Settings, load_settings
from passaudit.client import DEFAULT_ENDPOINT


class TestLoadSettings:
    def test_defaults(self):
        s = load_settings({})
        assert s == Settings()
        assert s.breach.enabled is True
        assert s.breach.endpoint == DEFAULT_ENDPOINT
        assert s.breach.timeout == 10.0
        assert s.breach.cache_duration == 3600.0
        assert s.min_length == 8
        assert s.max_length == 128

    def test_overrides(self):
        s = load_settings({
            "PASSAUDIT_LOG_LEVEL": "debug",
            "PASSAUDIT_MIN_LENGTH": "10",
            "PASSAUDIT_MAX_LENGTH": "64",
            "PASSAUDIT_WORKERS": "2",
            "PASSAUDIT_BREACH_ENABLED": "no",
            "PASSAUDIT_BREACH_ENDPOINT": "http://localhost:9000/range",
            "PASSAUDIT_BREACH_TIMEOUT": "2.5",
            "PASSAUDIT_BREACH_CACHE_MINUTES": "5",
        })
        assert s.log_level == "DEBUG"
        assert s.min_length == 10
        assert s.max_length == 64
        assert s.workers == 2
        assert s.breach == BreachConfig(
            enabled=False,
            endpoint="http://localhost:9000/range",
            timeout=2.5,
            cache_duration=300.0,
        )

    def test_blank_values_use_defaults(self):
        assert load_settings({"PASSAUDIT_BREACH_TIMEOUT": "  "}).breach.timeout == 10.0

    @pytest.mark.parametrize("env", [
        {"PASSAUDIT_BREACH_ENABLED": "maybe"},
        {"PASSAUDIT_BREACH_TIMEOUT": "fast"},
        {"PASSAUDIT_BREACH_TIMEOUT": "0"},
        {"PASSAUDIT_BREACH_CACHE_MINUTES": "-1"},
        {"PASSAUDIT_BREACH_ENDPOINT": "ftp://example.test"},
        {"PASSAUDIT_MAX_LENGTH": "0"},
        {"PASSAUDIT_MIN_LENGTH": "eight"},
        {"PASSAUDIT_WORKERS": "0"},
        {"PASSAUDIT_LOG_LEVEL": "loud"},
    ])
    def test_invalid_values(self, env):
        with pytest.raises(ConfigError):
            load_settings(env)

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("PASSAUDIT_BREACH_ENABLED", "false")
        assert load_settings().breach.enabled is False
