"""
Tests for Module 01 — Configuration loader.
"""
import dataclasses
import logging
import os
from unittest.mock import patch

import pytest

from airalert.config import (
    ConfigError, Settings, load_env, load_settings, resolve_log_level,
    DEFAULT_POLL_INTERVAL, DEFAULT_STATION, DEFAULT_WAQI_BASE_URL,
)

BOTH_KEYS = {"AIR_KEY": "air", "BARK_KEY": "bark"}


class TestRequiredSecrets:
    def test_both_present(self):
        s = load_settings(BOTH_KEYS)
        assert s.air_key == "air"
        assert s.bark_key == "bark"

    def test_missing_air_key_named(self):
        with pytest.raises(ConfigError, match="AIR_KEY"):
            load_settings({"BARK_KEY": "bark"})

    def test_missing_bark_key_named(self):
        with pytest.raises(ConfigError, match="BARK_KEY"):
            load_settings({"AIR_KEY": "air"})

    def test_air_key_reported_first_when_both_missing(self):
        with pytest.raises(ConfigError, match="AIR_KEY"):
            load_settings({})

    def test_whitespace_only_is_missing(self):
        with pytest.raises(ConfigError, match="BARK_KEY"):
            load_settings({"AIR_KEY": "air", "BARK_KEY": "   "})

    def test_reads_os_environ_by_default(self):
        with patch("airalert.config.load_dotenv") as mock_dotenv:
            with patch.dict("os.environ", BOTH_KEYS, clear=True):
                s = load_settings()
        mock_dotenv.assert_called_once()
        assert s.air_key == "air"


class TestTunables:
    def test_defaults(self):
        s = load_settings(BOTH_KEYS)
        assert s.poll_interval == DEFAULT_POLL_INTERVAL
        assert s.station == DEFAULT_STATION
        assert s.waqi_base_url == DEFAULT_WAQI_BASE_URL
        assert s.request_timeout == 10.0

    def test_overrides(self):
        env = dict(BOTH_KEYS, POLL_INTERVAL_SECONDS="60", WAQI_STATION="beijing",
                   BARK_BASE_URL="https://bark.example.com/", REQUEST_TIMEOUT_SECONDS="2.5")
        s = load_settings(env)
        assert s.poll_interval == 60
        assert s.station == "beijing"
        assert s.bark_base_url == "https://bark.example.com"
        assert s.request_timeout == 2.5

    def test_non_integer_interval_rejected(self):
        with pytest.raises(ConfigError, match="POLL_INTERVAL_SECONDS"):
            load_settings(dict(BOTH_KEYS, POLL_INTERVAL_SECONDS="soon"))

    def test_zero_interval_rejected(self):
        with pytest.raises(ConfigError, match="POLL_INTERVAL_SECONDS"):
            load_settings(dict(BOTH_KEYS, POLL_INTERVAL_SECONDS="0"))

    def test_negative_timeout_rejected(self):
        with pytest.raises(ConfigError, match="REQUEST_TIMEOUT_SECONDS"):
            load_settings(dict(BOTH_KEYS, REQUEST_TIMEOUT_SECONDS="-1"))


class TestLogLevel:
    def test_default_is_info(self):
        assert resolve_log_level({}) == logging.INFO

    def test_case_insensitive(self):
        assert resolve_log_level({"LOG_LEVEL": "debug"}) == logging.DEBUG

    def test_unknown_level_rejected(self):
        with pytest.raises(ConfigError, match="LOG_LEVEL"):
            resolve_log_level({"LOG_LEVEL": "verbose"})


class TestLoadEnv:
    def test_reads_dotenv_from_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("LOG_LEVEL=WARNING\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        with patch.dict("os.environ", {}, clear=True):
            load_env()
            assert os.environ["LOG_LEVEL"] == "WARNING"

    def test_process_environment_wins(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("LOG_LEVEL=WARNING\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        with patch.dict("os.environ", {"LOG_LEVEL": "DEBUG"}, clear=True):
            load_env()
            assert os.environ["LOG_LEVEL"] == "DEBUG"


class TestSettings:
    def test_is_immutable(self):
        s = Settings(air_key="a", bark_key="b")
        with pytest.raises(dataclasses.FrozenInstanceError):
            s.air_key = "other"

    def test_repr_hides_secrets(self):
        s = Settings(air_key="secret-air", bark_key="secret-bark")
        assert "secret-air" not in repr(s)
        assert "secret-bark" not in repr(s)
