"""Tests for pmtrack.lib.config and pmtrack.lib.envparse modules."""

import pytest
from pathlib import Path
from unittest.mock import patch

from pmtrack.lib import envparse
from pmtrack.lib.config import (
    DEFAULT_MAX_IDENTIFIER,
    TrackerConfig,
    load_config,
)


class TestParseLines:
    """Tests for envparse.parse_lines()."""

    def test_basic_pairs(self):
        env = envparse.parse_lines(["A=1", "B_2 = two"])
        assert env == {"A": "1", "B_2": "two"}

    def test_skips_comments_and_blank_lines(self):
        env = envparse.parse_lines(["# comment", "", "   ", "A=1"])
        assert env == {"A": "1"}

    def test_strips_quotes(self):
        env = envparse.parse_lines(['A="hello world"', "B='x'"])
        assert env == {"A": "hello world", "B": "x"}

    def test_export_prefix(self):
        assert envparse.parse_lines(["export LOG_LEVEL=DEBUG"]) == {"LOG_LEVEL": "DEBUG"}

    def test_trailing_comment(self):
        assert envparse.parse_lines(["A=5 # five"]) == {"A": "5"}

    def test_quoted_hash_kept(self):
        assert envparse.parse_lines(['A="5 # five"']) == {"A": "5 # five"}

    def test_missing_equals(self):
        with pytest.raises(ValueError, match=":2: expected KEY=value"):
            envparse.parse_lines(["A=1", "oops"])

    def test_invalid_key(self):
        with pytest.raises(ValueError, match="invalid key"):
            envparse.parse_lines(["lower=1"])


class TestLoadEnv:
    """Tests for envparse.load_env()."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            envparse.load_env(tmp_path / "nope.env")

    def test_reads_file(self, tmp_path):
        path = tmp_path / "pmtrack.env"
        path.write_text("CURRENCY_SYMBOL=EUR \n")
        assert envparse.load_env(path) == {"CURRENCY_SYMBOL": "EUR"}


class TestParseBool:
    """Tests for envparse.parse_bool()."""

    @pytest.mark.parametrize("raw", ["1", "true", "Yes", "ON"])
    def test_true(self, raw):
        assert envparse.parse_bool(raw) is True

    @pytest.mark.parametrize("raw", ["0", "false", "No", "off"])
    def test_false(self, raw):
        assert envparse.parse_bool(raw) is False

    def test_invalid(self):
        with pytest.raises(ValueError):
            envparse.parse_bool("maybe")


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_config() == TrackerConfig()

    def test_picks_up_default_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "pmtrack.env").write_text("CURRENCY_SYMBOL=GBP\nPAUSE_AFTER_ACTION=true\n")
        config = load_config()
        assert config.currency_symbol == "GBP"
        assert config.pause_after_action is True

    def test_explicit_missing_path_is_error(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.env")

    @patch("pmtrack.lib.config.envparse.load_env")
    def test_all_keys(self, mock_load_env):
        mock_load_env.return_value = {
            "CURRENCY_SYMBOL": "EUR ",
            "MAX_IDENTIFIER": "999",
            "PAUSE_AFTER_ACTION": "yes",
            "LOG_LEVEL": "debug",
        }
        config = load_config(Path("/fake/pmtrack.env"))
        assert config.currency_symbol == "EUR "
        assert config.max_identifier == 999
        assert config.pause_after_action is True
        assert config.log_level == "DEBUG"

    @patch("pmtrack.lib.config.envparse.load_env")
    def test_invalid_max_identifier_falls_back(self, mock_load_env, caplog):
        mock_load_env.return_value = {"MAX_IDENTIFIER": "0"}
        config = load_config(Path("/fake/pmtrack.env"))
        assert config.max_identifier == DEFAULT_MAX_IDENTIFIER
        assert "Invalid MAX_IDENTIFIER '0'" in caplog.text

    @patch("pmtrack.lib.config.envparse.load_env")
    def test_non_numeric_max_identifier_falls_back(self, mock_load_env, caplog):
        mock_load_env.return_value = {"MAX_IDENTIFIER": "lots"}
        config = load_config(Path("/fake/pmtrack.env"))
        assert config.max_identifier == DEFAULT_MAX_IDENTIFIER
        assert "Invalid MAX_IDENTIFIER 'lots'" in caplog.text

    @patch("pmtrack.lib.config.envparse.load_env")
    def test_unknown_log_level_falls_back(self, mock_load_env, caplog):
        mock_load_env.return_value = {"LOG_LEVEL": "chatty"}
        config = load_config(Path("/fake/pmtrack.env"))
        assert config.log_level == "WARNING"
        assert "Unknown LOG_LEVEL 'chatty'" in caplog.text

    @patch("pmtrack.lib.config.envparse.load_env")
    def test_invalid_pause_falls_back(self, mock_load_env, caplog):
        mock_load_env.return_value = {"PAUSE_AFTER_ACTION": "sometimes"}
        config = load_config(Path("/fake/pmtrack.env"))
        assert config.pause_after_action is False
        assert "Invalid PAUSE_AFTER_ACTION" in caplog.text
