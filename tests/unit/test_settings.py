"""Unit tests for settings and logging setup."""
import logging
from unittest.mock import patch

from plotprep.logging_setup import setup_logging
from plotprep.settings import Settings, get_settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PLOTPREP_KEY_NAME", raising=False)
        cfg = get_settings()
        assert cfg.key_name == "key"
        assert cfg.value_name == "value"
        assert cfg.unite_sep == "_"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("PLOTPREP_KEY_NAME", "variable")
        monkeypatch.setenv("PLOTPREP_LOG_LEVEL", "DEBUG")
        cfg = Settings()
        assert cfg.key_name == "variable"
        assert cfg.log_level == "DEBUG"


class TestSetupLogging:

    def test_explicit_level_wins(self):
        with patch("plotprep.logging_setup.logging.basicConfig") as basic:
            setup_logging("warning")
        assert basic.call_args.kwargs["level"] == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        with patch("plotprep.logging_setup.logging.basicConfig") as basic:
            setup_logging("chatty")
        assert basic.call_args.kwargs["level"] == logging.INFO

    def test_environment_level(self, monkeypatch):
        monkeypatch.setenv("PLOTPREP_LOG_LEVEL", "ERROR")
        with patch("plotprep.logging_setup.logging.basicConfig") as basic:
            setup_logging()
        assert basic.call_args.kwargs["level"] == logging.ERROR
