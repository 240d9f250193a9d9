import importlib
import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from uplink_decoder import config  # noqa: E402


@pytest.fixture(autouse=True)
def reload_config():
    """Ensure a fresh view of the config module for each test."""

    importlib.reload(config)
    yield
    importlib.reload(config)


def test_cors_origins_are_split_and_trimmed(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example,, ")
    importlib.reload(config)

    assert config.CORS_ORIGINS == ["http://a.example", "http://b.example"]


def test_cors_origins_default(monkeypatch):
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    importlib.reload(config)

    assert config.CORS_ORIGINS == ["http://localhost:5173"]


def test_log_level_is_normalised(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    importlib.reload(config)

    assert config.LOG_LEVEL == "DEBUG"


def test_configure_logging_falls_back_on_unknown_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    config.configure_logging("NOPE")

    assert calls[0]["level"] == logging.INFO
