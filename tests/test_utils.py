"""
Unit tests for utils module.
"""
import logging

from utils import get_env_bool, get_env_int, setup_logging


def test_get_env_bool(monkeypatch):
    """Test environment variable boolean parsing."""
    # Test True values
    for val in ["1", "TRUE", "true", "YES", "yes", "ON", "on"]:
        monkeypatch.setenv("TEST_VAR", val)
        assert get_env_bool("TEST_VAR") == True

    # Test False values
    for val in ["0", "FALSE", "false", "NO", "no", "OFF", "off", ""]:
        monkeypatch.setenv("TEST_VAR", val)
        assert get_env_bool("TEST_VAR") == False

    # Test default
    monkeypatch.delenv("TEST_VAR", raising=False)
    assert get_env_bool("TEST_VAR", default=True) == True
    assert get_env_bool("TEST_VAR", default=False) == False


def test_get_env_int(monkeypatch):
    """Test environment variable integer parsing."""
    monkeypatch.setenv("TEST_INT", " 5 ")
    assert get_env_int("TEST_INT", 2) == 5

    monkeypatch.setenv("TEST_INT", "abc")
    assert get_env_int("TEST_INT", 2) == 2

    monkeypatch.setenv("TEST_INT", "")
    assert get_env_int("TEST_INT", 3) == 3

    monkeypatch.delenv("TEST_INT", raising=False)
    assert get_env_int("TEST_INT", 7) == 7


def test_get_env_int_minimum(monkeypatch):
    """Minimum is applied after parsing."""
    monkeypatch.setenv("TEST_INT", "1")
    assert get_env_int("TEST_INT", 2, minimum=2) == 2


def test_setup_logging_runs():
    """setup_logging accepts names in any case."""
    setup_logging("debug")
    setup_logging(None)
    assert logging.getLogger().handlers
