"""Tests for settings loaded from the environment."""

from nodeplat.config import NodeplatSettings


def test_defaults():
    cfg = NodeplatSettings()
    assert cfg.default_shell == "/bin/bash"
    assert cfg.command_timeout_s == 30
    assert cfg.ps_command == "ps -ax -o pid,ppid"


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("NODEPLAT_PLATFORM", "darwin")
    monkeypatch.setenv("NODEPLAT_COMMAND_TIMEOUT_S", "5")
    cfg = NodeplatSettings()
    assert cfg.platform == "darwin"
    assert cfg.command_timeout_s == 5
