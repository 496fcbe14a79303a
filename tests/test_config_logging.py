import logging

import pytest

from menu_bot.config import load_settings
from menu_bot.logging_config import setup_logging


def test_load_settings(monkeypatch):
    monkeypatch.delenv("MENU_BOT_TRANSPORT", raising=False)
    monkeypatch.delenv("MENU_BOT_CONFIG", raising=False)
    monkeypatch.delenv("MENU_BOT_WORKERS", raising=False)
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "abc123")
    s = load_settings()
    assert s.token == "abc123"
    assert s.transport == "discord"
    assert s.config_path == "config/config.json"
    assert s.roster_path == "config/users.csv"
    assert s.workers == 4

    # empty token environment
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "")
    s2 = load_settings()
    assert s2.token == ""
    assert s2.token_env == "DISCORD_BOT_TOKEN"


def test_load_settings_telegram(monkeypatch):
    monkeypatch.setenv("MENU_BOT_TRANSPORT", "Telegram")
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", " tg-token ")
    monkeypatch.setenv("MENU_BOT_CONFIG", "/etc/menu/config.json")
    monkeypatch.setenv("MENU_BOT_WORKERS", "8")
    monkeypatch.setenv("MENU_BOT_POLL_TIMEOUT", "30")
    s = load_settings()
    assert s.transport == "telegram"
    assert s.token == "tg-token"
    assert s.config_path == "/etc/menu/config.json"
    assert s.workers == 8
    assert s.poll_timeout == 30


def test_load_settings_rejects_bad_values(monkeypatch):
    monkeypatch.setenv("MENU_BOT_TRANSPORT", "irc")
    with pytest.raises(ValueError):
        load_settings()

    monkeypatch.setenv("MENU_BOT_TRANSPORT", "discord")
    monkeypatch.setenv("MENU_BOT_WORKERS", "many")
    with pytest.raises(ValueError):
        load_settings()


def test_setup_logging_idempotent():
    logger1 = setup_logging(logging.DEBUG)
    logger2 = setup_logging(logging.DEBUG)
    assert logger1 is logger2
    assert logger1.handlers  # at least one handler installed
    assert logging.getLogger("httpx").level == logging.WARNING
