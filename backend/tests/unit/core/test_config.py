# tests/unit/core/test_config.py
from __future__ import annotations

from datetime import timedelta

import pytest
from keepnotes.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
)
from keepnotes.services.auth.dto import AuthTokenConfig


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("15", 15), ("", 7), ("   ", 7), ("abc", 7), ("1.5", 7)],
)
def test_env_int_falls_back_on_blank_or_invalid(monkeypatch, raw, expected):
    monkeypatch.setenv("KEEPNOTES_TEST_INT", raw)
    assert env_int("KEEPNOTES_TEST_INT", 7) == expected


def test_env_int_unset(monkeypatch):
    monkeypatch.delenv("KEEPNOTES_TEST_INT", raising=False)
    assert env_int("KEEPNOTES_TEST_INT", 7) == 7


@pytest.mark.parametrize(("raw", "expected"), [("yes", True), ("ON", True), ("0", False), ("no", False)])
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("KEEPNOTES_TEST_BOOL", raw)
    assert env_bool("KEEPNOTES_TEST_BOOL") is expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("production", ProductionConfig),
        (" Testing ", TestingConfig),
        ("development", DevelopmentConfig),
        ("staging", DevelopmentConfig),
    ],
)
def test_get_config_selects_by_app_env(monkeypatch, name, expected):
    monkeypatch.setenv("APP_ENV", name)
    assert get_config() is expected


def test_only_production_marks_cookie_secure():
    assert ProductionConfig.REFRESH_TOKEN_COOKIE_SECURE is True
    assert DevelopmentConfig.REFRESH_TOKEN_COOKIE_SECURE is False


def test_token_config_reads_app_config(app):
    cfg = AuthTokenConfig.from_config(app.config)

    assert cfg.access_expires == app.config["JWT_ACCESS_TOKEN_EXPIRES"]
    assert cfg.refresh_expires == app.config["REFRESH_TOKEN_EXPIRES"]
    assert cfg.cookie_name == "refresh_token"
    assert cfg.cookie_secure is False


def test_token_config_defaults():
    cfg = AuthTokenConfig.from_config({})
    assert cfg.access_expires == timedelta(minutes=15)
    assert cfg.refresh_expires == timedelta(days=7)
