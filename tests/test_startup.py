"""Tests for startup config logging helpers."""

from solarcart.common.startup import log_startup_config, redacted_env, report_config_problems


def test_secret_like_values_are_redacted(monkeypatch):
    monkeypatch.setenv("WEBXPAY_SECRET_KEY", "shh")
    monkeypatch.setenv("BACKEND_URL", "http://backend:8000")
    monkeypatch.delenv("APP_URL", raising=False)

    assert redacted_env("WEBXPAY_SECRET_KEY") == "<redacted>"
    assert redacted_env("BACKEND_URL") == "http://backend:8000"
    assert redacted_env("APP_URL") == "<unset>"


def test_startup_snapshot(monkeypatch):
    monkeypatch.setenv("SERVICE_NAME", "storefront")
    snapshot = log_startup_config("storefront", ["SERVICE_NAME"])
    assert snapshot == {"service": "storefront", "SERVICE_NAME": "storefront"}


def test_config_problems_are_reported(caplog):
    caplog.set_level("WARNING", logger="solarcart")

    assert report_config_problems("webxpay", []) is True
    assert report_config_problems("webxpay", ["APP_URL is not set"]) is False
    assert "APP_URL is not set" in caplog.text
