"""Startup-time helpers for safe config logging and configuration checks."""

import os

from solarcart.common.logging import logger

SECRET_MARKERS = ("KEY", "SECRET", "PASSWORD", "TOKEN", "COOKIE")


def redacted_env(name: str) -> str:
    """Return env value, hiding anything that looks like a credential."""

    value = os.getenv(name)
    if value is None:
        return "<unset>"
    if any(marker in name.upper() for marker in SECRET_MARKERS):
        return "<redacted>"
    return value


def log_startup_config(service_name: str, keys: list[str]) -> dict[str, str]:
    """Log selected startup config keys for quick troubleshooting."""

    snapshot = {"service": service_name}
    snapshot.update({key: redacted_env(key) for key in keys})
    logger.info("startup_config=%s", snapshot)
    return snapshot


def report_config_problems(component: str, errors: list[str]) -> bool:
    """Warn about each configuration problem; return True when none were found."""

    if not errors:
        logger.info("config_validated component=%s", component)
        return True
    for error in errors:
        logger.warning("config_incomplete component=%s problem=%s", component, error)
    return False
