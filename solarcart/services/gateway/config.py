"""Processor environment helpers.

The storefront holds no processor keys: encryption and signing live in the
backend. Only the environment name and the public callback URL matter here.
"""

from solarcart.common.config import CommonSettings, settings

DEFAULT_APP_URL = "http://localhost:3000"
CALLBACK_PATH = "/payment-callback"
PRODUCTION_GATEWAY_URL = "https://webxpay.com/index.php?route=checkout/billing"
STAGING_GATEWAY_URL = "https://stagingxpay.info/index.php?route=checkout/billing"


def payment_callback_url(config: CommonSettings = settings) -> str:
    """Absolute URL the processor should send the shopper back to."""

    base = (config.app_url or DEFAULT_APP_URL).rstrip("/")
    return f"{base}{CALLBACK_PATH}"


def is_production_environment(config: CommonSettings = settings) -> bool:
    return config.webxpay_env == "production"


def payment_gateway_url(config: CommonSettings = settings) -> str:
    """Processor billing URL for the configured environment.

    Logged at startup for reference; the backend hands out the URL actually
    used for checkout.
    """

    return PRODUCTION_GATEWAY_URL if is_production_environment(config) else STAGING_GATEWAY_URL


def validate_gateway_config(config: CommonSettings = settings) -> list[str]:
    """Return human-readable problems with the storefront's processor settings."""

    errors: list[str] = []
    if not config.webxpay_env:
        errors.append('WEBXPAY_ENV is not set (should be "staging" or "production")')
    elif config.webxpay_env not in ("staging", "production"):
        errors.append(f'WEBXPAY_ENV must be "staging" or "production", got "{config.webxpay_env}"')
    if not config.app_url:
        errors.append("APP_URL is not set (needed for payment callback)")
    return errors
