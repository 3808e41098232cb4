"""Central environment-driven settings for the storefront service.

The process loads this once at startup. Behavior is controlled by environment
variables (see `.env.example`).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class CommonSettings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "storefront"
    log_level: str = "INFO"
    # Left unset on purpose so startup can warn about an incomplete setup.
    app_url: str | None = None
    webxpay_env: str | None = None
    backend_url: str = "http://backend:8000"
    order_service_url: str | None = None
    verify_callback_path: str = "/api/payment/verify-callback"
    verify_timeout_seconds: float = 30.0
    order_refresh_timeout_seconds: float = 10.0
    otel_exporter_otlp_endpoint: str | None = None
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def orders_base_url(self) -> str:
        return self.order_service_url or self.backend_url


settings = CommonSettings()
