"""Central environment-driven settings for the payment gateway.

The process loads this once at startup. Behavior is controlled by environment
variables or a local `.env` file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class CommonSettings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "payment-gateway"
    log_level: str = "INFO"
    authorizer_url: str = "http://localhost:8080/payments"
    authorizer_timeout_seconds: float = 5.0
    otel_enabled: bool = False
    otel_exporter_otlp_endpoint: str = "http://otel-collector:4318/v1/traces"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = CommonSettings()
