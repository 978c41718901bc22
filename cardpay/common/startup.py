"""Startup-time helpers for safe config logging."""

from urllib.parse import urlsplit, urlunsplit

from pydantic_settings import BaseSettings

from cardpay.common.logging import logger


SECRET_MARKERS = ("KEY", "SECRET", "PASSWORD", "TOKEN")


def _redact_url(value: str) -> str:
    """Strip userinfo from URL-shaped values."""

    parts = urlsplit(value)
    if not parts.username and not parts.password:
        return value
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    return urlunsplit((parts.scheme, f"<redacted>@{host}", parts.path, parts.query, parts.fragment))


def _safe_value(name: str, value: object) -> str:
    """Return a printable setting value with redaction for secret-like names."""

    if value is None:
        return "<unset>"
    if any(secret in name.upper() for secret in SECRET_MARKERS):
        return "<redacted>"
    if isinstance(value, str) and "://" in value:
        return _redact_url(value)
    return str(value)


def log_startup_config(config: BaseSettings, keys: list[str]) -> None:
    """Log selected resolved settings for quick troubleshooting."""

    snapshot = {"service": getattr(config, "service_name", "unknown")}
    for key in keys:
        snapshot[key] = _safe_value(key, getattr(config, key, None))
    logger.info("startup_config=%s", snapshot)
