"""Configuration loading from YAML + environment overrides."""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from account_opening import SERVICE_NAMES


def _load_yaml(path: str | Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


class AppSettings(BaseSettings):
    """App-level settings with env override."""

    model_config = SettingsConfigDict(
        env_prefix="AOS_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    config_path: str = Field(default="config/default.yaml", alias="AOS_CONFIG_PATH")
    log_level: str = Field(default="INFO", alias="AOS_LOG_LEVEL")
    database_url: str | None = Field(default=None, alias="AOS_DATABASE_URL")
    api_host: str | None = Field(default=None, alias="AOS_API_HOST")
    api_port: int | None = Field(default=None, alias="AOS_API_PORT")


# Ports the account-opening frontend targets in local development.
DEFAULT_SERVICE_PORTS = {
    "customer": 8081,
    "document": 8082,
    "account": 8083,
    "notification": 8084,
}


def validate_config(config: dict[str, Any]) -> None:
    """Raise ValueError on unknown service names or non-integer ports."""
    cors_services = (config.get("cors") or {}).get("services") or []
    for name in cors_services:
        if name not in SERVICE_NAMES:
            raise ValueError(
                f"cors.services contains unknown service {name!r}. "
                f"Known services: {list(SERVICE_NAMES)}"
            )
    services = config.get("services") or {}
    for name, svc in services.items():
        if name not in SERVICE_NAMES:
            raise ValueError(f"services.{name} is not a known service")
        port = (svc or {}).get("port")
        if port is not None and (isinstance(port, bool) or not isinstance(port, int)):
            raise ValueError(f"services.{name}.port must be an integer, got {port!r}")


def get_config(config_path: str | None = None) -> dict[str, Any]:
    """Load merged config from YAML and apply env overrides via AppSettings."""
    settings = AppSettings()
    path = config_path or settings.config_path
    base = _default_config()
    if Path(path).exists():
        base = _deep_merge(base, _load_yaml(path))
        dev_path = Path(path).parent / "dev.yaml"
        if dev_path.exists() and os.environ.get("AOS_ENV") == "dev":
            base = _deep_merge(base, _load_yaml(dev_path))
    # DATABASE_URL is the Docker/Postgres convention; AOS_DATABASE_URL is app-specific
    db_url = os.environ.get("DATABASE_URL") or settings.database_url
    if db_url:
        base.setdefault("database", {})["url"] = db_url
    if "AOS_LOG_LEVEL" in os.environ:
        base.setdefault("app", {})["log_level"] = settings.log_level
    if settings.api_host:
        base.setdefault("api", {})["host"] = settings.api_host
    if settings.api_port is not None:
        base.setdefault("api", {})["port"] = settings.api_port
    validate_config(base)
    return base


def _default_config() -> dict[str, Any]:
    return {
        "app": {"name": "account-opening", "env": "default", "log_level": "INFO"},
        "database": {"url": "sqlite:///./data/account_opening.db", "echo": False},
        "api": {"host": "0.0.0.0", "port": 8080, "strict_status_codes": False},
        "services": {name: {"port": port} for name, port in DEFAULT_SERVICE_PORTS.items()},
        "cors": {
            "allowed_origins": ["http://localhost:3000", "http://localhost:3001"],
            "allowed_methods": ["GET", "POST", "PUT", "DELETE"],
            "services": ["account", "customer", "notification"],
        },
    }


def get_service_port(config: dict[str, Any], service: str | None) -> int:
    """Port for a single service, or the combined API port when service is None."""
    if service is None:
        return int(config.get("api", {}).get("port", 8080))
    svc = (config.get("services") or {}).get(service) or {}
    return int(svc.get("port", DEFAULT_SERVICE_PORTS[service]))


def get_config_hash(config: dict[str, Any]) -> str:
    """SHA256 of resolved config (canonical key order)."""
    canonical = yaml.dump(config, default_flow_style=False, sort_keys=True, allow_unicode=True)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
