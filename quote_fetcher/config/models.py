"""Pydantic models describing client and application settings."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


class ClientConfig(BaseModel):
    """Transport settings for the quote listing API."""

    base_url: str = "https://api.1000kitap.com/"
    endpoint: str = "okurCekV2"
    section: str = "alintilar"
    app_version: str = "2.43.2"
    platform: str = "web"
    locale: str = "tr"
    user_agent: str = "QuotesFetcher/1.0"
    extra_headers: dict[str, str] = Field(default_factory=dict)
    cookies: dict[str, str] = Field(default_factory=dict)
    timeout: float = 15.0

    @field_validator("base_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return value if value.endswith("/") else value + "/"

    @field_validator("timeout", mode="before")
    @classmethod
    def _coerce_timeout(cls, value: Any) -> float:
        try:
            timeout = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError("timeout must be a number") from exc
        if timeout <= 0:
            raise ValueError("timeout must be greater than 0")
        return timeout


class AppConfig(BaseModel):
    """Top-level settings stored in ``data/config.yaml``."""

    client: ClientConfig = Field(default_factory=ClientConfig)
    show_progress: bool = True
    default_output_format: Literal["json", "csv"] = "json"


__all__ = ["AppConfig", "ClientConfig"]
