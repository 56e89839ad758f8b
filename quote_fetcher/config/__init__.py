"""Configuration package exports."""

from .loader import ConfigLocator, ConfigRepository
from .models import AppConfig, ClientConfig

__all__ = ["AppConfig", "ClientConfig", "ConfigLocator", "ConfigRepository"]
