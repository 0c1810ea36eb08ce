"""Application configuration."""

from .settings import APISettings, DatabaseSettings, Settings, get_settings

__all__ = ["APISettings", "DatabaseSettings", "Settings", "get_settings"]
