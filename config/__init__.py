"""Configuration module for loading environment variables and settings."""

from config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
