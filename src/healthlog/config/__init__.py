"""Configuration for healthlog."""

from healthlog.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
