"""Configuration package."""
from laundrypro.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
