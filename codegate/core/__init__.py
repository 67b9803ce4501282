"""Core configuration for the quality gate."""

from .config import Settings, settings

__all__ = ["Settings", "settings"]
