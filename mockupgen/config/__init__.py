"""Configuration helpers."""

from .settings import MAX_BATCH_SIZE, Settings, get_settings

__all__ = ["MAX_BATCH_SIZE", "Settings", "get_settings"]
