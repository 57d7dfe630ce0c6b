"""Clients for the external image generation service."""

from .backends import ImageBackend, create_backend
from .generation_client import GenerationClient, SleepFunc

__all__ = ["GenerationClient", "ImageBackend", "SleepFunc", "create_backend"]
