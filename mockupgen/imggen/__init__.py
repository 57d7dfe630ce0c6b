"""Prompt building and image encoding utilities."""

from .encoding import EncodedImage, decode_image
from .prompt_builder import build_prompt, match_category

__all__ = ["EncodedImage", "build_prompt", "decode_image", "match_category"]
