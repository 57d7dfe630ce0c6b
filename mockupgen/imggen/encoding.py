"""Normalisation of data-URI and raw base64 product images."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from mockupgen.errors import GenerationError, GenerationErrorKind

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/png"

SUPPORTED_FORMATS = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
}

_DATA_URI = re.compile(r"^data:(?P<mime>image/[a-zA-Z]+)?;base64,", re.IGNORECASE)
_MIME_ALIASES = {"image/jpg": "image/jpeg"}


@dataclass(frozen=True, slots=True)
class EncodedImage:
    """Raw image bytes together with their mime type."""

    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"


def _invalid(message: str) -> GenerationError:
    return GenerationError(GenerationErrorKind.INVALID_IMAGE, message)


def _detect_format(data: bytes) -> str:
    try:
        with Image.open(BytesIO(data)) as img:
            image_format = (img.format or "").upper()
    except (UnidentifiedImageError, OSError) as exc:
        raise _invalid("Input is not a recognised raster image.") from exc
    if image_format not in SUPPORTED_FORMATS:
        raise _invalid(f"Unsupported image format: {image_format or 'unknown'}.")
    return image_format


def decode_image(value: str | bytes | EncodedImage) -> EncodedImage:
    """
    Validate an incoming product image and normalise it to bytes + mime type.

    Accepts ``data:image/<fmt>;base64,<payload>`` strings, bare base64, raw
    bytes and already decoded :class:`EncodedImage` values. The mime type is
    always the one Pillow detects in the bytes; a declared type that
    disagrees with the payload is ignored.
    """

    declared: str | None = None
    if isinstance(value, EncodedImage):
        data = value.data
        declared = value.mime_type
    elif isinstance(value, bytes):
        data = value
    else:
        text = value.strip()
        match = _DATA_URI.match(text)
        if match:
            declared = (match.group("mime") or "").lower() or None
            text = text[match.end():]
        try:
            data = base64.b64decode(text, validate=True)
        except (ValueError, binascii.Error) as exc:
            raise _invalid("Image payload is not valid base64.") from exc

    if not data:
        raise _invalid("Image payload is empty.")

    mime_type = SUPPORTED_FORMATS[_detect_format(data)]
    if declared and _MIME_ALIASES.get(declared, declared) != mime_type:
        logger.debug("Declared mime type %s does not match payload; using %s.", declared, mime_type)
    if isinstance(value, EncodedImage) and value.mime_type == mime_type:
        return value
    return EncodedImage(data=data, mime_type=mime_type)
