"""In-memory image payloads and data URL conversion.

Uploaded images travel through the system as :class:`ImageData`: raw bytes
plus the declared MIME type.  The browser-facing formats are data URLs
(``data:image/png;base64,iVBOR...``); files uploaded through the Gradio UI
arrive as paths on disk and are sniffed with Pillow to find their MIME type.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .errors import ImageDataError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageData:
    """Raw image bytes with their MIME type."""

    data: bytes
    mime_type: str

    @classmethod
    def from_data_url(cls, data_url: str) -> ImageData:
        """Split a base64 data URL into bytes and MIME type.

        Args:
            data_url: String of the form ``data:<mime>;base64,<payload>``.

        Returns:
            Decoded :class:`ImageData`.

        Raises:
            ImageDataError: If the string is not a base64 data URL or the
                payload is not valid base64.
        """
        header, sep, payload = data_url.partition(",")
        if not sep or not header.startswith("data:") or not header.endswith(";base64"):
            raise ImageDataError("Image must be a base64 data URL.")

        mime_type = header[len("data:") : -len(";base64")]
        if not mime_type:
            raise ImageDataError("Image data URL has no MIME type.")

        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ImageDataError("Image data URL is not valid base64.") from e

        return cls(data=data, mime_type=mime_type)

    @classmethod
    def from_bytes(cls, data: bytes) -> ImageData:
        """Wrap raw image bytes, detecting the MIME type with Pillow.

        Raises:
            ImageDataError: If Pillow cannot identify the image format.
        """
        try:
            with Image.open(io.BytesIO(data)) as img:
                image_format = img.format
        except (UnidentifiedImageError, OSError) as e:
            raise ImageDataError("The selected file is not a readable image.") from e

        mime_type = Image.MIME.get(image_format or "")
        if not mime_type:
            raise ImageDataError(f"Unsupported image format: {image_format}")
        return cls(data=data, mime_type=mime_type)

    @classmethod
    def from_path(cls, path: str | Path) -> ImageData:
        """Read an image file fully into memory."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ImageDataError(f"Could not read image file: {path.name}") from e
        image = cls.from_bytes(data)
        logger.debug(f"Loaded {path.name} ({image.mime_type}, {len(data)} bytes)")
        return image

    def to_data_url(self) -> str:
        """Encode as a ``data:<mime>;base64,...`` URL."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"

    def to_pil(self) -> Image.Image:
        """Decode into a Pillow image (used for on-screen previews)."""
        return Image.open(io.BytesIO(self.data))
