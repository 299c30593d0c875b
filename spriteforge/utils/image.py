"""Raster decoding, PNG encoding and output validation helpers (Pillow)."""
from __future__ import annotations

import io
import logging
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from spriteforge.services.errors import DecodeError

logger = logging.getLogger(__name__)

RGBA = Tuple[int, int, int, int]


class Raster:
    """Decoded RGBA pixel grid."""

    def __init__(self, image: Image.Image) -> None:
        self.image = image if image.mode == "RGBA" else image.convert("RGBA")
        self._pixels = self.image.load()

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    def pixel(self, x: int, y: int) -> RGBA:
        return self._pixels[x, y]

    def alpha(self, x: int, y: int) -> int:
        return self._pixels[x, y][3]


def decode(data: bytes) -> Raster:
    """Decode image bytes into an RGBA :class:`Raster`.

    Raises
    ------
    DecodeError
        If the bytes are empty, truncated or not a supported image format.
    """

    if not data:
        raise DecodeError("Empty image payload")
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return Raster(img.convert("RGBA"))
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise DecodeError(f"Could not decode image: {exc}", details={"bytes": len(data)}) from exc


def encode_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def sniff_mime(data: bytes, default: str = "image/png") -> str:
    """Best-effort mime type of image bytes, used to label provider inputs."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format or "", default)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError):
        return default


def has_transparent_border(raster: Raster) -> bool:
    """True when every pixel on the outermost 1px frame has alpha == 0."""
    w, h = raster.size
    for x in range(w):
        if raster.alpha(x, 0) != 0 or raster.alpha(x, h - 1) != 0:
            return False
    for y in range(h):
        if raster.alpha(0, y) != 0 or raster.alpha(w - 1, y) != 0:
            return False
    return True


def validate_alpha_and_size(
    data: bytes,
    target_width: int,
    target_height: int,
    expect_alpha_border: bool,
) -> bool:
    """Check generated output against exact size and optional transparent border.

    Interior pixels are never inspected.  Undecodable bytes count as invalid
    output and return ``False`` rather than raising.
    """

    try:
        raster = decode(data)
    except DecodeError as exc:
        logger.warning("Validation could not decode output: %s", exc)
        return False

    if raster.size != (target_width, target_height):
        logger.info(
            "Size mismatch: got %dx%d, expected %dx%d",
            raster.width,
            raster.height,
            target_width,
            target_height,
        )
        return False

    if not expect_alpha_border:
        return True

    if not has_transparent_border(raster):
        logger.info("Border contains non-transparent pixels")
        return False
    return True
