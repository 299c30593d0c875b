from __future__ import annotations

from .base import ImagePart, ImageProvider, ProviderImage
from .registry import get_image_provider

__all__ = [
    "ImagePart",
    "ImageProvider",
    "ProviderImage",
    "get_image_provider",
]
