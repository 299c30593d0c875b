from __future__ import annotations

from functools import lru_cache

from spriteforge.config import get_settings
from spriteforge.services.errors import ConfigurationError

from .base import ImageProvider
from .gemini_provider import GeminiImageProvider

_PROVIDERS: dict[str, type[ImageProvider]] = {
    "gemini": GeminiImageProvider,
}


@lru_cache()
def get_image_provider() -> ImageProvider:
    settings = get_settings()
    provider_key = settings.image_provider.lower()
    if provider_key not in _PROVIDERS:
        raise ConfigurationError(f"Unsupported image provider: {provider_key}")
    return _PROVIDERS[provider_key]()
