from __future__ import annotations

from functools import lru_cache

from spriteforge.config import get_settings
from spriteforge.services.errors import ConfigurationError

from .base import VideoProvider
from .veo_provider import VeoVideoProvider

_PROVIDERS: dict[str, type[VideoProvider]] = {
    "veo": VeoVideoProvider,
}


@lru_cache()
def get_video_provider() -> VideoProvider:
    settings = get_settings()
    provider_key = settings.video_provider.lower()
    if provider_key not in _PROVIDERS:
        raise ConfigurationError(f"Unsupported video provider: {provider_key}")
    return _PROVIDERS[provider_key]()
