from __future__ import annotations

import logging
from typing import Sequence

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from spriteforge.config import get_settings
from spriteforge.services.errors import ConfigurationError, TransportError

from .base import ImagePart, ImageProvider, ProviderImage

logger = logging.getLogger(__name__)


class GeminiImageProvider(ImageProvider):
    name = "gemini"

    def __init__(self, *, api_key: str | None = None, model: str | None = None, client: genai.Client | None = None) -> None:
        settings = get_settings()
        self.model = model or settings.image_model
        self._default_temperature = settings.image_temperature
        if client is not None:
            self._client = client
            return
        api_key = api_key or settings.gemini_api_key
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set")
        self._client = genai.Client(api_key=api_key)

    def generate(
        self,
        images: Sequence[ImagePart],
        prompt: str,
        *,
        temperature: float | None = None,
    ) -> ProviderImage:
        parts = [types.Part.from_bytes(data=img.data, mime_type=img.mime_type) for img in images]
        parts.append(types.Part.from_text(text=prompt))
        config = types.GenerateContentConfig(
            response_modalities=["IMAGE", "TEXT"],
            temperature=temperature if temperature is not None else self._default_temperature,
        )

        logger.debug("Calling %s with %d image(s), prompt length %d", self.model, len(images), len(prompt))
        try:
            response = self._client.models.generate_content(model=self.model, contents=parts, config=config)
        except genai_errors.APIError as exc:
            raise TransportError(f"Image model call failed: {exc}", details={"model": self.model}) from exc

        return _extract_image(response, self.model)


def _extract_image(response: types.GenerateContentResponse, model: str) -> ProviderImage:
    image_bytes: bytes | None = None
    note: str | None = None
    candidates = response.candidates or []
    content = candidates[0].content if candidates else None
    for part in (content.parts if content and content.parts else []):
        inline = getattr(part, "inline_data", None)
        if inline and inline.data:
            image_bytes = inline.data
        elif part.text:
            note = part.text

    if image_bytes is None:
        raise TransportError(
            "API did not return an image. Response: " + (note or "No response"),
            details={"model": model, "note": note},
        )
    return ProviderImage(image_bytes=image_bytes, note=note)
