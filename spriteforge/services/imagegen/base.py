from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from pydantic import BaseModel


class ImagePart(BaseModel):
    """One input image sent alongside the prompt."""

    data: bytes
    mime_type: str = "image/png"


class ProviderImage(BaseModel):
    image_bytes: bytes
    note: Optional[str] = None  # accompanying text part, if the model sent one


class ImageProvider(ABC):
    """Abstract interface for an image-generation model."""

    name: str = "abstract"
    model: str = "unknown"

    @abstractmethod
    def generate(
        self,
        images: Sequence[ImagePart],
        prompt: str,
        *,
        temperature: float | None = None,
    ) -> ProviderImage:
        """Submit images plus prompt and return the single generated image.

        Raises
        ------
        TransportError
            If the call fails or the response carries no image part.
        """
