"""Free-text editing of one or more existing assets."""
from __future__ import annotations

import logging
from collections import deque
from typing import Sequence

from spriteforge.models import GenerationResult
from spriteforge.services.errors import ConfigurationError
from spriteforge.services.imagegen import ImagePart, ImageProvider
from spriteforge.utils.image import decode, sniff_mime

logger = logging.getLogger(__name__)

EDIT_SYSTEM_PROMPT = """You are an expert game asset editor. Your job is to modify and enhance game assets based on natural language commands.

Key capabilities:
- Background removal and transparency
- Color scheme changes
- Style transfer and enhancement
- Character pose modification
- Asset combination and composition
- Quality improvement
- Lighting and shadow adjustments

When processing multiple images:
- If combining images, blend them naturally
- If transferring poses, apply the pose from one image to characters in another
- If changing colors, maintain the overall style and shading
- Preserve pixel art style if the original is pixel art

Always output a single, high-quality game asset that fulfills the user's command.
Maintain transparency where appropriate for game assets.
Keep the output dimensions reasonable for game use (typically 64x64 to 512x512 pixels)."""

EDIT_USER_TEMPLATE = (
    "Please edit these game assets with the following instruction: {command}\n\n"
    "Process the provided images and create a single edited result that fulfills this command."
)

EDIT_HISTORY_LIMIT = 20


def build_edit_prompt(command: str) -> str:
    # Braces inside the command are kept verbatim.
    return EDIT_SYSTEM_PROMPT + "\n\n" + EDIT_USER_TEMPLATE.replace("{command}", command)


class AssetEditor:
    """Send several images and one command to the model; accept any output shape."""

    def __init__(self, provider: ImageProvider, *, temperature: float | None = None) -> None:
        self._provider = provider
        self._temperature = temperature
        self._history: deque[GenerationResult] = deque(maxlen=EDIT_HISTORY_LIMIT)

    @property
    def history(self) -> list[GenerationResult]:
        """Most recent edits, newest first."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    def edit(self, images: Sequence[bytes], command: str) -> GenerationResult:
        if not images:
            raise ConfigurationError("No input images provided")

        parts = [ImagePart(data=data, mime_type=sniff_mime(data)) for data in images]
        prompt = build_edit_prompt(command)

        logger.info("Editing %d image(s): %s", len(parts), command)
        response = self._provider.generate(parts, prompt, temperature=self._temperature)

        raster = decode(response.image_bytes)
        result = GenerationResult(
            raw_image_bytes=response.image_bytes,
            prompt_used=prompt,
            width=raster.width,
            height=raster.height,
            model=self._provider.model,
        )
        self._history.appendleft(result)
        return result
