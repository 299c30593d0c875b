"""Preset-driven asset generation with output validation and one strict retry."""
from __future__ import annotations

import logging

from spriteforge.models import GenerationRequest, GenerationResult
from spriteforge.services.imagegen import ImagePart, ImageProvider, ProviderImage
from spriteforge.utils.image import decode, sniff_mime, validate_alpha_and_size
from spriteforge.utils.prompt import render_preset, render_strict_addendum, require_size_bindings

logger = logging.getLogger(__name__)


class AssetGenerator:
    """Turn a sketch plus preset into a generated asset.

    The first response is validated against the preset's ``target_size``
    (and transparent border when ``transparent_bg`` is set).  A failing
    response triggers exactly one more call with the strict addendum
    appended; that second response is returned as-is.
    """

    def __init__(self, provider: ImageProvider) -> None:
        self._provider = provider

    def generate(self, request: GenerationRequest) -> GenerationResult:
        preset = request.preset
        bindings = request.bindings
        prompt = render_preset(preset, bindings).combined()
        target_size = preset.constraints.target_size
        if target_size is not None:
            require_size_bindings(bindings)

        source = ImagePart(data=request.input_image, mime_type=sniff_mime(request.input_image))
        temperature = preset.gen.temperature

        logger.info("Generating with preset %s (v%d)", preset.id, preset.version)
        response = self._provider.generate([source], prompt, temperature=temperature)

        if target_size is None:
            return self._build_result(response, prompt)

        width, height = target_size
        if validate_alpha_and_size(response.image_bytes, width, height, preset.constraints.transparent_bg):
            return self._build_result(response, prompt)

        logger.warning("Output for preset %s failed validation, retrying with strict prompt", preset.id)
        retry_prompt = prompt + "\n\n" + render_strict_addendum(preset, bindings)
        retry_response = self._provider.generate([source], retry_prompt, temperature=temperature)
        # The retry is not validated again.
        return self._build_result(retry_response, retry_prompt)

    def _build_result(self, response: ProviderImage, prompt_used: str) -> GenerationResult:
        raster = decode(response.image_bytes)
        return GenerationResult(
            raw_image_bytes=response.image_bytes,
            prompt_used=prompt_used,
            width=raster.width,
            height=raster.height,
            model=self._provider.model,
        )
