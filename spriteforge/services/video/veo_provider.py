from __future__ import annotations

import logging
from typing import Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from spriteforge.config import get_settings
from spriteforge.models import VideoJob, VideoOptions
from spriteforge.services.errors import ConfigurationError, TransportError
from spriteforge.services.imagegen import ImagePart

from .base import VideoProvider

logger = logging.getLogger(__name__)


class VeoVideoProvider(VideoProvider):
    name = "veo"

    def __init__(self, *, api_key: str | None = None, model: str | None = None, client: genai.Client | None = None) -> None:
        settings = get_settings()
        self.model = model or settings.video_model
        if client is not None:
            self._client = client
            return
        api_key = api_key or settings.gemini_api_key
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set")
        self._client = genai.Client(api_key=api_key)

    def start(
        self,
        image: ImagePart,
        prompt: str,
        options: VideoOptions,
        *,
        last_frame: Optional[ImagePart] = None,
    ) -> VideoJob:
        config = types.GenerateVideosConfig(
            number_of_videos=1,
            aspect_ratio=options.aspect_ratio,
            duration_seconds=options.duration,
            person_generation="allow_adult",
            last_frame=types.Image(image_bytes=last_frame.data, mime_type=last_frame.mime_type) if last_frame else None,
        )
        try:
            operation = self._client.models.generate_videos(
                model=options.model or self.model,
                prompt=prompt,
                image=types.Image(image_bytes=image.data, mime_type=image.mime_type),
                config=config,
            )
        except genai_errors.APIError as exc:
            raise TransportError(f"Video generation request failed: {exc}") from exc
        logger.info("Started video operation %s", operation.name)
        return _to_job(operation)

    def refresh(self, job: VideoJob) -> VideoJob:
        try:
            operation = self._client.operations.get(job.handle)
        except genai_errors.APIError as exc:
            raise TransportError(f"Video status check failed: {exc}") from exc
        return _to_job(operation)

    def download(self, job: VideoJob) -> bytes:
        response = job.handle.response if job.handle is not None else None
        videos = response.generated_videos if response else None
        if not videos:
            raise TransportError("No video was generated", details={"operation": job.name})
        video = videos[0].video
        if video is None:
            raise TransportError("No video file was generated", details={"operation": job.name})
        try:
            return self._client.files.download(file=video)
        except genai_errors.APIError as exc:
            raise TransportError(f"Failed to download video: {exc}") from exc


def _to_job(operation: types.GenerateVideosOperation) -> VideoJob:
    error = None
    if operation.error:
        error = str(operation.error.get("message", operation.error))
    return VideoJob(name=operation.name or "", done=bool(operation.done), error=error, handle=operation)
