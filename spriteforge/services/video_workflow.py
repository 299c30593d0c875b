"""Image-to-video generation: submit, poll until done, download."""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Sequence

from spriteforge.models import VideoJob, VideoOptions, VideoResult
from spriteforge.services.errors import ConfigurationError, TransportError
from spriteforge.services.imagegen import ImagePart
from spriteforge.services.video import VideoProvider
from spriteforge.utils.image import sniff_mime

logger = logging.getLogger(__name__)

TRANSITION_HINT = " (transition from the provided image to create a video sequence)"


class VideoWorkflow:
    def __init__(
        self,
        provider: VideoProvider,
        *,
        poll_interval: float = 10.0,
        max_polls: int = 60,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._provider = provider
        self._poll_interval = poll_interval
        self._max_polls = max_polls
        self._sleep = sleep

    def from_image(self, image: bytes, prompt: str, options: VideoOptions | None = None) -> VideoResult:
        options = options or VideoOptions()
        job = self._provider.start(_part(image), prompt, options)
        return self._finish(job, prompt, options)

    def from_frames(
        self,
        first_frame: bytes,
        last_frame: bytes,
        prompt: str,
        options: VideoOptions | None = None,
    ) -> VideoResult:
        options = options or VideoOptions()
        job = self._provider.start(
            _part(first_frame),
            prompt + TRANSITION_HINT,
            options,
            last_frame=_part(last_frame),
        )
        return self._finish(job, prompt, options)

    def sequence(
        self,
        frames: Sequence[bytes],
        prompts: Sequence[str],
        options: VideoOptions | None = None,
    ) -> list[VideoResult]:
        """One clip per frame; frames without a prompt of their own reuse the first."""

        if not frames:
            raise ConfigurationError("No frames provided")
        if not prompts:
            raise ConfigurationError("At least one prompt is required")
        results = []
        for index, frame in enumerate(frames):
            prompt = prompts[index] if index < len(prompts) else prompts[0]
            results.append(self.from_image(frame, prompt, options))
        return results

    def _wait(self, job: VideoJob) -> VideoJob:
        polls = 0
        while not job.done:
            if polls >= self._max_polls:
                raise TransportError(
                    "Video generation did not finish in time",
                    details={"operation": job.name, "polls": polls},
                )
            logger.info("Waiting for video operation %s", job.name)
            self._sleep(self._poll_interval)
            job = self._provider.refresh(job)
            polls += 1
        return job

    def _finish(self, job: VideoJob, prompt: str, options: VideoOptions) -> VideoResult:
        job = self._wait(job)
        if job.error:
            raise TransportError(f"Video generation failed: {job.error}", details={"operation": job.name})
        video = self._provider.download(job)
        logger.info("Video operation %s completed (%d bytes)", job.name, len(video))
        return VideoResult(
            video_bytes=video,
            prompt=prompt,
            duration=options.duration,
            resolution=options.resolution,
        )


def _part(data: bytes, mime_type: Optional[str] = None) -> ImagePart:
    return ImagePart(data=data, mime_type=mime_type or sniff_mime(data))
