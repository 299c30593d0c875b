from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from spriteforge.models import VideoJob, VideoOptions
from spriteforge.services.imagegen import ImagePart


class VideoProvider(ABC):
    """Abstract interface for a long-running image-to-video model."""

    name: str = "abstract"
    model: str = "unknown"

    @abstractmethod
    def start(
        self,
        image: ImagePart,
        prompt: str,
        options: VideoOptions,
        *,
        last_frame: Optional[ImagePart] = None,
    ) -> VideoJob:
        """Submit a generation request and return the pending job."""

    @abstractmethod
    def refresh(self, job: VideoJob) -> VideoJob:
        """Return the latest state of ``job``."""

    @abstractmethod
    def download(self, job: VideoJob) -> bytes:
        """Fetch the finished video bytes of a completed job."""
