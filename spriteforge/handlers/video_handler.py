"""HTTP endpoint for image-to-video generation."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from spriteforge.config import get_settings
from spriteforge.handlers.generation_handler import decode_base64_image
from spriteforge.models import VideoOptions
from spriteforge.services.video import get_video_provider
from spriteforge.services.video_workflow import VideoWorkflow

router = APIRouter()
logger = logging.getLogger(__name__)


def get_video_workflow() -> VideoWorkflow:
    settings = get_settings()
    return VideoWorkflow(
        get_video_provider(),
        poll_interval=settings.video_poll_interval,
        max_polls=settings.video_max_polls,
    )


class VideoBody(BaseModel):
    image_base64: str
    last_frame_base64: Optional[str] = None
    prompt: str
    options: VideoOptions = VideoOptions()


@router.post("/video")
def generate_video(body: VideoBody, workflow: VideoWorkflow = Depends(get_video_workflow)):
    first = decode_base64_image(body.image_base64)
    if body.last_frame_base64:
        last = decode_base64_image(body.last_frame_base64, "last_frame_base64")
        result = workflow.from_frames(first, last, body.prompt, body.options)
    else:
        result = workflow.from_image(first, body.prompt, body.options)
    return Response(
        content=result.video_bytes,
        media_type="video/mp4",
        headers={"X-Video-Id": result.id, "X-Video-Resolution": result.resolution},
    )
