from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class VideoOptions(BaseModel):
    aspect_ratio: Literal["16:9", "9:16"] = "16:9"
    duration: int = Field(8, ge=4, le=8, description="Clip length in seconds.")
    model: Optional[str] = None

    @property
    def resolution(self) -> str:
        return "1280x720" if self.aspect_ratio == "16:9" else "720x1280"


class VideoJob(BaseModel):
    """Handle on a long-running video operation."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    done: bool = False
    error: Optional[str] = None
    # Provider specific operation object, passed back on refresh/download.
    handle: Any = Field(default=None, exclude=True)


class VideoResult(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    video_bytes: bytes
    prompt: str
    duration: int
    resolution: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
