from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .preset import Preset


class PostOpSpec(BaseModel):
    """One step of a post-processing pipeline."""

    model_config = ConfigDict(frozen=True)

    id: str
    params: dict[str, Any] = {}


class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    input_image: bytes
    preset: Preset
    bindings: dict[str, str] = {}


class GenerationResult(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    raw_image_bytes: bytes
    prompt_used: str
    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)
    model: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    processed_image_bytes: Optional[bytes] = None
    pipeline: Optional[list[PostOpSpec]] = None
