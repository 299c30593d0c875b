"""HTTP endpoints for presets, generation, editing and post-processing."""
from __future__ import annotations

import base64
import binascii
import logging
from datetime import datetime
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from spriteforge.config import get_settings
from spriteforge.models import GenerationRequest, GenerationResult, PostOpSpec, Preset
from spriteforge.services.editor import AssetEditor
from spriteforge.services.generator import AssetGenerator
from spriteforge.services.imagegen import get_image_provider
from spriteforge.services.post_ops import list_post_ops, run_pipeline
from spriteforge.services.preset_store import PresetStore, get_preset_store, resolve_bindings

router = APIRouter()
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def get_generator() -> AssetGenerator:
    return AssetGenerator(get_image_provider())


@lru_cache()
def get_editor() -> AssetEditor:
    # Cached so the edit history survives between requests.
    return AssetEditor(get_image_provider())


def decode_base64_image(value: str, field: str = "image_base64") -> bytes:
    """Accept raw base64 or a ``data:image/...;base64,`` URL."""

    if value.startswith("data:") and "," in value:
        value = value.split(",", 1)[1]
    try:
        data = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(status_code=422, detail=f"{field} is not valid base64") from exc
    if len(data) > get_settings().max_upload_bytes:
        raise HTTPException(status_code=413, detail=f"{field} exceeds upload size limit")
    return data


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class GenerateBody(BaseModel):
    preset_id: str
    image_base64: str
    bindings: dict[str, str] = {}


class EditBody(BaseModel):
    images_base64: list[str] = Field(..., min_length=1)
    command: str = Field(..., min_length=1)


class PostProcessBody(BaseModel):
    image_base64: str
    pipeline: list[PostOpSpec] = []


class ResultResponse(BaseModel):
    id: str
    image_base64: str
    prompt_used: str
    width: int
    height: int
    model: str
    created_at: datetime

    @classmethod
    def from_result(cls, result: GenerationResult) -> "ResultResponse":
        return cls(
            id=result.id,
            image_base64=base64.b64encode(result.raw_image_bytes).decode("ascii"),
            prompt_used=result.prompt_used,
            width=result.width,
            height=result.height,
            model=result.model,
            created_at=result.created_at,
        )


class PostProcessResponse(BaseModel):
    image_base64: str


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/presets", response_model=list[Preset])
def list_presets(store: PresetStore = Depends(get_preset_store)):
    return store.list_presets(active_only=True)


@router.get("/presets/{preset_id}", response_model=Preset)
def get_preset(preset_id: str, store: PresetStore = Depends(get_preset_store)):
    return store.get(preset_id)


@router.get("/post-ops")
def post_ops():
    return list_post_ops()


@router.post("/generate", response_model=ResultResponse)
def generate(
    body: GenerateBody,
    store: PresetStore = Depends(get_preset_store),
    generator: AssetGenerator = Depends(get_generator),
):
    preset = store.get(body.preset_id)
    request = GenerationRequest(
        input_image=decode_base64_image(body.image_base64),
        preset=preset,
        bindings=resolve_bindings(preset, body.bindings),
    )
    result = generator.generate(request)
    logger.info("Generated %s (%dx%d) with preset %s", result.id, result.width, result.height, preset.id)
    return ResultResponse.from_result(result)


@router.post("/edit", response_model=ResultResponse)
def edit(body: EditBody, editor: AssetEditor = Depends(get_editor)):
    images = [decode_base64_image(v, "images_base64") for v in body.images_base64]
    result = editor.edit(images, body.command)
    return ResultResponse.from_result(result)


@router.get("/edit/history", response_model=list[ResultResponse])
def edit_history(editor: AssetEditor = Depends(get_editor)):
    return [ResultResponse.from_result(r) for r in editor.history]


@router.post("/postprocess", response_model=PostProcessResponse)
def postprocess(body: PostProcessBody):
    output = run_pipeline(decode_base64_image(body.image_base64), body.pipeline)
    return PostProcessResponse(image_base64=base64.b64encode(output).decode("ascii"))
