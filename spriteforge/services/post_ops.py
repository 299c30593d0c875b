"""Deterministic pixel post-processing operations and the pipeline runner.

Operations are looked up by id in :data:`REGISTRY`.  Each one takes an RGBA
Pillow image plus a params mapping and returns a new RGBA image.  The
pipeline decodes the source bytes once, threads the image through every
step in order, and encodes a single PNG at the end so intermediate alpha
stays exact.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from PIL import Image

from spriteforge.models import GenerationResult, PostOpSpec
from spriteforge.services.errors import ConfigurationError
from spriteforge.utils.image import decode, encode_png

logger = logging.getLogger(__name__)

ApplyFn = Callable[[Image.Image, Mapping[str, Any]], Image.Image]


@dataclass(frozen=True)
class PostOp:
    id: str
    label: str
    apply: ApplyFn


# ---------------------------------------------------------------------------
# Param helpers
# ---------------------------------------------------------------------------


def _int_param(params: Mapping[str, Any], name: str, default: int, *, minimum: int) -> int:
    raw = params.get(name, default)
    value = raw
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    # bool is an int subclass; 2.5 is rejected rather than floored.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"Parameter '{name}' must be an integer", details={name: raw})
    if value < minimum:
        raise ConfigurationError(f"Parameter '{name}' must be >= {minimum}", details={name: raw})
    return value


def _float_param(params: Mapping[str, Any], name: str, default: float) -> float:
    raw = params.get(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Parameter '{name}' must be a number", details={name: raw}) from exc


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def trim(image: Image.Image, params: Mapping[str, Any] | None = None) -> Image.Image:  # noqa: ARG001
    """Crop to the tightest box holding every pixel with alpha > 0.

    A fully transparent image becomes a single transparent pixel.
    """

    bbox = image.convert("RGBA").getchannel("A").getbbox()
    if bbox is None:
        return Image.new("RGBA", (1, 1), (0, 0, 0, 0))
    return image.crop(bbox)


def resize(image: Image.Image, params: Mapping[str, Any] | None = None) -> Image.Image:
    """Integer upscale with nearest-neighbour sampling; keeps hard pixel edges."""

    scale = _int_param(params or {}, "scale", 2, minimum=1)
    width, height = image.size
    size = (width * scale, height * scale)
    limit = Image.MAX_IMAGE_PIXELS
    if limit is not None and size[0] * size[1] > limit:
        raise ConfigurationError(
            f"Resize to {size[0]}x{size[1]} exceeds the {limit} pixel limit",
            details={"scale": scale, "width": size[0], "height": size[1], "limit": limit},
        )
    return image.resize(size, Image.Resampling.NEAREST)


def chroma(image: Image.Image, params: Mapping[str, Any] | None = None) -> Image.Image:
    """Zero the alpha of every pixel within ``tolerance`` of the key colour.

    Distance is Euclidean in RGB space, ``sqrt(dr² + dg² + db²)``, and a pixel
    exactly at the tolerance counts as a match.
    """

    params = params or {}
    r = _float_param(params, "r", 255)
    g = _float_param(params, "g", 255)
    b = _float_param(params, "b", 255)
    tolerance = _float_param(params, "tolerance", 18)

    out = image.copy()
    pixels = out.load()
    width, height = out.size
    for y in range(height):
        for x in range(width):
            pr, pg, pb, pa = pixels[x, y]
            if pa and math.hypot(pr - r, pg - g, pb - b) <= tolerance:
                pixels[x, y] = (pr, pg, pb, 0)
    return out


REGISTRY: dict[str, PostOp] = {
    "trim": PostOp(id="trim", label="Trim transparent", apply=trim),
    "resize": PostOp(id="resize", label="Resize (nearest)", apply=resize),
    "chroma": PostOp(id="chroma", label="Chroma key", apply=chroma),
}


def register_post_op(op: PostOp, *, replace: bool = False) -> None:
    if op.id in REGISTRY and not replace:
        raise ConfigurationError(f"Post-op '{op.id}' is already registered", details={"id": op.id})
    REGISTRY[op.id] = op


def list_post_ops() -> list[dict[str, str]]:
    return [{"id": op.id, "label": op.label} for op in REGISTRY.values()]


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def apply_ops(image: Image.Image, ops: Iterable[PostOpSpec]) -> Image.Image:
    for step in ops:
        op = REGISTRY.get(step.id)
        if op is None:
            logger.warning("Skipping unknown post-op '%s'", step.id)
            continue
        image = op.apply(image, step.params)
        logger.debug("Applied %s -> %dx%d", step.id, image.width, image.height)
    return image


def run_pipeline(source: bytes, ops: Iterable[PostOpSpec]) -> bytes:
    """Decode ``source`` once, apply ``ops`` in order and return PNG bytes."""

    raster = decode(source)
    return encode_png(apply_ops(raster.image, ops))


def apply_post_ops(result: GenerationResult, ops: list[PostOpSpec]) -> GenerationResult:
    """Return a copy of ``result`` carrying the processed artifact and its pipeline."""

    processed = run_pipeline(result.raw_image_bytes, ops)
    return result.model_copy(update={"processed_image_bytes": processed, "pipeline": list(ops)})
