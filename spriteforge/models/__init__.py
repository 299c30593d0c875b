from .generation import GenerationRequest, GenerationResult, PostOpSpec
from .preset import GenerationSettings, Preset, PresetConstraints
from .video import VideoJob, VideoOptions, VideoResult

__all__ = [
    "GenerationRequest",
    "GenerationResult",
    "PostOpSpec",
    "GenerationSettings",
    "Preset",
    "PresetConstraints",
    "VideoJob",
    "VideoOptions",
    "VideoResult",
]
