from __future__ import annotations

import pytest

from helpers import RED, make_png, sprite_png
from spriteforge.models import Preset, PresetConstraints


@pytest.fixture
def sketch_png() -> bytes:
    return make_png((16, 16), (255, 255, 255, 255))


@pytest.fixture
def valid_sprite() -> bytes:
    """8x8 sprite with a transparent 1px frame."""
    return sprite_png((8, 8), (2, 2, 5, 5), RED)


@pytest.fixture
def sprite_preset() -> Preset:
    return Preset(
        id="test-sprite",
        label="Test sprite",
        system="Pixel art, {COLORS} colors.",
        user_template="Draw {SUBJECT} at {W}x{H}.",
        variables={"SUBJECT": ["a slime"], "COLORS": ["16"], "W": ["8"], "H": ["8"]},
        constraints=PresetConstraints(transparent_bg=True, target_size=(8, 8)),
    )


@pytest.fixture
def free_preset() -> Preset:
    return Preset(
        id="test-free",
        label="No size constraint",
        type="background",
        system="Paint a background.",
        user_template="Subject: {SUBJECT}",
        variables={"SUBJECT": ["forest"]},
        constraints=PresetConstraints(transparent_bg=False),
    )


@pytest.fixture
def bindings() -> dict[str, str]:
    return {"SUBJECT": "a slime", "COLORS": "16", "W": "8", "H": "8"}
