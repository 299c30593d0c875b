"""Built-in generation presets."""
from __future__ import annotations

from spriteforge.models import Preset, PresetConstraints

_PIXEL_SYSTEM = (
    "You are a pixel artist producing game-ready assets. Redraw the provided sketch as {STYLE} pixel art "
    "using at most {COLORS} colors, hard pixel edges and a {OUTLINE} outline. "
    "Keep the composition of the sketch."
)

BUILTIN_PRESETS: list[Preset] = [
    Preset(
        id="sprite-64",
        label="Character sprite 64x64",
        type="sprite",
        system=_PIXEL_SYSTEM,
        user_template=(
            "Turn this sketch into a {W}x{H} {VIEW} sprite of {SUBJECT} on a fully transparent background."
        ),
        variables={
            "SUBJECT": ["a knight with a sword", "a green slime", "a hooded mage"],
            "VIEW": ["side view", "top-down", "three-quarter"],
            "STYLE": ["16-bit", "8-bit"],
            "COLORS": ["16", "32", "8"],
            "OUTLINE": ["1px dark", "no"],
            "W": ["64"],
            "H": ["64"],
        },
        constraints=PresetConstraints(
            transparent_bg=True,
            target_size=(64, 64),
            palette_colors=16,
            outline="1px",
            shading="cel",
        ),
    ),
    Preset(
        id="prop-32",
        label="Prop 32x32",
        type="prop",
        system=_PIXEL_SYSTEM,
        user_template="Turn this sketch into a {W}x{H} pixel art {SUBJECT} prop on a fully transparent background.",
        variables={
            "SUBJECT": ["treasure chest", "potion bottle", "wooden crate"],
            "STYLE": ["16-bit", "8-bit"],
            "COLORS": ["16", "8"],
            "OUTLINE": ["1px dark", "no"],
            "W": ["32"],
            "H": ["32"],
        },
        constraints=PresetConstraints(transparent_bg=True, target_size=(32, 32), palette_colors=16),
    ),
    Preset(
        id="tile-seamless",
        label="Seamless tile 32x32",
        type="tile",
        system=(
            "Create a seamless tiled pattern of the described texture. Ensure perfect tiling on all edges "
            "with no visible seams. Use {STYLE} pixel art."
        ),
        user_template="A {W}x{H} tile of {SUBJECT}, following the layout of the sketch.",
        variables={
            "SUBJECT": ["medieval stone floor", "worn wooden planks", "grass"],
            "STYLE": ["16-bit", "8-bit"],
            "W": ["32"],
            "H": ["32"],
        },
        constraints=PresetConstraints(transparent_bg=False, target_size=(32, 32)),
    ),
    Preset(
        id="vector-flat",
        label="Flat vector art",
        type="prop",
        system=(
            "Create clean vector-style 2D game asset with flat colors, minimal gradients, geometric shapes. "
            "Style similar to modern mobile games. Ensure crisp edges and bold colors."
        ),
        user_template="Draw {SUBJECT} based on the sketch.",
        variables={"SUBJECT": ["cartoon tree sprite", "coin", "health heart"]},
        constraints=PresetConstraints(transparent_bg=True),
    ),
    Preset(
        id="hand-drawn",
        label="Hand drawn style",
        type="prop",
        system=(
            "Generate hand-drawn illustrated game asset with organic lines, sketch-like quality, "
            "watercolor or pencil texture. Make it feel artistic and unique."
        ),
        user_template="Draw {SUBJECT} based on the sketch.",
        variables={"SUBJECT": ["fantasy potion bottle", "old map", "magic scroll"]},
        constraints=PresetConstraints(transparent_bg=False),
    ),
    Preset(
        id="background-skybox",
        label="Skybox (equirectangular)",
        type="background",
        system=(
            "Create seamless equirectangular projection for game skybox. Ensure no distortion at poles "
            "and perfect horizontal wrapping."
        ),
        user_template="A skybox of {SUBJECT}, using the sketch as a rough horizon guide.",
        variables={"SUBJECT": ["starfield with nebula", "sunset over alien desert landscape"]},
        constraints=PresetConstraints(transparent_bg=False),
    ),
]
