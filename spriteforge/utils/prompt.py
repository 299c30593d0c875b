"""Prompt template rendering.

Templates use ``{NAME}`` placeholders where ``NAME`` is one or more word
characters.  Rendering is deliberately permissive: a placeholder without a
binding renders as the empty string, values are never re-scanned, and any
``{`` that does not start a placeholder is copied through untouched.
"""
from __future__ import annotations

import re
from typing import Mapping, NamedTuple

from spriteforge.models import Preset
from spriteforge.services.errors import ConfigurationError

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

STRICT_ADDENDUM_TEMPLATE = (
    "STRICT: This is for a game engine sprite. Output MUST be exactly {W}x{H} pixels. "
    "Create only the sprite artwork with clean edges. "
    "No gradients, glows, drop shadows, or padding around the character."
)


class RenderedPrompt(NamedTuple):
    system: str
    user: str

    def combined(self) -> str:
        return f"{self.system}\n\n{self.user}"


def render(template: str, bindings: Mapping[str, str]) -> str:
    # re.sub never re-scans replacement text, so values cannot expand further.
    return _PLACEHOLDER.sub(lambda m: bindings.get(m.group(1)) or "", template)


def render_preset(preset: Preset, bindings: Mapping[str, str]) -> RenderedPrompt:
    return RenderedPrompt(
        system=render(preset.system, bindings),
        user=render(preset.user_template, bindings),
    )


def require_size_bindings(bindings: Mapping[str, str]) -> None:
    missing = [key for key in ("W", "H") if not bindings.get(key)]
    if missing:
        raise ConfigurationError(
            "Strict retry needs exact size bindings; missing: " + ", ".join(missing),
            details={"missing": missing},
        )


def render_strict_addendum(preset: Preset, bindings: Mapping[str, str]) -> str:  # noqa: ARG001
    """Render the amendment appended to the prompt on the validation retry."""

    require_size_bindings(bindings)
    return render(STRICT_ADDENDUM_TEMPLATE, bindings)
