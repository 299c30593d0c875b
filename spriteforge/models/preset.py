from __future__ import annotations

from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class PresetConstraints(BaseModel):
    model_config = ConfigDict(frozen=True)

    transparent_bg: bool = True
    target_size: Optional[Tuple[int, int]] = None  # (width, height)
    palette_colors: Optional[int] = Field(default=None, ge=2)
    avoid: list[str] = []
    camera: Optional[str] = None
    orientation: Optional[str] = None
    outline: Literal["none", "1px", "2px"] | None = None
    shading: Literal["flat", "cel"] | None = None
    dithering: Literal["none", "bayer", "floyd"] | None = None


class GenerationSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = None
    top_k: Optional[int] = None


class Preset(BaseModel):
    """Named prompt templates plus the output constraints they promise."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    label: str
    type: Literal["sprite", "prop", "tile", "background"] = "sprite"
    system: str
    user_template: str
    variables: dict[str, list[str]] = {}
    constraints: PresetConstraints = PresetConstraints()
    gen: GenerationSettings = GenerationSettings()
    notes: Optional[str] = None
    version: int = Field(1, ge=1)
    active: bool = True

    def default_bindings(self) -> dict[str, str]:
        """First allowed value of every variable."""
        return {name: values[0] for name, values in self.variables.items() if values}
