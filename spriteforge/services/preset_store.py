"""In-memory preset store.

Presets are immutable; ``update`` replaces the stored preset with a copy
whose ``version`` is one higher.  Extra presets can be loaded from a JSON
file holding a list of preset objects.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Mapping

from pydantic import TypeAdapter, ValidationError

from spriteforge.config import get_settings
from spriteforge.models import Preset
from spriteforge.presets import BUILTIN_PRESETS
from spriteforge.services.errors import ConfigurationError, PresetNotFoundError

logger = logging.getLogger(__name__)

_PRESET_LIST = TypeAdapter(list[Preset])


class PresetStore:
    def __init__(self, presets: Iterable[Preset] = ()) -> None:
        self._presets: dict[str, Preset] = {}
        for preset in presets:
            self.add(preset)

    def list_presets(self, *, active_only: bool = False) -> list[Preset]:
        presets = list(self._presets.values())
        if active_only:
            presets = [p for p in presets if p.active]
        return presets

    def get(self, preset_id: str) -> Preset:
        try:
            return self._presets[preset_id]
        except KeyError:
            raise PresetNotFoundError(preset_id) from None

    def add(self, preset: Preset) -> Preset:
        if preset.id in self._presets:
            raise ConfigurationError(f"Preset '{preset.id}' already exists", details={"preset_id": preset.id})
        self._presets[preset.id] = preset
        return preset

    def update(self, preset_id: str, **changes: Any) -> Preset:
        current = self.get(preset_id)
        changes.pop("id", None)
        changes["version"] = current.version + 1
        try:
            updated = Preset.model_validate({**current.model_dump(), **changes})
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid preset update for '{preset_id}'", details={"errors": str(exc)}) from exc
        self._presets[preset_id] = updated
        logger.info("Preset %s updated to v%d", preset_id, updated.version)
        return updated

    def delete(self, preset_id: str) -> None:
        self.get(preset_id)
        del self._presets[preset_id]

    def load_file(self, path: str | Path) -> list[Preset]:
        """Add presets from a JSON file; returns the presets loaded."""

        path = Path(path)
        try:
            presets = _PRESET_LIST.validate_json(path.read_bytes())
        except OSError as exc:
            raise ConfigurationError(f"Cannot read presets file {path}: {exc}") from exc
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid presets file {path}", details={"errors": str(exc)}) from exc
        for preset in presets:
            self.add(preset)
        logger.info("Loaded %d preset(s) from %s", len(presets), path)
        return presets


def resolve_bindings(preset: Preset, overrides: Mapping[str, str] | None = None) -> dict[str, str]:
    """Preset defaults, then caller values, then ``W``/``H`` from the target size if still unbound."""

    bindings = preset.default_bindings()
    bindings.update(overrides or {})
    target = preset.constraints.target_size
    if target is not None:
        bindings.setdefault("W", str(target[0]))
        bindings.setdefault("H", str(target[1]))
    return bindings


@lru_cache()
def get_preset_store() -> PresetStore:
    settings = get_settings()
    store = PresetStore(BUILTIN_PRESETS)
    if settings.presets_file:
        store.load_file(settings.presets_file)
    return store
