"""Tests for spriteforge/services/preset_store.py"""

import json

import pytest

from spriteforge.models import Preset
from spriteforge.presets import BUILTIN_PRESETS
from spriteforge.services.errors import ConfigurationError, PresetNotFoundError
from spriteforge.services.preset_store import PresetStore, resolve_bindings


@pytest.fixture
def store(sprite_preset, free_preset):
    return PresetStore([sprite_preset, free_preset])


class TestPresetStore:
    def test_get_and_list(self, store, sprite_preset):
        assert store.get("test-sprite") is sprite_preset
        assert [p.id for p in store.list_presets()] == ["test-sprite", "test-free"]

    def test_missing_preset(self, store):
        with pytest.raises(PresetNotFoundError) as info:
            store.get("nope")
        assert info.value.code == "PRESET_NOT_FOUND"
        assert isinstance(info.value, ConfigurationError)

    def test_duplicate_add_rejected(self, store, sprite_preset):
        with pytest.raises(ConfigurationError):
            store.add(sprite_preset)

    def test_update_bumps_version_and_keeps_original(self, store, sprite_preset):
        updated = store.update("test-sprite", label="Renamed", id="ignored")
        assert updated.version == sprite_preset.version + 1
        assert updated.label == "Renamed"
        assert updated.id == "test-sprite"
        assert sprite_preset.label == "Test sprite"
        assert store.update("test-sprite", notes="n").version == sprite_preset.version + 2

    def test_invalid_update(self, store):
        with pytest.raises(ConfigurationError):
            store.update("test-sprite", type="hologram")

    def test_delete(self, store):
        store.delete("test-free")
        with pytest.raises(PresetNotFoundError):
            store.get("test-free")
        with pytest.raises(PresetNotFoundError):
            store.delete("test-free")

    def test_active_only(self, store):
        store.update("test-free", active=False)
        assert [p.id for p in store.list_presets(active_only=True)] == ["test-sprite"]

    def test_load_file(self, tmp_path):
        path = tmp_path / "presets.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "id": "icon",
                        "label": "Icon",
                        "type": "prop",
                        "system": "Icon style",
                        "user_template": "{SUBJECT}",
                        "variables": {"SUBJECT": ["gem"]},
                        "constraints": {"transparent_bg": True, "target_size": [16, 16]},
                    }
                ]
            )
        )
        store = PresetStore()
        loaded = store.load_file(path)
        assert [p.id for p in loaded] == ["icon"]
        assert store.get("icon").constraints.target_size == (16, 16)

    def test_load_bad_file(self, tmp_path):
        path = tmp_path / "presets.json"
        path.write_text('[{"id": "x"}]')
        with pytest.raises(ConfigurationError):
            PresetStore().load_file(path)
        with pytest.raises(ConfigurationError):
            PresetStore().load_file(tmp_path / "missing.json")


class TestResolveBindings:
    def test_defaults_overrides_and_size(self, sprite_preset):
        preset = sprite_preset.model_copy(update={"variables": {"SUBJECT": ["a slime", "a bat"]}})
        assert resolve_bindings(preset, {"SUBJECT": "a bat"}) == {"SUBJECT": "a bat", "W": "8", "H": "8"}

    def test_explicit_size_wins(self, sprite_preset):
        assert resolve_bindings(sprite_preset, {"W": "9"})["W"] == "9"

    def test_no_target_size(self, free_preset):
        assert resolve_bindings(free_preset) == {"SUBJECT": "forest"}


class TestBuiltinPresets:
    def test_unique_ids(self):
        ids = [p.id for p in BUILTIN_PRESETS]
        assert len(ids) == len(set(ids))

    @pytest.mark.parametrize("preset", [p for p in BUILTIN_PRESETS if p.constraints.target_size], ids=lambda p: p.id)
    def test_sized_presets_can_render_strict_retry(self, preset: Preset):
        bindings = resolve_bindings(preset)
        assert bindings["W"] == str(preset.constraints.target_size[0])
        assert bindings["H"] == str(preset.constraints.target_size[1])
