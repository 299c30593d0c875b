"""Error taxonomy shared by the generation, edit and post-processing services.

Every fatal error raised to callers derives from :class:`SpriteForgeError`
and carries a stable ``code`` so HTTP and CLI layers can tell the kinds
apart without string matching.  Validation failures are not exceptions:
they are a boolean signal consumed by the generator's single retry.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class SpriteForgeError(Exception):
    """Base exception for SpriteForge errors."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": str(self), "details": self.details}


class DecodeError(SpriteForgeError):
    """Raised when bytes cannot be decoded as a raster image."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="DECODE_ERROR", details=details)


class TransportError(SpriteForgeError):
    """Raised when an external model call fails or returns no image."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="TRANSPORT_ERROR", details=details)


class ConfigurationError(SpriteForgeError):
    """Raised for bad caller configuration: missing bindings, empty inputs, bad params."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, *, code: str = "CONFIGURATION_ERROR"):
        super().__init__(message, code=code, details=details)


class PresetNotFoundError(ConfigurationError):
    def __init__(self, preset_id: str):
        super().__init__(
            f"Preset with id '{preset_id}' not found",
            details={"preset_id": preset_id},
            code="PRESET_NOT_FOUND",
        )
        self.preset_id = preset_id
