"""High-level exports for the miperize workflows."""

from .errors import (
    ConfigError,
    ConstructionError,
    MarkupParseError,
    MiperizeError,
    ProbeFailure,
)
from .image_probe import ImageProbe, ImageProber, ProbeStatus, decode_dimensions
from .engine import Miperize, TransformResult, miperize
from .miperize_config import DEFAULTS, ProbeSettings, build_config

__all__ = [
    "DEFAULTS",
    "ConfigError",
    "ConstructionError",
    "ImageProbe",
    "ImageProber",
    "MarkupParseError",
    "Miperize",
    "MiperizeError",
    "ProbeFailure",
    "ProbeSettings",
    "ProbeStatus",
    "TransformResult",
    "build_config",
    "decode_dimensions",
    "miperize",
]
