"""Configuration management for particlefx."""

from particlefx.core.config.loader import load_config, load_editor_config
from particlefx.core.config.models import CurveEditorConfig

__all__ = [
    "CurveEditorConfig",
    "load_config",
    "load_editor_config",
]
