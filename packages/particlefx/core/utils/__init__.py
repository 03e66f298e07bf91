"""Shared utilities for particlefx."""

from particlefx.core.utils.json import read_json, write_json
from particlefx.core.utils.math import clamp, normalize_direction

__all__ = [
    "clamp",
    "normalize_direction",
    "read_json",
    "write_json",
]
