"""Configuration models for the curve editor."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CurveEditorConfig(BaseModel):
    """Curve editor settings.

    Controls curve colors, gesture constraints and framing.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    palette_size: int = Field(default=24, ge=2, description="Number of curve colors")

    hue_saturation: float = Field(
        default=0.85, ge=0.0, le=1.0, description="Saturation of curve colors"
    )

    hue_brightness: float = Field(
        default=0.7, ge=0.0, le=1.0, description="Brightness of curve colors"
    )

    min_point_spacing: float = Field(
        default=1e-3,
        gt=0.0,
        lt=0.5,
        description="Closest an interior point may be dragged to the first/last point x",
    )

    min_tangent_x: float = Field(
        default=1e-3,
        gt=0.0,
        description="Smallest x component of a dragged tangent (keeps tangents forward-facing)",
    )

    fit_margin: float = Field(default=1.1, ge=1.0, description="Zoom margin when framing curves")

    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level for the editor",
    )
