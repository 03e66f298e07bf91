"""Animated property curves: Hermite splines, property values and codec."""

from particlefx.core.curves.codec import (
    constant_points,
    decode,
    decode_document,
    decode_flat,
    encode,
    pack_points,
    unpack_points,
)
from particlefx.core.curves.exceptions import CurveError, InvalidEdit, MalformedCurveData
from particlefx.core.curves.models import ControlPoint, CurveDocument, SplinePoint
from particlefx.core.curves.spline import HermiteSpline
from particlefx.core.curves.value_spread import ValueSpread

__all__ = [
    "ControlPoint",
    "CurveDocument",
    "CurveError",
    "HermiteSpline",
    "InvalidEdit",
    "MalformedCurveData",
    "SplinePoint",
    "ValueSpread",
    "constant_points",
    "decode",
    "decode_document",
    "decode_flat",
    "encode",
    "pack_points",
    "unpack_points",
]
