"""Conversion between ValueSpread and the persisted spline point list.

Persisted layout: an ordered list of (x, y, t_x, t_y) records. The binary
form written by pack_points() stores every field as a 32-bit float.

The constant form is asymmetric on purpose:
- encode() writes a non-animated value as ONE flat point {0, value, 1, 0}
- decode() reads a single point into a TWO point spline, appending a copy of
  the point at x=1 so the curve spans [0, 1]

This module is the only place that expands or collapses that form.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import numpy as np
from pydantic import ValidationError

from particlefx.core.curves.exceptions import MalformedCurveData
from particlefx.core.curves.models import CurveDocument, SplinePoint
from particlefx.core.curves.spline import HermiteSpline
from particlefx.core.curves.value_spread import ValueSpread

logger = logging.getLogger(__name__)

FIELDS_PER_POINT = 4
_FLOAT32_LE = np.dtype("<f4")


def constant_points(value: float) -> list[SplinePoint]:
    """Persisted form of a constant value: one point with a flat tangent.

    Example:
        >>> constant_points(5.0)
        [SplinePoint(x=0.0, y=5.0, t_x=1.0, t_y=0.0)]
    """
    return [SplinePoint(x=0.0, y=value, t_x=1.0, t_y=0.0)]


def decode(raw_points: Sequence[SplinePoint], spread: float = 0.0) -> ValueSpread:
    """Build a ValueSpread from persisted spline points.

    Args:
        raw_points: Ordered persisted points, at least one.
        spread: Spread stored next to the points.

    Returns:
        ValueSpread that is animated when more than one point was given.
        ``value`` is always the first point's y.

    Raises:
        MalformedCurveData: If the list is empty or a point holds NaN/inf.
    """
    if not raw_points:
        raise MalformedCurveData("Spline point list is empty")

    animated = len(raw_points) > 1
    data: list[float] = []
    for sp in raw_points:
        data.extend(sp.as_tuple())
    if not animated:
        first = raw_points[0]
        data.extend((1.0, first.y, first.t_x, first.t_y))

    return ValueSpread(
        value=raw_points[0].y,
        spread=spread,
        animated=animated,
        curve=_spline_from_flat(data),
    )


def decode_flat(values: Sequence[float], spread: float = 0.0) -> ValueSpread:
    """Decode a flat (x, y, t_x, t_y, ...) float buffer.

    Raises:
        MalformedCurveData: If the buffer is empty, its length is not a
            multiple of four, or it holds NaN/inf.
    """
    if not values or len(values) % FIELDS_PER_POINT != 0:
        raise MalformedCurveData(
            f"Expected a positive multiple of {FIELDS_PER_POINT} floats, got {len(values)}"
        )
    points = [
        _make_point(values[i], values[i + 1], values[i + 2], values[i + 3])
        for i in range(0, len(values), FIELDS_PER_POINT)
    ]
    return decode(points, spread)


def encode(value_spread: ValueSpread) -> list[SplinePoint]:
    """Persisted spline points for a ValueSpread.

    Animated values emit one point per knot with its tangent direction.
    Non-animated values emit constant_points(value) and drop the stored
    curve shape.
    """
    if value_spread.animated:
        return [SplinePoint.from_control_point(p) for p in value_spread.curve.points]
    return constant_points(value_spread.value)


def pack_points(points: Iterable[SplinePoint]) -> bytes:
    """Serialize points as little-endian float32 quadruples."""
    flat = [v for sp in points for v in sp.as_tuple()]
    return np.asarray(flat, dtype=_FLOAT32_LE).tobytes()


def unpack_points(data: bytes) -> list[SplinePoint]:
    """Parse little-endian float32 quadruples written by pack_points().

    Raises:
        MalformedCurveData: If the payload is empty or not a whole number of
            points, or holds NaN/inf.
    """
    point_size = FIELDS_PER_POINT * _FLOAT32_LE.itemsize
    if not data or len(data) % point_size != 0:
        raise MalformedCurveData(
            f"Binary spline payload must be a positive multiple of {point_size} bytes, "
            f"got {len(data)}"
        )
    flat = np.frombuffer(data, dtype=_FLOAT32_LE).astype(float).reshape(-1, FIELDS_PER_POINT)
    return [_make_point(*row) for row in flat.tolist()]


def points_from_records(records: Iterable[Mapping[str, Any]]) -> list[SplinePoint]:
    """Validate JSON/YAML point records into SplinePoint models.

    Raises:
        MalformedCurveData: If a record is missing fields, has unknown fields
            or holds a non-finite number.
    """
    points: list[SplinePoint] = []
    for i, record in enumerate(records):
        try:
            points.append(SplinePoint.model_validate(record))
        except ValidationError as e:
            raise MalformedCurveData(f"Invalid spline point #{i}: {e}") from e
    return points


def decode_document(data: Mapping[str, Any]) -> ValueSpread:
    """Decode a curve file object {"points": [...], "spread": ...}.

    Raises:
        MalformedCurveData: If the object does not match CurveDocument.
    """
    try:
        document = CurveDocument.model_validate(data)
    except ValidationError as e:
        raise MalformedCurveData(f"Invalid curve document: {e}") from e
    return decode(document.points, document.spread)


def points_to_records(points: Iterable[SplinePoint]) -> list[dict[str, float]]:
    return [sp.model_dump() for sp in points]


def _make_point(x: float, y: float, t_x: float, t_y: float) -> SplinePoint:
    try:
        return SplinePoint(x=x, y=y, t_x=t_x, t_y=t_y)
    except ValidationError as e:
        raise MalformedCurveData(f"Invalid spline point ({x}, {y}, {t_x}, {t_y})") from e


def _spline_from_flat(data: list[float]) -> HermiteSpline:
    try:
        return HermiteSpline.from_flat(data)
    except ValidationError as e:
        logger.debug("Rejected spline buffer: %s", data)
        raise MalformedCurveData("Spline buffer holds non-finite coordinates") from e
