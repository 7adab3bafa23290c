"""Trigonometric building blocks shared by every resolver.

Angle convention everywhere in the engine: degrees from the positive X axis,
counter-clockwise positive. X grows forward of the bottom bracket, Y grows
upward.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


def to_radians(degrees: float) -> float:
    return degrees * math.pi / 180


def to_degrees(radians: float) -> float:
    return radians * 180 / math.pi


def project(
    origin_x: float,
    origin_y: float,
    length: float,
    angle_degrees: float,
) -> tuple[float, float]:
    """Return the point `length` away from the origin along `angle_degrees`."""
    angle = to_radians(angle_degrees)
    return (
        origin_x + length * math.cos(angle),
        origin_y + length * math.sin(angle),
    )


def rotate(x: float, y: float, angle_degrees: float) -> tuple[float, float]:
    """Rotate a vector about the origin, counter-clockwise positive."""
    angle = to_radians(angle_degrees)
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return (x * cos_a - y * sin_a, x * sin_a + y * cos_a)


def angle_from_vertical(x: float, y: float) -> float:
    """Angle of the line from the origin to (x, y), as `90 - atan2(x, y)`.

    This is the effective seat tube angle when (x, y) is the saddle. Only
    defined with the point above the origin; y == 0 yields NaN.
    """
    if y == 0 or is_missing(x) or is_missing(y):
        return math.nan
    return 90 - to_degrees(math.atan2(x, y))


def distance(x: float, y: float) -> float:
    return math.sqrt(x * x + y * y)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity."""
    return math.floor(value + 0.5)


def round_to_tenth(value: float) -> float:
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def is_missing(value: Optional[float]) -> bool:
    return value is None or math.isnan(value)
