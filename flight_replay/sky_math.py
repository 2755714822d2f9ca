"""Numeric interpolation functions for replaying sampled flight data.

This module provides linear interpolation and cubic Hermite (Catmull-Rom)
splines, including two variants for circular value domains:

- hermite180: values in [-180, 180), e.g. bank or longitude
- hermite360: values in [0, 360), e.g. heading

Reference: http://paulbourke.net/miscellaneous/interpolation/
"""

import math
from typing import Union

Number = Union[int, float]


def lerp(v1: Number, v2: Number, mu: float) -> Number:
    """Linearly interpolate between v1 and v2.

    Integer values are rounded half away from zero, so that discrete
    positions stay discrete and step evenly.

    Args:
        v1: Value at mu = 0
        v2: Value at mu = 1
        mu: Interpolation factor in [0.0, 1.0]

    Returns:
        Interpolated value (int if v1 is an int, float otherwise)
    """
    if isinstance(v1, int):
        return v1 + _round_half_away(mu * (v2 - v1))
    return v1 + mu * (v2 - v1)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def normalise180(y0: float, y1: float) -> float:
    """Unwrap y1 relative to the previous value y0 in a [-180, 180) domain.

    If both values have the same sign, or their difference does not exceed
    180, y1 is returned unchanged. Otherwise y1 is moved across the modulo
    boundary so that the shorter angular path is taken:

        y0 | 10 | 160 | 170 | -20 | -170
        y1 | 20 | 170 | -20 | -10 |   20
        yn | 20 | 170 | 340 | -10 | -340

    A series like 165, 175, -175, -165 thus becomes 165, 175, 185, 195.
    """
    s0 = _sign(y0)
    if _sign(y1) != s0 and abs(y1 - y0) > 180.0:
        return s0 * (360.0 - abs(y1))
    return y1


def hermite(
    y0: float,
    y1: float,
    y2: float,
    y3: float,
    mu: float,
    tension: float = 0.0,
    bias: float = 0.0,
) -> float:
    """Interpolate between y1 and y2 with a cubic Hermite spline.

    The curve passes through y1 at mu = 0 and y2 at mu = 1. The tangents
    are derived from the neighbouring support values y0 and y3.

    Args:
        y0: First support value
        y1: First interpolation value
        y2: Second interpolation value
        y3: Second support value
        mu: Interpolation factor in [0.0, 1.0]
        tension: 1 is high, 0 normal (Catmull-Rom), -1 is low
        bias: 0 is even; positive values bias towards the first segment,
            negative values towards the second segment

    Returns:
        Interpolated value
    """
    mu2 = mu * mu
    mu3 = mu2 * mu
    scale = (1.0 - tension) / 2.0

    m0 = (y1 - y0) * (1.0 + bias) * scale
    m0 += (y2 - y1) * (1.0 - bias) * scale
    m1 = (y2 - y1) * (1.0 + bias) * scale
    m1 += (y3 - y2) * (1.0 - bias) * scale

    a0 = 2.0 * mu3 - 3.0 * mu2 + 1.0
    a1 = mu3 - 2.0 * mu2 + mu
    a2 = mu3 - mu2
    a3 = -2.0 * mu3 + 3.0 * mu2

    return a0 * y1 + a1 * m0 + a2 * m1 + a3 * y2


def hermite180(
    y0: float,
    y1: float,
    y2: float,
    y3: float,
    mu: float,
    tension: float = 0.0,
    bias: float = 0.0,
) -> float:
    """Hermite interpolation of circular values in [-180, 180).

    Returns:
        Interpolated value, wrapped into [-180, 180)
    """
    y1n = normalise180(y0, y1)
    y2n = normalise180(y1n, y2)
    y3n = normalise180(y2n, y3)

    value = hermite(y0, y1n, y2n, y3n, mu, tension, bias)
    if value < -180.0:
        value += 360.0
    elif value >= 180.0:
        value -= 360.0
    return value


def hermite360(
    y0: float,
    y1: float,
    y2: float,
    y3: float,
    mu: float,
    tension: float = 0.0,
    bias: float = 0.0,
) -> float:
    """Hermite interpolation of circular values in [0, 360).

    Returns:
        Interpolated value, wrapped into [0, 360)
    """
    return hermite180(
        y0 - 180.0, y1 - 180.0, y2 - 180.0, y3 - 180.0, mu, tension, bias
    ) + 180.0
