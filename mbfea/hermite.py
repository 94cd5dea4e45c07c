"""Hermite-smoothed surface corners: evaluation and closest-point search."""

from __future__ import annotations

import math
from dataclasses import dataclass

__all__ = ["ClosestPoint", "Point", "closest_point_on_hermite", "hermite_interpolation"]

_TOLERANCE = 1e-12
_MAX_ITERATIONS = 100_000
_NO_GAP = 999.0


@dataclass
class Point:
    """A point in the plane."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class ClosestPoint:
    """Closest point on a smoothed corner, its curve parameter, normal and gap."""

    g: float = 0.0
    x: float = 0.0
    y: float = 0.0
    nx: float = 0.0
    ny: float = 0.0
    gap: float = 0.0


def _curve(p2: float, p3: float, p4: float, alpha: float, g: float) -> float:
    return (
        alpha * (1 - 2 * g + g * g) * p2 / 4.0
        + (4 - 2 * alpha * (1 + g * g)) * p3 / 4.0
        + alpha * (1 + 2 * g + g * g) * p4 / 4.0
    )


def _curve_derivative(p2: float, p3: float, p4: float, alpha: float, g: float) -> float:
    return alpha * (-2 + 2 * g) * p2 / 4.0 - alpha * g * p3 + alpha * (2 + 2 * g) * p4 / 4.0


def _curve_second_derivative(p2: float, p3: float, p4: float, alpha: float) -> float:
    return alpha * p2 / 2.0 - alpha * p3 + alpha * p4 / 2.0


def hermite_interpolation(x2, x3, x4, y2, y3, y4, alpha, g) -> Point:
    """Evaluate the smoothed corner through nodes 2, 3, 4 at parameter g in [-1, 1]."""
    return Point(_curve(x2, x3, x4, alpha, g), _curve(y2, y3, y4, alpha, g))


def closest_point_on_hermite(x1, x2, x3, x4, y1, y2, y3, y4, alpha) -> ClosestPoint:
    """Find the point of the smoothed corner (nodes 2, 3, 4) closest to point 1.

    Newton iteration starts at g = -1. The gap is signed along the curve
    normal and stays at 999 when the solution lies outside [-1, 1].
    Raises ArithmeticError if the iteration fails to settle.
    """
    g = -1.0
    ddx = _curve_second_derivative(x2, x3, x4, alpha)
    ddy = _curve_second_derivative(y2, y3, y4, alpha)
    for _ in range(_MAX_ITERATIONS):
        xg = _curve(x2, x3, x4, alpha, g)
        yg = _curve(y2, y3, y4, alpha, g)
        dx = _curve_derivative(x2, x3, x4, alpha, g)
        dy = _curve_derivative(y2, y3, y4, alpha, g)
        f = (xg - x1) * dx + (yg - y1) * dy
        f_prime = (dx * dx + dy * dy) + ((xg - x1) * ddx + (yg - y1) * ddy)
        g = g - f / f_prime
        if not abs(f) > _TOLERANCE:
            break
    else:
        raise ArithmeticError("closest-point search on the smoothed curve did not converge")

    norm = math.sqrt(dx * dx + dy * dy)
    result = ClosestPoint(
        g=g + f / f_prime,
        x=xg,
        y=yg,
        nx=dy / norm,
        ny=-dx / norm,
        gap=_NO_GAP,
    )
    if -1 <= g <= 1:
        result.gap = (x1 - xg) * result.nx + (y1 - yg) * result.ny
    return result