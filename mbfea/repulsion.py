"""Power-law repulsion between nodes and straight segments or discretised walls."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np

__all__ = [
    "PowerlawRepulsion",
    "is_inside_triangle",
    "powerlaw_repulsion_by_segment",
    "wall_discrete_powerlaw",
]


@dataclass
class PowerlawRepulsion:
    """Force, energy and contact geometry of a power-law repulsion.

    Every field stays zero when nothing lies within the cut-off.
    """

    fx: float = 0.0
    fy: float = 0.0
    energy: float = 0.0
    r: float = 0.0
    f: float = 0.0
    nx: float = 0.0
    ny: float = 0.0


def _signbit(value) -> bool:
    return math.copysign(1.0, float(value)) < 0


def is_inside_triangle(x, xo, x1, x2, y, yo, y1, y2) -> bool:
    """Edge-function test of point (x, y) against triangle (xo, yo), (x1, y1), (x2, y2).

    Arithmetic is single precision. The three sign bits are chained by
    equality, so the result is true when an odd number of the edge
    functions carry a set sign bit: a point inside a clockwise triangle
    gives true, one inside a counter-clockwise triangle gives false.
    """
    x, xo, x1, x2, y, yo, y1, y2 = (np.float32(v) for v in (x, xo, x1, x2, y, yo, y1, y2))
    v1 = (x - xo) * (yo - y1) + (y - yo) * (x1 - xo)
    v2 = (x - x1) * (y1 - y2) + (y - y1) * (x2 - x1)
    v3 = (x - x2) * (y2 - yo) + (y - y2) * (xo - x2)
    return (_signbit(v1) == _signbit(v2)) == _signbit(v3)


def powerlaw_repulsion_by_segment(x, x1, x2, y, y1, y2, sigma, epsilon, rcut) -> PowerlawRepulsion:
    """Repulsion of point (x, y) by the line through (x1, y1) and (x2, y2).

    The distance r is signed along the segment normal (dy, -dx). When r is
    below rcut the force is 6 epsilon / sigma (sigma / r)^13 along the normal
    and the energy 0.5 epsilon (sigma / r)^12; otherwise all fields are zero.
    """
    normal_x = y2 - y1
    normal_y = -(x2 - x1)
    norm = math.sqrt(normal_x * normal_x + normal_y * normal_y)
    nx = normal_x / norm
    ny = normal_y / norm
    r = (x - x1) * nx + (y - y1) * ny
    if not r < rcut:
        return PowerlawRepulsion()
    ratio = sigma / r
    f = 0.5 * epsilon / sigma * 12 * ratio**13
    return PowerlawRepulsion(
        fx=f * nx,
        fy=f * ny,
        energy=0.5 * epsilon * ratio**12,
        r=r,
        f=f,
        nx=nx,
        ny=ny,
    )


def _wall_parameters(num_wall_nodes: int) -> Iterator[float]:
    step = 1.0 / num_wall_nodes
    s = 0.0
    while s < 1.0:
        yield s
        s += step


def wall_discrete_powerlaw(x, x0, x1, y, y0, y1, sigma, epsilon, rcut, num_wall_nodes) -> PowerlawRepulsion:
    """Summed repulsion of point (x, y) by nodes spread along a wall segment.

    Wall nodes sit at s = 0, 1/n, 2/n, ... below 1 along the segment from
    (x0, y0) to (x1, y1); nodes farther than rcut are ignored. Only fx, fy
    and energy are filled in.
    """
    if num_wall_nodes <= 0:
        raise ValueError("num_wall_nodes must be positive")
    dx01 = x1 - x0
    dy01 = y1 - y0
    result = PowerlawRepulsion()
    for s in _wall_parameters(num_wall_nodes):
        dxij = x0 + s * dx01 - x
        dyij = y0 + s * dy01 - y
        drij = math.sqrt(dxij * dxij + dyij * dyij)
        if drij > rcut:
            continue
        ratio = sigma / drij
        force = 0.5 * epsilon / sigma * 12 * ratio**13
        result.fx += -force * dxij / drij
        result.fy += -force * dyij / drij
        result.energy += 0.5 * epsilon * ratio**12
    return result