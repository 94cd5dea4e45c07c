"""Dump files of smoothed surface curves and of node-to-segment gaps."""

from __future__ import annotations

import numbers
import os
from typing import Iterable, Iterator, Mapping, Sequence, Union

from mbfea.contacts import SurfaceTopology
from mbfea.hermite import hermite_interpolation

__all__ = ["write_smooth_curves", "write_gaps"]

_SPACING = 26
_G_START = -1.0
_G_END = 1.0
_G_STEP = 0.05
_GAP_FIELDS = 4


def _format(value) -> str:
    if isinstance(value, numbers.Integral):
        return str(int(value))
    return "%.15g" % float(value)


def _curve_parameters() -> Iterator[float]:
    # The parameter is accumulated, so the sampling matches repeated addition.
    g = _G_START
    while g <= _G_END:
        yield g
        g += _G_STEP


def _mesh_nodes(meshes) -> list[Sequence[int]]:
    if isinstance(meshes, Mapping):
        return [meshes[key] for key in sorted(meshes)]
    return list(meshes)


def write_smooth_curves(
    path,
    meshes: Union[Mapping[int, Sequence[int]], Iterable[Sequence[int]]],
    topology: SurfaceTopology,
    pos_x,
    pos_y,
    alpha,
) -> None:
    """Write the smoothed corner around every surface node of every mesh.

    meshes maps a mesh id to its surface nodes (or is a sequence of node
    lists). For each node the corner through the previous, current and next
    node is sampled from g = -1 to 1 in steps of 0.05, one "x y" line per
    sample; each mesh's block is followed by two blank lines.
    """
    blocks = _mesh_nodes(meshes)
    lines = [f"numMeshes:   {len(blocks)}\n"]
    for nodes in blocks:
        for node3 in nodes:
            incoming, outgoing = topology.node_to_segments[node3][:2]
            node2 = topology.surface_segments[incoming][0]
            node4 = topology.surface_segments[outgoing][1]
            x2, y2 = pos_x[node2], pos_y[node2]
            x3, y3 = pos_x[node3], pos_y[node3]
            x4, y4 = pos_x[node4], pos_y[node4]
            for g in _curve_parameters():
                point = hermite_interpolation(x2, x3, x4, y2, y3, y4, alpha, g)
                lines.append(_format(point.x) + _format(point.y).rjust(_SPACING) + "\n")
        lines.append("\n\n")
    with open(os.fspath(path), "w", encoding="utf-8") as handle:
        handle.write("".join(lines))


def write_gaps(path, interactions: Mapping) -> None:
    """Write the first four values of every node-to-segment interaction, then EOF.

    Interactions are written in key order. Raises ValueError if an
    interaction holds fewer than four values.
    """
    lines = []
    for key in sorted(interactions):
        values = list(interactions[key])
        if len(values) < _GAP_FIELDS:
            raise ValueError(
                f"interaction {key!r} has {len(values)} values, expected at least {_GAP_FIELDS}"
            )
        first, *rest = (_format(value) for value in values[:_GAP_FIELDS])
        lines.append(first + "".join(item.rjust(_SPACING) for item in rest) + "\n")
    lines.append("EOF\n")
    with open(os.fspath(path), "w", encoding="utf-8") as handle:
        handle.write("".join(lines))