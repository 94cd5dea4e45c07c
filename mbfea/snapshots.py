"""Facet snapshot files listing the contacts between meshes."""

from __future__ import annotations

import numbers
import os
from typing import Iterable, Mapping, Sequence

__all__ = ["write_facets", "write_facets_ntn"]

_NTS_WIDTH = 7
_NTN_WIDTH = 20

_NTS_TITLE = (
    "Facets_data: (in the smNodes, the first entery is a slave node followed by its masters "
    "or master nodes or node, then the next slave node and so forth. Notice that slave nodes "
    "never duplicate in a row but master nodes can be shared and hence duplicated. Each slave "
    "node has two master nodes at max at one master mesh and a minimum of one.)"
)
_NTS_COLUMNS = ("sMesh", "mMesh", "smNodes")
_NTN_COLUMNS = ("iMesh", "jMesh", "inode", "jnode", "d", "f", "ix", "jx", "iy", "jy", "fx", "fy")
_GNTN_COLUMNS = ("iMesh", "jMesh", "inode", "s", "d", "f", "ix", "sx", "iy", "sy", "fx", "fy")


def _to_string(value) -> str:
    if isinstance(value, numbers.Integral):
        return str(int(value))
    return "%f" % float(value)


def _aligned(items: Sequence[str], width: int) -> str:
    first, *rest = items
    return first + "".join(item.rjust(width) for item in rest)


def _basic_data(time_step) -> str:
    return f"Basic_data:\ntimeStep\t{int(time_step)}\n\n\n"


def _rows(facets: Mapping[tuple[int, int], Iterable], width: int) -> str:
    lines = []
    for (first, second), values in sorted(facets.items()):
        items = [_to_string(first), _to_string(second)]
        items.extend(_to_string(value) for value in values)
        lines.append(_aligned(items, width) + "\n")
    return "".join(lines)


def write_facets(path, time_step, facets) -> None:
    """Write node-to-segment facets: per (slave mesh, master mesh), the slave/master node chain."""
    text = (
        _basic_data(time_step)
        + _NTS_TITLE + "\n"
        + _aligned(_NTS_COLUMNS, _NTS_WIDTH) + "\n"
        + _rows(facets, _NTS_WIDTH)
        + "EOF"
    )
    with open(os.fspath(path), "w", encoding="utf-8") as handle:
        handle.write(text)


def write_facets_ntn(path, time_step, facets, contact_method, ghost_nodes) -> None:
    """Write node-to-node facets; the header depends on contact_method ("ntn" or "gntn")."""
    header = ""
    if contact_method == "ntn":
        header = "Facets_data:\n" + _aligned(_NTN_COLUMNS, _NTN_WIDTH) + "\n"
    elif contact_method == "gntn":
        header = (
            "Facets_data: \n"
            + _aligned(_GNTN_COLUMNS, _NTN_WIDTH)
            + " there are ".rjust(_NTN_WIDTH)
            + str(int(ghost_nodes))
            + "  ghost nodes on each segment\n"
        )
    text = _basic_data(time_step) + header + _rows(facets, _NTN_WIDTH) + "EOF"
    with open(os.fspath(path), "w", encoding="utf-8") as handle:
        handle.write(text)