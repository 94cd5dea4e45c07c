"""Node-to-segment contact search: closest approach of slave nodes to master segments."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from mbfea.hermite import ClosestPoint, closest_point_on_hermite

__all__ = ["SurfaceTopology", "ContactSlot", "ContactTable"]

_UNSET = -1
_PART_NODE0 = 0
_PART_NODE1 = 1  # also used for a contact on a smoothed corner
_PART_SEGMENT = 2
_SLOTS_PER_NODE = 3


@dataclass
class SurfaceTopology:
    """Connectivity of the surface meshes.

    flat_surface_nodes maps a slave node's ordinal to its global node id.
    surface_segments holds, per segment, (node0, node1, mesh, previous_segment),
    where previous_segment is the segment ending at node0.
    node_to_segments holds, per global node, (incoming segment, outgoing segment, mesh).
    """

    flat_surface_nodes: Sequence[int]
    surface_segments: Sequence[Sequence[int]]
    node_to_segments: Sequence[Sequence[int]] = field(default_factory=tuple)

    @property
    def num_surface_nodes(self) -> int:
        return len(self.flat_surface_nodes)


@dataclass
class ContactSlot:
    """One master-mesh contact of a slave node.

    part is 0 or 1 for the segment's first or second node (1 also marks a
    smoothed corner), 2 for the segment interior; mesh is -1 while unused.
    """

    mesh: int = _UNSET
    segment: int = _UNSET
    part: int = _UNSET
    gap: float = 0.0
    curve_x: float = 0.0
    curve_y: float = 0.0
    curve_g: float = 0.0


@dataclass
class _Candidate:
    part: int
    gap: float
    curve: Optional[ClosestPoint] = None


class ContactTable:
    """Up to three master-mesh contacts for each slave node."""

    def __init__(self, num_slave_nodes: int, slots_per_node: int = _SLOTS_PER_NODE):
        if num_slave_nodes < 0:
            raise ValueError("num_slave_nodes must not be negative")
        self._table = [
            [ContactSlot() for _ in range(slots_per_node)] for _ in range(num_slave_nodes)
        ]

    def __len__(self) -> int:
        return len(self._table)

    def slots(self, slave_node) -> list[ContactSlot]:
        """The contact slots of a slave node, in order of first claim."""
        if slave_node < 0:
            raise IndexError(f"slave node {slave_node} out of range")
        return self._table[slave_node]

    def _record(self, slave_node: int, segment: int, master_mesh: int,
                candidate: _Candidate) -> Optional[ContactSlot]:
        for slot in self.slots(slave_node):
            if slot.mesh == _UNSET:
                slot.mesh = master_mesh
                self._store(slot, segment, candidate)
                return slot
            if slot.mesh == master_mesh:
                if abs(slot.gap) > abs(candidate.gap):
                    self._store(slot, segment, candidate)
                    return slot
                return None
        return None

    @staticmethod
    def _store(slot: ContactSlot, segment: int, candidate: _Candidate) -> None:
        slot.segment = segment
        slot.part = candidate.part
        slot.gap = candidate.gap
        if candidate.curve is not None:
            slot.curve_x = candidate.curve.x
            slot.curve_y = candidate.curve.y
            slot.curve_g = candidate.curve.g

    @staticmethod
    def _projection(xi, yi, x0, y0, x1, y1) -> tuple[float, float]:
        """Signed normal gap and projection parameter of (xi, yi) on segment 0->1."""
        dx = x1 - x0
        dy = y1 - y0
        length_sq = dx * dx + dy * dy
        if length_sq == 0.0:
            raise ValueError("segment has zero length")
        length = math.sqrt(length_sq)
        signed_gap = (xi - x0) * dy / length - (yi - y0) * dx / length
        s = (xi - x0) * dx / length_sq + (yi - y0) * dy / length_sq
        return signed_gap, s

    def find_closest_approach(self, slave_node, segment, master_mesh, topology, pos_x, pos_y):
        """Record the closest approach of a slave node to a straight master segment.

        Returns the slot that was filled or improved, or None.
        """
        node = topology.flat_surface_nodes[slave_node]
        node0, node1 = topology.surface_segments[segment][:2]
        xi, yi = pos_x[node], pos_y[node]
        x0, y0 = pos_x[node0], pos_y[node0]
        x1, y1 = pos_x[node1], pos_y[node1]

        signed_gap, s = self._projection(xi, yi, x0, y0, x1, y1)
        if 0 <= s <= 1:
            candidate = _Candidate(_PART_SEGMENT, signed_gap)
        else:
            sign = -1.0 if signed_gap < 0 else 1.0
            gap0 = math.hypot(xi - x0, yi - y0) * sign
            gap1 = math.hypot(xi - x1, yi - y1) * sign
            if abs(gap0) <= abs(gap1):
                candidate = _Candidate(_PART_NODE0, gap0)
            else:
                candidate = _Candidate(_PART_NODE1, gap1)
        return self._record(slave_node, segment, master_mesh, candidate)

    def find_closest_approach_with_smoothing(self, slave_node, segment, master_mesh,
                                             topology, pos_x, pos_y, alpha):
        """Record the closest approach to a master segment whose corners are smoothed.

        The middle of the segment (alpha <= s <= 1 - alpha) is treated as a
        straight segment. Near its first node the smoothed corner with the
        previous segment is searched, provided the node also lies in that
        segment's end zone. The end zone near the second node is left to the
        following segment. Returns the slot that was filled or improved, or None.
        """
        node = topology.flat_surface_nodes[slave_node]
        node0, node1 = topology.surface_segments[segment][:2]
        xi, yi = pos_x[node], pos_y[node]
        x0, y0 = pos_x[node0], pos_y[node0]
        x1, y1 = pos_x[node1], pos_y[node1]

        signed_gap, s = self._projection(xi, yi, x0, y0, x1, y1)
        if alpha <= s <= 1 - alpha:
            return self._record(slave_node, segment, master_mesh,
                                _Candidate(_PART_SEGMENT, signed_gap))
        if s >= alpha:
            return None

        previous = topology.surface_segments[segment][3]
        node2 = topology.surface_segments[previous][0]
        x2, y2 = pos_x[node2], pos_y[node2]
        _, s_previous = self._projection(xi, yi, x2, y2, x0, y0)
        if s_previous < 1 - alpha:
            return None

        point = closest_point_on_hermite(xi, x2, x0, x1, yi, y2, y0, y1, alpha)
        return self._record(slave_node, segment, master_mesh,
                            _Candidate(_PART_NODE1, point.gap, point))