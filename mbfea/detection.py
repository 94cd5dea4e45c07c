"""Cell-list driven node-to-segment contact detection between surface meshes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from mbfea.contacts import ContactTable, SurfaceTopology

__all__ = ["CellGrid", "MeshRoles", "detect_contacts_two_points"]

_SLAVE = 1
_MASTER = -2
_UNCLAIMED = -1


@dataclass
class CellGrid:
    """Binning of slave nodes and master segments into a rectangular cell grid.

    node_links is a linked list over slave-node ordinals: the head of cell c
    sits at index c + number of surface nodes, and node_links[n] is the node
    after n, negative at the end. cell_heads[c] is (first segment, column) of
    cell c. segment_links[s][column] is the next segment in the same cell and
    segment_links[s][column + 1] the column to read it from.
    """

    num_x_cells: int
    num_y_cells: int
    node_links: Sequence[int]
    cell_heads: Sequence[Sequence[int]]
    segment_links: Sequence[Sequence[int]]
    neighbor_deltas: Sequence[tuple[int, int]]

    def _slave_nodes(self, flat_cell: int, num_surface_nodes: int) -> Iterator[int]:
        node = int(self.node_links[flat_cell + num_surface_nodes])
        while node >= 0:
            yield node
            node = int(self.node_links[node])

    def _master_segments(self, flat_cell: int) -> Iterator[int]:
        head = self.cell_heads[flat_cell]
        segment, column = int(head[0]), int(head[1])
        while segment >= 0:
            yield segment
            row = self.segment_links[segment]
            segment, column = int(row[column]), int(row[column + 1])

    def _neighbor_cells(self, cell_x: int, cell_y: int) -> Iterator[int]:
        for delta_x, delta_y in self.neighbor_deltas:
            nx = cell_x + delta_x
            ny = cell_y + delta_y
            if nx < 0 or ny < 0 or nx >= self.num_x_cells or ny >= self.num_y_cells:
                continue
            yield self.num_x_cells * ny + nx


class MeshRoles:
    """Which mesh of each pair acts as slave and which as master.

    matrix[a][b] is 1 when mesh a is enslaved to mesh b, -2 when a is the
    master of b, and -1 while the pair has not been settled.
    """

    def __init__(self, num_meshes: int):
        if num_meshes < 0:
            raise ValueError("num_meshes must not be negative")
        self.matrix = [[_UNCLAIMED] * num_meshes for _ in range(num_meshes)]

    def claim(self, slave_mesh, master_mesh) -> bool:
        """Whether slave_mesh may be checked against master_mesh; settles a free pair."""
        role = self.matrix[slave_mesh][master_mesh]
        if role == _MASTER:
            return False
        if role == _UNCLAIMED:
            self.matrix[slave_mesh][master_mesh] = _SLAVE
            self.matrix[master_mesh][slave_mesh] = _MASTER
        return True


def detect_contacts_two_points(
    table: ContactTable,
    topology: SurfaceTopology,
    grid: CellGrid,
    pos_x,
    pos_y,
    roles: Optional[MeshRoles] = None,
    reversible: bool = True,
    smooth_corners: bool = False,
    alpha: float = 0.0,
) -> int:
    """Search every slave node against the master segments of its neighbouring cells.

    Segments of the slave node's own mesh are skipped. Unless reversible,
    a mesh pair is checked only in the direction fixed by roles on first
    contact. Returns the number of closest-approach evaluations made.
    """
    if not reversible and roles is None:
        raise ValueError("mesh roles are required when master/slave roles are not reversible")

    evaluations = 0
    num_surface_nodes = topology.num_surface_nodes
    for cell_y in range(grid.num_y_cells):
        for cell_x in range(grid.num_x_cells):
            flat_cell = grid.num_x_cells * cell_y + cell_x
            for slave_node in grid._slave_nodes(flat_cell, num_surface_nodes):
                global_node = topology.flat_surface_nodes[slave_node]
                slave_mesh = topology.node_to_segments[global_node][2]
                for neighbor in grid._neighbor_cells(cell_x, cell_y):
                    for segment in grid._master_segments(neighbor):
                        master_mesh = topology.surface_segments[segment][2]
                        if slave_mesh == master_mesh:
                            continue
                        if not reversible and not roles.claim(slave_mesh, master_mesh):
                            continue
                        if smooth_corners:
                            table.find_closest_approach_with_smoothing(
                                slave_node, segment, master_mesh, topology, pos_x, pos_y, alpha
                            )
                        else:
                            table.find_closest_approach(
                                slave_node, segment, master_mesh, topology, pos_x, pos_y
                            )
                        evaluations += 1
    return evaluations