# mbfea

Building blocks for multi-body finite-element simulations of soft,
deformable particles in two dimensions.

## What is in the package

- **Hermite-smoothed corners** (`mbfea.hermite`): `hermite_interpolation`
  evaluates the smoothed curve through three consecutive surface nodes at a
  parameter `g` in [-1, 1] and returns a `Point`. `closest_point_on_hermite`
  finds, by Newton iteration from `g = -1`, the point of such a curve closest
  to a given node and returns a `ClosestPoint` with the curve parameter, the
  point, the unit normal and the signed gap. The gap stays at 999 when the
  solution lies outside [-1, 1]; `ArithmeticError` is raised if the iteration
  does not settle.
- **Time integrators** (`mbfea.integrators`): `semi_implicit_euler`,
  `leapfrog`, `explicit_euler` and `velocity_verlet` update a `State`
  (positions, velocities and forces as numpy arrays, changed in place), with
  optional FIRE velocity mixing. `integrate` dispatches on an `Integrator`
  kind (0 to 3). `State.zeros(n)` makes an all-zero state of `n` nodes.
- **FIRE 2.0 minimisation** (`mbfea.fire`): `fire2_minimize` relaxes a
  `State` under a force callback that refreshes `state.force_x` and
  `state.force_y`, until the largest nodal force is within
  `FireParameters.r_tolerance`. Nodes may be frozen, and an optional Verlet
  cutoff bounds the displacement per step. It returns a `FireResult`
  (converged flag, iteration and step counts, final residual, time step,
  mixing factor and power counters). `FireParameters.validate` raises
  `ValueError` for inconsistent step settings; NaN forces, or a time step
  that cannot be reduced enough for the cutoff, raise `FireDivergenceError`.
- **Power-law repulsion** (`mbfea.repulsion`): `powerlaw_repulsion_by_segment`
  (repulsion by the line through a segment) and `wall_discrete_powerlaw`
  (summed repulsion by nodes spread along a wall) return a
  `PowerlawRepulsion` holding force, energy and contact geometry.
  `is_inside_triangle` is a single-precision edge-function test.
- **Node-to-segment contacts** (`mbfea.contacts`): a `ContactTable` keeps up
  to three `ContactSlot`s per slave node, each for one master mesh, holding
  the closest segment, the part of it (first node, second node or interior)
  and the signed gap. `find_closest_approach` works on straight segments;
  `find_closest_approach_with_smoothing` uses Hermite-smoothed corners near a
  segment's first node. Mesh connectivity is described by a
  `SurfaceTopology`.
- **Contact detection** (`mbfea.detection`): `detect_contacts_two_points`
  walks a `CellGrid` of linked cells, checks each slave node against the
  master segments of neighbouring cells of other meshes and fills a
  `ContactTable`. When roles are not reversible, `MeshRoles.claim` fixes
  which mesh of each pair is slave on first contact.
- **Output files**:
  - `mbfea.datafiles`: `output_directory`, `global_data_filename`,
    `global_data_columns`, `write_global_data_header` and
    `append_global_data_row` for the column-aligned global data table.
  - `mbfea.snapshots`: `write_facets` and `write_facets_ntn` for facet
    listings of contacts between meshes.
  - `mbfea.curves`: `write_smooth_curves` samples the smoothed corner around
    every surface node; `write_gaps` writes node-to-segment gaps.

## What the package does not do

There is no command-line program and no driver: the package does not read a
parameter file, load or build meshes, compute elastic or contact forces, or
run compression and shearing protocols. The caller supplies the force
computation to `fire2_minimize` and the mesh connectivity, cell lists and
positions to the contact functions. Per-node and per-element dump files are
not written; only the global data table, facet, smoothed-curve and gap files
are.

## Installation

```
pip install .
```

Tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Examples

```python
from mbfea.hermite import closest_point_on_hermite, hermite_interpolation

# Smoothed corner through (-2, 0), (0, 0) and (2, 0) with smoothing alpha 0.95.
mid = hermite_interpolation(-2.0, 0.0, 2.0, 0.0, 0.0, 0.0, 0.95, 0.0)
print(mid.x, mid.y)

# Closest point of that curve to the node (0.5, 1.0).
hit = closest_point_on_hermite(0.5, -2.0, 0.0, 2.0, 1.0, 0.0, 0.0, 0.0, 0.95)
print(hit.g, hit.x, hit.y, hit.gap)
```

Relaxing a system with FIRE, here a set of nodes pulled towards the origin:

```python
import numpy as np
from mbfea.fire import FireParameters, fire2_minimize
from mbfea.integrators import State

state = State.zeros(3)
state.pos_x[:] = [1.0, -2.0, 0.5]
state.pos_y[:] = [0.5, 1.0, -1.5]

def forces(s):
    s.force_x[:] = -s.pos_x
    s.force_y[:] = -s.pos_y

result = fire2_minimize(state, forces, FireParameters(r_tolerance=1e-8))
print(result.converged, result.iterations, np.abs(state.pos_x).max())
```

Global data tables are written in two steps: the header once, then one row
per saved state.

```python
from mbfea.datafiles import (
    append_global_data_row,
    global_data_columns,
    global_data_filename,
    output_directory,
    write_global_data_header,
)

folder = output_directory("run", "compress", "none", 0)
folder.mkdir(parents=True, exist_ok=True)
columns = global_data_columns("periodic", "FIRE2", "nts")
path = folder / global_data_filename("data", 0, 1000, "final")
write_global_data_header(path, columns)
append_global_data_row(path, [0] + [0.0] * (len(columns) - 2) + [0])
```