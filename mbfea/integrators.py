"""Time integrators for nodal positions and velocities, with FIRE velocity mixing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np

__all__ = [
    "Integrator",
    "State",
    "semi_implicit_euler",
    "leapfrog",
    "explicit_euler",
    "velocity_verlet",
    "integrate",
]


class Integrator(IntEnum):
    """Integrator identifiers as used in parameter files."""

    SEMI_IMPLICIT_EULER = 0
    LEAPFROG = 1
    EXPLICIT_EULER = 2
    VELOCITY_VERLET = 3


@dataclass
class State:
    """Nodal positions, velocities and forces; arrays are updated in place."""

    pos_x: np.ndarray
    pos_y: np.ndarray
    velocity_x: np.ndarray
    velocity_y: np.ndarray
    force_x: np.ndarray
    force_y: np.ndarray

    @classmethod
    def zeros(cls, num_nodes):
        """A state of num_nodes nodes with everything set to zero."""
        return cls(*(np.zeros(num_nodes) for _ in range(6)))


def _kick(state: State, dt: float) -> None:
    state.velocity_x += state.force_x * dt
    state.velocity_y += state.force_y * dt


def _drift(state: State, dt: float) -> None:
    state.pos_x += state.velocity_x * dt
    state.pos_y += state.velocity_y * dt


def _mix(state: State, fire: bool, power: float, scale1: float, scale2: float) -> None:
    if fire and power > 0.0:
        state.velocity_x[:] = scale1 * state.velocity_x + scale2 * state.force_x
        state.velocity_y[:] = scale1 * state.velocity_y + scale2 * state.force_y


def semi_implicit_euler(state, dt, fire=False, power=0.0, scale1=0.0, scale2=0.0):
    """Velocity update, optional FIRE mixing, then position update."""
    _kick(state, dt)
    _mix(state, fire, power, scale1, scale2)
    _drift(state, dt)


def leapfrog(state, dt, fire=False, power=0.0, scale1=0.0, scale2=0.0):
    """Leapfrog step; velocities are taken to sit half a step behind positions."""
    _kick(state, dt)
    _mix(state, fire, power, scale1, scale2)
    _drift(state, dt)


def explicit_euler(state, dt, fire=False, power=0.0, scale1=0.0, scale2=0.0):
    """Explicit Euler; without FIRE it is plain steepest descent on positions."""
    if fire:
        _mix(state, fire, power, scale1, scale2)
        _drift(state, dt)
        _kick(state, dt)
    else:
        state.pos_x += state.force_x * dt
        state.pos_y += state.force_y * dt


def velocity_verlet(state, dt, fire=False, power=0.0, scale1=0.0, scale2=0.0):
    """Velocity update, optional FIRE mixing, position update, then a second velocity update."""
    _kick(state, dt)
    _mix(state, fire, power, scale1, scale2)
    _drift(state, dt)
    _kick(state, dt)


_DISPATCH = {
    Integrator.SEMI_IMPLICIT_EULER: semi_implicit_euler,
    Integrator.LEAPFROG: leapfrog,
    Integrator.EXPLICIT_EULER: explicit_euler,
    Integrator.VELOCITY_VERLET: velocity_verlet,
}


def integrate(kind, state, dt, fire=False, power=0.0, scale1=0.0, scale2=0.0):
    """Advance state by one step with the integrator named by kind (0-3)."""
    _DISPATCH[Integrator(kind)](state, dt, fire, power, scale1, scale2)