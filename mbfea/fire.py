"""FIRE 2.0 relaxation of a nodal system towards mechanical equilibrium."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import numpy as np

from mbfea.integrators import Integrator, State, integrate

__all__ = ["FireParameters", "FireResult", "FireDivergenceError", "fire2_minimize"]

_log = logging.getLogger(__name__)

_NO_POWER_FORCE = 1e-20
_VERLET_SAFETY = 1.5


class FireDivergenceError(RuntimeError):
    """The relaxation produced non-finite forces or cannot keep its step bounded."""


@dataclass
class FireParameters:
    """Settings of the FIRE 2.0 minimiser."""

    alpha_start: float = 0.1
    dt_start: float = 0.01
    dtmax: float = 0.1
    dtmin: float = 0.0002
    finc: float = 1.1
    fdec: float = 0.5
    falpha: float = 0.99
    n_positive_min: int = 20
    n_negative_max: int = 2000
    nmax: int = 100_000
    initial_delay: bool = True
    r_tolerance: float = 1e-10

    def validate(self) -> None:
        """Raise ValueError if the step-size settings are inconsistent."""
        if self.dtmax < self.dtmin:
            raise ValueError("dtmax has to be larger than dtmin")
        if self.finc < 1.0:
            raise ValueError("finc has to be greater than 1.0")
        if self.fdec > 1.0:
            raise ValueError("fdec has to be less than 1.0")


@dataclass
class FireResult:
    """Outcome of a FIRE relaxation."""

    converged: bool
    iterations: int
    steps: int
    max_residual: float
    dt: float
    alpha: float
    n_positive: int
    n_negative: int


def _zero_frozen(x: np.ndarray, y: np.ndarray, frozen: np.ndarray) -> None:
    if frozen.size:
        x[frozen] = 0.0
        y[frozen] = 0.0


def fire2_minimize(
    state: State,
    compute_forces: Callable[[State], object],
    params: Optional[FireParameters] = None,
    integrator=Integrator.SEMI_IMPLICIT_EULER,
    frozen_nodes: Iterable[int] = (),
    verlet_cutoff: Optional[float] = None,
) -> FireResult:
    """Relax state with FIRE 2.0 until the largest nodal force is within tolerance.

    compute_forces(state) must refresh state.force_x and state.force_y in
    place. Nodes in frozen_nodes get zero force (and zero initial velocity
    under leapfrog). With verlet_cutoff given, the time step is reduced
    while the largest displacement per step exceeds 1.5 times it.
    The relaxation stops without convergence after nmax iterations or more
    than n_negative_max consecutive steps of non-positive power.
    """
    params = params or FireParameters()
    params.validate()
    kind = Integrator(integrator)
    frozen = np.fromiter((int(n) for n in frozen_nodes), dtype=int)

    alpha = params.alpha_start
    dt = params.dt_start
    n_positive = 0
    n_negative = 0
    scale1 = 0.0
    scale2 = 0.0
    steps = 0
    iterations = 0
    max_residual = float("inf")
    converged = False

    compute_forces(state)
    state.velocity_x.fill(0.0)
    state.velocity_y.fill(0.0)

    if kind is Integrator.LEAPFROG:
        state.velocity_x -= 0.5 * dt * state.force_x
        state.velocity_y -= 0.5 * dt * state.force_y
        _zero_frozen(state.velocity_x, state.velocity_y, frozen)

    for iteration in range(1, params.nmax + 1):
        iterations = iteration
        compute_forces(state)
        _zero_frozen(state.force_x, state.force_y, frozen)

        if np.isnan(state.force_x.sum()) or np.isnan(state.force_y.min(initial=0.0)):
            raise FireDivergenceError("forces became NaN: the system blew up")
        magnitudes = state.force_x * state.force_x + state.force_y * state.force_y
        max_residual = float(np.sqrt(magnitudes.max(initial=0.0)))

        if max_residual <= params.r_tolerance:
            converged = True
            break

        power = float(state.force_x @ state.velocity_x + state.force_y @ state.velocity_y)
        _log.debug(
            "iteration %d: power %g, max force %g, dt %g, alpha %g",
            iteration, power, max_residual, dt, alpha,
        )

        if power > 0:
            n_positive += 1
            n_negative = 0
            if n_positive > params.n_positive_min:
                dt = min(dt * params.finc, params.dtmax)
                alpha *= params.falpha
            scale1 = 1.0 - alpha
            f_dot_f = float(magnitudes.sum())
            v_dot_v = float(
                state.velocity_x @ state.velocity_x + state.velocity_y @ state.velocity_y
            )
            scale2 = 0.0 if f_dot_f <= _NO_POWER_FORCE else alpha * np.sqrt(v_dot_v / f_dot_f)
        else:
            n_positive = 0
            n_negative += 1
            if n_negative > params.n_negative_max:
                _log.info("FIRE failed to converge")
                break
            if not (params.initial_delay and iteration < params.n_positive_min):
                if dt * params.fdec >= params.dtmin:
                    dt *= params.fdec
                alpha = params.alpha_start
            state.pos_x -= 0.5 * state.velocity_x * dt
            state.pos_y -= 0.5 * state.velocity_y * dt
            state.velocity_x.fill(0.0)
            state.velocity_y.fill(0.0)

        if verlet_cutoff is not None:
            speeds = state.velocity_x * state.velocity_x + state.velocity_y * state.velocity_y
            vmax = float(np.sqrt(speeds.max(initial=0.0)))
            while vmax * dt > verlet_cutoff * _VERLET_SAFETY:
                if dt * params.fdec < params.dtmin:
                    raise FireDivergenceError(
                        "time step cannot be reduced enough to respect the Verlet cutoff"
                    )
                dt *= params.fdec

        integrate(kind, state, dt, True, power, scale1, scale2)
        steps += 1

    return FireResult(
        converged=converged,
        iterations=iterations,
        steps=steps,
        max_residual=max_residual,
        dt=dt,
        alpha=alpha,
        n_positive=n_positive,
        n_negative=n_negative,
    )