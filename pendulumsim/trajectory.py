"""
trajectory.py

Drives the integrator across a full run and maps the angle history to
chained Cartesian positions for playback.
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .integrator import rk4_step
from .physics import G, AngularState, CartesianPoint, PhysicalConstants, to_cartesian

logger = logging.getLogger(__name__)

SCALE = 100.0  # pixels per metre


@dataclass
class Trajectory:
    """
    Time series of a double pendulum run, one entry per step.

    Angles are in radians, positions are relative to the pivot in pixels
    (+y down). The positions of mass 2 are absolute, not relative to mass 1.
    """

    times: np.ndarray
    theta1: np.ndarray
    theta2: np.ndarray
    omega1: np.ndarray
    omega2: np.ndarray
    x1: np.ndarray
    y1: np.ndarray
    x2: np.ndarray
    y2: np.ndarray

    def __len__(self) -> int:
        return len(self.times)

    @property
    def angles(self) -> np.ndarray:
        """Shape (n, 2): [theta1, theta2] per step."""
        return np.column_stack([self.theta1, self.theta2])

    @property
    def states(self) -> np.ndarray:
        """Shape (n, 4): [theta1, theta2, omega1, omega2] per step."""
        return np.column_stack([self.theta1, self.theta2, self.omega1, self.omega2])

    @property
    def positions(self) -> np.ndarray:
        """Shape (n, 2, 2): positions[i] = [[x1, y1], [x2, y2]]."""
        p1 = np.column_stack([self.x1, self.y1])
        p2 = np.column_stack([self.x2, self.y2])
        return np.stack([p1, p2], axis=1)

    def state_at(self, idx: int) -> AngularState:
        return AngularState(
            theta1=float(self.theta1[idx]),
            theta2=float(self.theta2[idx]),
            omega1=float(self.omega1[idx]),
            omega2=float(self.omega2[idx]),
        )

    def points_at(self, idx: int) -> Tuple[CartesianPoint, CartesianPoint]:
        return (
            CartesianPoint(float(self.x1[idx]), float(self.y1[idx])),
            CartesianPoint(float(self.x2[idx]), float(self.y2[idx])),
        )


def step_count(duration: float, dt: float) -> int:
    """
    Number of recorded steps, round(duration / dt) with halves rounded away
    from zero.
    """
    ratio = duration / dt
    return int(math.copysign(math.floor(abs(ratio) + 0.5), ratio))


def to_positions(
    theta1: np.ndarray,
    theta2: np.ndarray,
    constants: PhysicalConstants,
    scale: float = SCALE,
) -> Tuple[CartesianPoint, CartesianPoint]:
    """
    Maps angle histories to absolute positions of both masses.

    Mass 1 hangs from the pivot; mass 2 hangs from mass 1.

    Returns:
        (p1, p2) with array-valued components.
    """
    p1 = to_cartesian(np.asarray(theta1), scale * constants.length1)
    p2 = p1 + to_cartesian(np.asarray(theta2), scale * constants.length2)
    return p1, p2


def generate(
    initial: AngularState,
    constants: PhysicalConstants,
    duration: float,
    dt: float,
    scale: float = SCALE,
    g: float = G,
) -> Trajectory:
    """
    Integrates the double pendulum over the whole run, then converts the
    angles to positions.

    Entry 0 is the initial state as given. Entry i > 0 is the state after
    i RK4 steps. Time is accumulated by repeated addition of dt.

    Args:
        initial: Seed state.
        constants: Masses and rod lengths [kg, m].
        duration: Simulated time [s].
        dt: Fixed step size [s].
        scale: Pixels per metre for the position arrays.
        g: Gravitational acceleration.

    Returns:
        Trajectory of length round(duration / dt).
    """
    n = step_count(duration, dt)
    logger.info(
        "Generating trajectory: %d steps, dt=%s, duration=%s", n, dt, duration
    )

    times = np.empty(n)
    states = np.empty((n, 4))

    state = initial
    t = 0.0
    for i in range(n):
        if i > 0:
            state = rk4_step(state, constants, dt, g)
            t += dt
        times[i] = t
        states[i] = (state.theta1, state.theta2, state.omega1, state.omega2)

    if n > 0:
        logger.debug(
            "Time accumulator drift after %d steps: %.3e s",
            n,
            times[-1] - (n - 1) * dt,
        )
        if not np.all(np.isfinite(states)):
            logger.warning("Trajectory contains non-finite values")

    theta1, theta2, omega1, omega2 = states.T.copy()
    p1, p2 = to_positions(theta1, theta2, constants, scale)

    return Trajectory(
        times=times,
        theta1=theta1,
        theta2=theta2,
        omega1=omega1,
        omega2=omega2,
        x1=p1.x,
        y1=p1.y,
        x2=p2.x,
        y2=p2.y,
    )
