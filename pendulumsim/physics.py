"""
physics.py

Lagrangian dynamics and coordinate transformations for the Double Pendulum.

State vector: y = [theta1, theta2, omega1, omega2]
Convention: 0 is vertically DOWN. +x is Right, +y is Down (screen axes).
"""

from dataclasses import dataclass
from typing import Iterator, Tuple, Union

import numpy as np
from scipy.linalg import eigh


G = 9.8  # standard gravitational acceleration [m/s^2]

Scalar = Union[float, np.ndarray]


# --- 1. Value Types ---


@dataclass(frozen=True)
class PhysicalConstants:
    """Masses [kg] and rod lengths [m] of the two links."""

    mass1: float
    mass2: float
    length1: float
    length2: float

    @property
    def reduced_mass_ratio(self) -> float:
        """M = m2 / (m1 + m2)."""
        return self.mass2 / (self.mass1 + self.mass2)


@dataclass(frozen=True)
class AngularState:
    """Angles [rad] and angular velocities [rad/s] of both links."""

    theta1: float
    theta2: float
    omega1: float = 0.0
    omega2: float = 0.0

    def to_array(self) -> np.ndarray:
        return np.array([self.theta1, self.theta2, self.omega1, self.omega2])

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "AngularState":
        return cls(
            theta1=float(arr[0]),
            theta2=float(arr[1]),
            omega1=float(arr[2]),
            omega2=float(arr[3]),
        )

    def advanced(self, k: "DerivativeSample", step: float) -> "AngularState":
        """
        Returns a new state y + step * k, where k is the time-derivative of y.

        Both angles and angular velocities move, so this is the staging
        operation of a second-order system written in first-order form.
        """
        return AngularState(
            theta1=self.theta1 + step * k.dtheta1,
            theta2=self.theta2 + step * k.dtheta2,
            omega1=self.omega1 + step * k.d2theta1,
            omega2=self.omega2 + step * k.d2theta2,
        )


@dataclass(frozen=True)
class DerivativeSample:
    """Instantaneous first and second time-derivatives of both angles."""

    dtheta1: float
    dtheta2: float
    d2theta1: float
    d2theta2: float

    def to_array(self) -> np.ndarray:
        return np.array([self.dtheta1, self.dtheta2, self.d2theta1, self.d2theta2])


@dataclass(frozen=True)
class CartesianPoint:
    """
    A 2D position. Components are floats, or arrays when the transform is
    applied to a whole angle history at once.
    """

    x: Scalar
    y: Scalar

    def __iter__(self) -> Iterator[Scalar]:
        yield self.x
        yield self.y

    def __add__(self, other: "CartesianPoint") -> "CartesianPoint":
        return CartesianPoint(self.x + other.x, self.y + other.y)

    def __eq__(self, other) -> bool:
        if isinstance(other, (CartesianPoint, tuple)):
            ox, oy = other
            return bool(np.all(self.x == ox) and np.all(self.y == oy))
        return NotImplemented


# --- 2. Coordinate Transformations ---


def deg_to_rad(theta_deg: Scalar) -> Scalar:
    """Converts degrees to radians."""
    return theta_deg * np.pi / 180.0


def wrap_angle(theta: Scalar) -> Scalar:
    """
    Wraps an angle or array of angles to the interval [-pi, pi].
    Only used for display; the integrated angles are never normalised.
    """
    return (theta + np.pi) % (2 * np.pi) - np.pi


def to_cartesian(angle: Scalar, length: Scalar) -> CartesianPoint:
    """
    Converts a polar angle (measured from straight down) and rod length to a
    Cartesian offset from that rod's own pivot.

    The offset of the second rod is relative to the first mass; callers
    add the two points to get its absolute position.
    """
    return CartesianPoint(x=length * np.sin(angle), y=length * np.cos(angle))


# --- 3. Equations of Motion ---


def derivative(
    state: AngularState, constants: PhysicalConstants, g: float = G
) -> DerivativeSample:
    """
    Lagrange's Equations of Motion for the Double Pendulum, solved in closed
    form for the two angular accelerations.

    The accelerations satisfy the coupled linear system

        th1'' + alpha1 * th2'' = f1
        alpha2 * th1'' + th2'' = f2

    which is inverted directly by Cramer's rule.

    Args:
        state: Current angles and angular velocities.
        constants: Masses and rod lengths.
        g: Gravitational acceleration.

    Returns:
        DerivativeSample [dth1, dth2, d2th1, d2th2].

    Note:
        denom = 1 - alpha1 * alpha2 = 1 - M cos^2(th1 - th2) >= m1 / (m1 + m2),
        so it only approaches zero as m1 -> 0. It is not guarded: a vanishing
        denominator yields inf/nan, which flows on into the trajectory.
    """
    l1, l2 = constants.length1, constants.length2
    M = constants.reduced_mass_ratio

    d_th = np.float64(state.theta1 - state.theta2)
    c, s = np.cos(d_th), np.sin(d_th)

    # Generalised forces (velocity coupling + gravity)
    f1 = -(l2 / l1) * M * state.omega2**2 * s - (g / l1) * np.sin(state.theta1)
    f2 = (l1 / l2) * state.omega1**2 * s - (g / l2) * np.sin(state.theta2)

    # Inertial coupling
    alpha1 = (l2 / l1) * M * c
    alpha2 = (l1 / l2) * c
    denom = 1 - alpha1 * alpha2

    return DerivativeSample(
        dtheta1=state.omega1,
        dtheta2=state.omega2,
        d2theta1=(f1 - alpha1 * f2) / denom,
        d2theta2=(-alpha2 * f1 + f2) / denom,
    )


# --- 4. Energy Diagnostics ---


def kinetic_energy(
    theta1: Scalar,
    theta2: Scalar,
    omega1: Scalar,
    omega2: Scalar,
    constants: PhysicalConstants,
) -> Scalar:
    """
    T = 0.5(m1+m2)(L1 w1)^2 + 0.5 m2 (L2 w2)^2 + m2 L1 L2 w1 w2 cos(th1-th2)
    """
    m1, m2 = constants.mass1, constants.mass2
    L1, L2 = constants.length1, constants.length2
    return (
        0.5 * (m1 + m2) * (L1 * omega1) ** 2
        + 0.5 * m2 * (L2 * omega2) ** 2
        + m2 * L1 * L2 * omega1 * omega2 * np.cos(theta1 - theta2)
    )


def potential_energy(
    theta1: Scalar, theta2: Scalar, constants: PhysicalConstants, g: float = G
) -> Scalar:
    """
    Gravitational potential energy, zero at the hanging equilibrium.
    """
    m1, m2 = constants.mass1, constants.mass2
    L1, L2 = constants.length1, constants.length2
    # Heights above the lowest reachable position of each bob
    h1 = L1 * (1 - np.cos(theta1))
    h2 = L1 * (1 - np.cos(theta1)) + L2 * (1 - np.cos(theta2))
    return m1 * g * h1 + m2 * g * h2


def total_energy(
    theta1: Scalar,
    theta2: Scalar,
    omega1: Scalar,
    omega2: Scalar,
    constants: PhysicalConstants,
    g: float = G,
) -> Scalar:
    """Total mechanical energy T + V. Accepts scalars or arrays."""
    return kinetic_energy(theta1, theta2, omega1, omega2, constants) + (
        potential_energy(theta1, theta2, constants, g)
    )


def normal_mode_frequencies(
    constants: PhysicalConstants, g: float = G
) -> Tuple[float, float]:
    """
    Angular frequencies (slow, fast) of the linearised system about (0,0,0,0).
    """
    m1, m2 = constants.mass1, constants.mass2
    L1, L2 = constants.length1, constants.length2

    # Mass and stiffness matrices at equilibrium
    mass = np.array([[(m1 + m2) * L1**2, m2 * L1 * L2], [m2 * L1 * L2, m2 * L2**2]])
    stiffness = np.array([[(m1 + m2) * g * L1, 0.0], [0.0, m2 * g * L2]])

    # Generalised symmetric eigenproblem K v = w^2 M v (ascending)
    slow, fast = np.sqrt(eigh(stiffness, mass, eigvals_only=True))
    return float(slow), float(fast)
