"""
integrator.py

Fixed-step fourth-order Runge-Kutta integration of the Double Pendulum.
"""

from .physics import G, AngularState, PhysicalConstants, derivative


def rk4_step(
    state: AngularState, constants: PhysicalConstants, dt: float, g: float = G
) -> AngularState:
    """
    Advances the state by one time step with classic RK4.

        k1 = f(y)
        k2 = f(y + dt/2 * k1)
        k3 = f(y + dt/2 * k2)
        k4 = f(y + dt   * k3)
        y_next = y + dt/6 * (k1 + 2 k2 + 2 k3 + k4)

    Each stage state carries the velocities as well as the angles, and is a
    fresh value built from the previous stage's slope.

    Args:
        state: State at time t. Not modified.
        constants: Masses and rod lengths.
        dt: Step size [s].
        g: Gravitational acceleration.

    Returns:
        The state at time t + dt.
    """
    k1 = derivative(state, constants, g)
    k2 = derivative(state.advanced(k1, 0.5 * dt), constants, g)
    k3 = derivative(state.advanced(k2, 0.5 * dt), constants, g)
    k4 = derivative(state.advanced(k3, dt), constants, g)

    w = dt / 6
    return AngularState(
        theta1=state.theta1
        + w * (k1.dtheta1 + 2 * k2.dtheta1 + 2 * k3.dtheta1 + k4.dtheta1),
        theta2=state.theta2
        + w * (k1.dtheta2 + 2 * k2.dtheta2 + 2 * k3.dtheta2 + k4.dtheta2),
        omega1=state.omega1
        + w * (k1.d2theta1 + 2 * k2.d2theta1 + 2 * k3.d2theta1 + k4.d2theta1),
        omega2=state.omega2
        + w * (k1.d2theta2 + 2 * k2.d2theta2 + 2 * k3.d2theta2 + k4.d2theta2),
    )
