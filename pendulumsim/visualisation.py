"""
visualisation.py

Playback of a precomputed Double Pendulum trajectory.
Positions are drawn in screen coordinates: origin top-left, +y down.
"""

from typing import Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.patches import Rectangle

from .config import SimulationConfig
from .physics import PhysicalConstants, wrap_angle
from .trajectory import Trajectory


BACKGROUND = (200 / 255, 200 / 255, 200 / 255)
PIVOT_COLOUR = (50 / 255, 50 / 255, 50 / 255)
MASS1_COLOUR = (12 / 255, 80 / 255, 140 / 255)
MASS2_COLOUR = (140 / 255, 12 / 255, 80 / 255)


def to_screen(
    trajectory: Trajectory, config: SimulationConfig
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Shifts pivot-relative positions so that the pivot sits at the window centre.

    Returns:
        x1, y1, x2, y2 in screen pixels.
    """
    cx, cy = config.pivot
    return (
        cx + trajectory.x1,
        cy + trajectory.y1,
        cx + trajectory.x2,
        cy + trajectory.y2,
    )


def mass_marker_size(mass: float) -> float:
    """Marker diameter in pixels, growing with the mass."""
    return mass * 4 + 10


def _setup_screen(config: SimulationConfig, ax: Optional[plt.Axes] = None):
    if ax is None:
        dpi = 100
        fig, ax = plt.subplots(
            figsize=(config.screen_width / dpi, config.screen_height / dpi), dpi=dpi
        )
    else:
        fig = ax.figure

    ax.set_xlim(0, config.screen_width)
    ax.set_ylim(config.screen_height, 0)  # screen y grows downward
    ax.set_aspect("equal")
    ax.set_facecolor(BACKGROUND)
    ax.set_xticks([])
    ax.set_yticks([])
    return fig, ax


def _draw_pivot(ax: plt.Axes, config: SimulationConfig) -> None:
    cx, cy = config.pivot
    half = config.pivot_size / 2
    ax.add_patch(
        Rectangle(
            (cx - half, cy - half),
            config.pivot_size,
            config.pivot_size,
            color=PIVOT_COLOUR,
            zorder=2,
        )
    )


def animate_trajectory(
    trajectory: Trajectory,
    constants: PhysicalConstants,
    config: SimulationConfig,
) -> FuncAnimation:
    """
    Frame-by-frame playback of the precomputed positions.
    Each mass is drawn with a size that grows with its weight. With
    config.trail_length > 0, a fading trail follows each mass.
    """
    x1, y1, x2, y2 = to_screen(trajectory, config)
    cx, cy = config.pivot

    fig, ax = _setup_screen(config)
    ax.set_title("Double Pendulum Simulator")
    _draw_pivot(ax, config)

    # Marker size is in points; 1 px = 72 / dpi points
    px_to_pt = 72 / fig.dpi

    (rods,) = ax.plot([], [], "k-", lw=1)
    (bob1,) = ax.plot(
        [], [], "o", c=MASS1_COLOUR, zorder=3,
        markersize=mass_marker_size(constants.mass1) * px_to_pt,
    )
    (bob2,) = ax.plot(
        [], [], "o", c=MASS2_COLOUR, zorder=3,
        markersize=mass_marker_size(constants.mass2) * px_to_pt,
    )
    (trail1,) = ax.plot([], [], "-", lw=1, c=MASS1_COLOUR, alpha=0.4)
    (trail2,) = ax.plot([], [], "-", lw=1, c=MASS2_COLOUR, alpha=0.4)

    time_text = ax.text(0.05, 0.92, "", transform=ax.transAxes)

    def update(i):
        # Update Rods
        rods.set_data([cx, x1[i], x2[i]], [cy, y1[i], y2[i]])
        bob1.set_data([x1[i]], [y1[i]])
        bob2.set_data([x2[i]], [y2[i]])

        # Update Trail
        if config.trail_length > 0:
            start = max(0, i - config.trail_length)
            trail1.set_data(x1[start:i], y1[start:i])
            trail2.set_data(x2[start:i], y2[start:i])

        time_text.set_text(f"t = {trajectory.times[i]:.2f}s")
        return rods, bob1, bob2, trail1, trail2, time_text

    return FuncAnimation(
        fig,
        update,
        frames=len(trajectory),
        interval=config.frame_interval_ms,
        blit=True,
        repeat=False,
    )


def plot_path_trace(
    trajectory: Trajectory,
    config: SimulationConfig,
    ax: Optional[plt.Axes] = None,
) -> plt.Axes:
    """
    Plots every recorded position of both masses, shown once playback ends.
    """
    x1, y1, x2, y2 = to_screen(trajectory, config)

    fig, ax = _setup_screen(config, ax)
    _draw_pivot(ax, config)

    ax.scatter(x1, y1, s=1, c=[MASS1_COLOUR], marker=".", label="Mass 1")
    ax.scatter(x2, y2, s=1, c=[MASS2_COLOUR], marker=".", label="Mass 2")
    ax.set_title("Double Pendulum Path")
    ax.legend(loc="upper right", markerscale=8)
    return ax


def plot_angles(trajectory: Trajectory, wrap: bool = True) -> None:
    """
    Plots theta1 and theta2 against time.

    Args:
        trajectory: Output of trajectory.generate.
        wrap: Wrap angles to [-pi, pi] for display.
    """
    th1, th2 = trajectory.theta1, trajectory.theta2
    if wrap:
        th1, th2 = wrap_angle(th1), wrap_angle(th2)

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.plot(trajectory.times, th1, c=MASS1_COLOUR, label=r"$\theta_1$")
    ax.plot(trajectory.times, th2, c=MASS2_COLOUR, label=r"$\theta_2$")
    ax.set_xlabel("Time [s]")
    ax.set_ylabel("Angle [rad]")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right")

    plt.tight_layout()
    plt.show()
