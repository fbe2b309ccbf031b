"""
pendulumsim: fixed-step RK4 simulation and playback of a frictionless
double pendulum.
"""

# --- Physics ---
from .physics import (
    G,
    PhysicalConstants,
    AngularState,
    DerivativeSample,
    CartesianPoint,
    to_cartesian,
    derivative,
    deg_to_rad,
    wrap_angle,
    kinetic_energy,
    potential_energy,
    total_energy,
    normal_mode_frequencies,
)

# --- Integration ---
from .integrator import rk4_step

from .trajectory import (
    SCALE,
    Trajectory,
    generate,
    step_count,
    to_positions,
)

# --- Configuration & Input ---
from .config import (
    SimulationConfig,
    get_default_config,
    get_fast_config,
    get_high_resolution_config,
)

from .conditions import (
    InitialConditions,
    InvalidInputError,
    parse_value,
    validate_initial_conditions,
    prompt_initial_conditions,
)

# --- Visualisation ---
from .visualisation import (
    to_screen,
    mass_marker_size,
    animate_trajectory,
    plot_path_trace,
    plot_angles,
)

__all__ = [
    # Physics
    "G",
    "PhysicalConstants",
    "AngularState",
    "DerivativeSample",
    "CartesianPoint",
    "to_cartesian",
    "derivative",
    "deg_to_rad",
    "wrap_angle",
    "kinetic_energy",
    "potential_energy",
    "total_energy",
    "normal_mode_frequencies",
    # Integration
    "rk4_step",
    "SCALE",
    "Trajectory",
    "generate",
    "step_count",
    "to_positions",
    # Configuration & Input
    "SimulationConfig",
    "get_default_config",
    "get_fast_config",
    "get_high_resolution_config",
    "InitialConditions",
    "InvalidInputError",
    "parse_value",
    "validate_initial_conditions",
    "prompt_initial_conditions",
    # Visualisation
    "to_screen",
    "mass_marker_size",
    "animate_trajectory",
    "plot_path_trace",
    "plot_angles",
]
