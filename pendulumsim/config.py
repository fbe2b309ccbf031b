"""
Configuration dataclass for double pendulum runs.

Groups the integration parameters (duration, step size, gravity) with the
display parameters (pixel scale, screen size, frame rate) so that a run can
be reproduced from a single JSON file.
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Tuple
import json
from pathlib import Path

from .physics import G
from .trajectory import SCALE, step_count


@dataclass
class SimulationConfig:
    """Configuration for a double pendulum simulation and its playback.

    Integration:
        duration: Simulated time [s]
        dt: Fixed RK4 step size [s]
        gravity: Gravitational acceleration [m/s^2]

    Display:
        scale: Pixels per metre
        screen_width: Window width [px]
        screen_height: Window height [px]
        frame_rate: Playback frames per second
        pivot_size: Side of the pivot square [px]
        trail_length: Number of past frames drawn behind each mass
            (0 = no trail during playback)

    Metadata:
        name: Short name for this configuration
        description: Longer description
    """

    # Integration
    duration: float = 60.0
    dt: float = 0.01
    gravity: float = G

    # Display
    scale: float = SCALE
    screen_width: int = 640
    screen_height: int = 480
    frame_rate: int = 60
    pivot_size: int = 10
    trail_length: int = 0

    # Metadata
    name: str = "default"
    description: str = "60 s at 100 steps per second"

    def __post_init__(self):
        """Validate parameters."""
        positive = [
            'duration', 'dt', 'gravity', 'scale',
            'screen_width', 'screen_height', 'frame_rate', 'pivot_size',
        ]
        for key in positive + ['trail_length']:
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{key} must be a number, got {value!r}")
        for key in positive:
            value = getattr(self, key)
            if value <= 0:
                raise ValueError(f"{key} must be positive, got {value}")
        if self.trail_length < 0:
            raise ValueError(
                f"trail_length must be non-negative, got {self.trail_length}"
            )
        if self.dt > self.duration:
            raise ValueError(
                f"dt ({self.dt}) must not exceed duration ({self.duration})"
            )

    @property
    def n_steps(self) -> int:
        """Number of recorded steps, round(duration / dt)."""
        return step_count(self.duration, self.dt)

    @property
    def pivot(self) -> Tuple[float, float]:
        """Screen position of the pivot (window centre)."""
        return self.screen_width / 2, self.screen_height / 2

    @property
    def frame_interval_ms(self) -> float:
        """Delay between playback frames in milliseconds."""
        return 1000 / self.frame_rate

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def save(self, path: Path) -> None:
        """Save configuration to JSON file."""
        path = Path(path)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Path) -> 'SimulationConfig':
        """Load configuration from JSON file."""
        path = Path(path)
        with open(path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path} does not contain a JSON object")
        known = {field.name for field in fields(cls)}
        for key in data:
            if key not in known:
                raise ValueError(f"Unknown parameter: {key}")
        return cls(**data)

    def copy(self, **changes) -> 'SimulationConfig':
        """
        Create a copy of this configuration with specified changes.

        Example:
            >>> base = SimulationConfig()
            >>> short = base.copy(duration=5.0)
        """
        d = self.to_dict()
        for key in changes:
            if key not in d:
                raise ValueError(f"Unknown parameter: {key}")
        d.update(changes)
        return SimulationConfig(**d)


# =============================================================================
# PRE-DEFINED CONFIGURATIONS
# =============================================================================

def get_default_config() -> SimulationConfig:
    """One minute at dt = 0.01 s, 640x480 window."""
    return SimulationConfig()


def get_fast_config() -> SimulationConfig:
    """Short run for quick checks."""
    return SimulationConfig(
        duration=10.0,
        name="fast",
        description="10 s at 100 steps per second",
    )


def get_high_resolution_config() -> SimulationConfig:
    """Ten times finer step for comparing against the default run."""
    return SimulationConfig(
        dt=0.001,
        name="high_resolution",
        description="60 s at 1000 steps per second",
    )
