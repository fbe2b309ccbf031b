"""
Acquisition and validation of the initial conditions entered by the user.

Values are read in user units (kg, cm, degrees) and converted to SI units
only when handed to the simulation.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .physics import AngularState, PhysicalConstants, deg_to_rad

logger = logging.getLogger(__name__)

MAX_INPUT_LENGTH = 6  # includes the line terminator

PROMPTS = [
    "Mass of 1st pendulum (0<m<10 kg): ",
    "Mass of 2nd pendulum (0<m<10 kg): ",
    "Length of 1st pendulum (10<l<100 cm): ",
    "Length of 2nd pendulum (10<l<100 cm): ",
    "Initial angle of 1st pendulum (0<a<180 deg): ",
    "Initial angle of 2nd pendulum (0<a<180 deg): ",
]

MASS_RANGE = (0.0, 10.0)  # exclusive lower bound
LENGTH_RANGE_CM = (10.0, 100.0)
ANGLE_RANGE_DEG = (0.0, 180.0)


class InvalidInputError(ValueError):
    """Raised when an entered value cannot be used as an initial condition."""


@dataclass(frozen=True)
class InitialConditions:
    """Initial conditions as entered: masses [kg], lengths [cm], angles [deg]."""

    mass1: float
    mass2: float
    length1_cm: float
    length2_cm: float
    angle1_deg: float
    angle2_deg: float

    def to_simulation(self) -> Tuple[AngularState, PhysicalConstants]:
        """
        Converts to SI units. Both bobs start at rest.
        """
        constants = PhysicalConstants(
            mass1=self.mass1,
            mass2=self.mass2,
            length1=self.length1_cm / 100,
            length2=self.length2_cm / 100,
        )
        state = AngularState(
            theta1=deg_to_rad(self.angle1_deg),
            theta2=deg_to_rad(self.angle2_deg),
            omega1=0.0,
            omega2=0.0,
        )
        return state, constants


def parse_value(text: str) -> float:
    """
    Parses one line of user input as a number.

    Raises:
        InvalidInputError: If the line is empty, does not fit in
            MAX_INPUT_LENGTH characters together with its newline, or is
            not a number.
    """
    value = text.strip()
    if len(value) == 0:
        raise InvalidInputError("Invalid input: enter a number.")
    if len(value) > MAX_INPUT_LENGTH - 1:
        raise InvalidInputError("Invalid input: too long.")
    try:
        return float(value)
    except ValueError:
        raise InvalidInputError("Invalid input: non-number character.") from None


def validate_initial_conditions(values: Sequence[float]) -> InitialConditions:
    """
    Checks six values [m1, m2, l1, l2, a1, a2] against their allowed ranges.

    Masses must lie in (0, 10] kg, lengths in [10, 100] cm and angles in
    [0, 180] degrees.

    Raises:
        InvalidInputError: If a value is out of range or the count is wrong.
    """
    if len(values) != len(PROMPTS):
        raise InvalidInputError(
            f"Expected {len(PROMPTS)} values, got {len(values)}."
        )
    m1, m2, l1, l2, a1, a2 = values

    lo, hi = MASS_RANGE
    if not (lo < m1 <= hi and lo < m2 <= hi):
        raise InvalidInputError("Invalid input: mass out of range.")
    lo, hi = LENGTH_RANGE_CM
    if not (lo <= l1 <= hi and lo <= l2 <= hi):
        raise InvalidInputError("Invalid input: length out of range.")
    lo, hi = ANGLE_RANGE_DEG
    if not (lo <= a1 <= hi and lo <= a2 <= hi):
        raise InvalidInputError("Invalid input: angle out of range.")

    return InitialConditions(m1, m2, l1, l2, a1, a2)


def prompt_initial_conditions(
    input_fn: Optional[Callable[[str], str]] = None,
    output_fn: Optional[Callable[[str], None]] = None,
) -> InitialConditions:
    """
    Asks for the six initial conditions until a valid set is entered.

    Any invalid entry restarts the sequence from the first prompt.

    Args:
        input_fn: Reads one line given a prompt, input() by default. Raises
            EOFError at end of input.
        output_fn: Writes one message line, print() by default.

    Returns:
        The validated initial conditions.
    """
    input_fn = input_fn or input
    output_fn = output_fn or print

    output_fn(
        "Welcome to the double pendulum simulator. "
        "Specify your initial conditions:"
    )
    while True:
        values: List[float] = []
        try:
            for prompt in PROMPTS:
                values.append(parse_value(input_fn(prompt)))
            conditions = validate_initial_conditions(values)
        except InvalidInputError as e:
            logger.debug("Rejected initial conditions %s: %s", values, e)
            output_fn(f"{e} Please try again.")
            continue
        return conditions
