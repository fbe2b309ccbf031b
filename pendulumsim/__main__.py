"""
Command line driver: prompt for initial conditions, integrate, play back.

Usage:
    python -m pendulumsim [--config PATH] [--duration S] [--dt S]
                          [--no-display] [--save-path PATH] [--verbose]
"""

import argparse
import logging
import sys
from pathlib import Path

import matplotlib.pyplot as plt

from .conditions import prompt_initial_conditions
from .config import SimulationConfig
from .trajectory import generate
from .visualisation import animate_trajectory, plot_path_trace

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pendulumsim", description="Double pendulum simulator"
    )
    parser.add_argument('--config', type=str, default=None,
                        help='Path to a JSON SimulationConfig')
    parser.add_argument('--duration', type=float, default=None,
                        help='Simulated time in seconds')
    parser.add_argument('--dt', type=float, default=None,
                        help='Integration step in seconds')
    parser.add_argument('--no-display', action='store_true',
                        help='Compute the trajectory without opening a window')
    parser.add_argument('--save-path', type=str, default=None,
                        help='Save the path trace figure to this file')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging')
    return parser


def load_config(args: argparse.Namespace) -> SimulationConfig:
    config = SimulationConfig.load(Path(args.config)) if args.config else SimulationConfig()
    changes = {}
    if args.duration is not None:
        changes['duration'] = args.duration
    if args.dt is not None:
        changes['dt'] = args.dt
    return config.copy(**changes) if changes else config


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    try:
        config = load_config(args)
    except (OSError, ValueError, TypeError) as e:
        logger.error("Could not load configuration: %s", e)
        return 1

    try:
        conditions = prompt_initial_conditions()
    except EOFError:
        logger.error("Failed to read input from user.")
        return 1

    initial, constants = conditions.to_simulation()
    logger.info("Initial conditions: %s", conditions)

    trajectory = generate(
        initial,
        constants,
        config.duration,
        config.dt,
        scale=config.scale,
        g=config.gravity,
    )
    logger.info("Generated %d frames", len(trajectory))

    if not args.no_display:
        anim = animate_trajectory(trajectory, constants, config)  # noqa: F841
        plt.show()

    if args.save_path or not args.no_display:
        ax = plot_path_trace(trajectory, config)
        if args.save_path:
            ax.figure.savefig(args.save_path)
            logger.info("Path trace saved to %s", args.save_path)
        if not args.no_display:
            plt.show()
        plt.close("all")

    return 0


if __name__ == '__main__':
    sys.exit(main())
