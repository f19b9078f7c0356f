"""
Command-line demo: run the swerve drivetrain pipeline in simulation.

    python -m swerve_control --vx 1.0 --omega 0.5 --cycles 50
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import DEFAULT_PERIOD, MAX_MODULE_SPEED, TERM_BLUE, TERM_ORANGE, TERM_RESET
from .drivetrain import SwerveDrivetrain
from .geometry import Vector2
from .speeds import ChassisSpeeds


class CustomFormatter(logging.Formatter):
    """Formatter for simulation output.

    Wall-clock timestamps mean nothing in a simulated run, so none are shown.
    INFO records print bare; every other level is tagged with its level and
    source module, and warnings and errors are highlighted.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno == logging.INFO:
            return message
        tagged = f"[{record.levelname}] {record.module}: {message}"
        if record.levelno >= logging.WARNING:
            return f"{TERM_ORANGE}{tagged}{TERM_RESET}"
        return tagged


def setup_logging(verbose: bool = False) -> None:
    """Route log records to stderr through CustomFormatter.

    Args:
        verbose: If True, include DEBUG records (matrix rebuilds,
                 desaturation) in the output.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(CustomFormatter())
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate the swerve drivetrain control pipeline for a fixed command"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Include debug records in the output"
    )
    parser.add_argument("--vx", type=float, default=1.0, help="Forward speed (m/s)")
    parser.add_argument("--vy", type=float, default=0.0, help="Leftward speed (m/s)")
    parser.add_argument("--omega", type=float, default=0.0, help="Angular speed (rad/s)")
    parser.add_argument("--cor-x", type=float, default=0.0, help="Center of rotation x (m)")
    parser.add_argument("--cor-y", type=float, default=0.0, help="Center of rotation y (m)")
    parser.add_argument("--cycles", type=int, default=50, help="Number of control cycles")
    parser.add_argument(
        "--max-speed", type=float, default=MAX_MODULE_SPEED, help="Attainable wheel speed (m/s)"
    )
    return parser


def run(args: argparse.Namespace) -> SwerveDrivetrain:
    """Run the simulated control loop and log the final state."""
    drivetrain = SwerveDrivetrain(max_module_speed=args.max_speed)
    drivetrain.drive(
        ChassisSpeeds(args.vx, args.vy, args.omega), Vector2(args.cor_x, args.cor_y)
    )

    for _ in range(args.cycles):
        drivetrain.periodic()
        drivetrain.simulation_periodic()

    elapsed = args.cycles * DEFAULT_PERIOD
    logging.info(f"{TERM_BLUE}After {args.cycles} cycles ({elapsed:.2f}s):{TERM_RESET}")
    for i, (state, command, position) in enumerate(
        zip(drivetrain.target_states, drivetrain.commands, drivetrain.module_positions)
    ):
        logging.info(
            f"  module {i}: speed={state.speed:.3f} m/s  angle={state.angle.radians():+.3f} rad  "
            f"steer={command.steer_output:+.3f}  drive={command.drive_output:+.3f}  "
            f"distance={position.distance:.3f} m"
        )

    estimate = drivetrain.estimated_speeds
    logging.info(
        f"{TERM_BLUE}Estimated chassis speeds: vx={estimate.vx:.3f} vy={estimate.vy:.3f} "
        f"omega={estimate.omega:.3f}{TERM_RESET}"
    )
    return drivetrain


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        run(args)
    except ValueError as e:
        logging.error(f"Invalid drivetrain configuration: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
