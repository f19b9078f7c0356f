"""Configuration parameters for the swerve control library.

This module centralizes the default parameters including:
- Control loop timing
- PID controller defaults
- Physical drivetrain geometry and limits
- Gains used by the reference drivetrain pipeline
- Terminal output settings

All parameters are documented with their purpose and units. Classes take
these values as keyword defaults, so callers override them per instance.
"""

import math

# ============================================================================
# Control Loop Timing
# ============================================================================

DEFAULT_PERIOD = 0.02
"""Control loop period (seconds).

The scheduler invokes the control pipeline once per period (50 Hz).
Must be > 0 since the PID derivative term divides by it.
"""


# ============================================================================
# PID Controller Defaults
# ============================================================================

DEFAULT_POSITION_TOLERANCE = 0.05
"""Position error tolerance for PIDController.at_setpoint() (input units)."""

DEFAULT_VELOCITY_TOLERANCE = math.inf
"""Velocity error tolerance for PIDController.at_setpoint() (input units/s).

Infinite by default so only the position error decides.
"""

DEFAULT_MIN_INTEGRAL = -1.0
"""Lower bound of the integral term contribution ki * total_error."""

DEFAULT_MAX_INTEGRAL = 1.0
"""Upper bound of the integral term contribution ki * total_error.

Anti-windup: the accumulator is clamped so the integral term never leaves
[DEFAULT_MIN_INTEGRAL, DEFAULT_MAX_INTEGRAL].
"""


# ============================================================================
# Physical Drivetrain Parameters
# ============================================================================

NUM_MODULES = 4
"""Number of swerve modules on the drivetrain. Fixed by hardware."""

WHEEL_OFFSETS = (
    (0.3, 0.3),    # front left
    (0.3, -0.3),   # front right
    (-0.3, 0.3),   # back left
    (-0.3, -0.3),  # back right
)
"""Wheel positions (meters) relative to the robot center, robot frame.

x points forward, y points left. Wheels must not all share one point,
otherwise the kinematics matrix is rank deficient.
"""

MAX_MODULE_SPEED = 4.5
"""Maximum attainable wheel speed (m/s). Hardware limit used for desaturation."""


# ============================================================================
# Reference Drivetrain Gains
# ============================================================================

STEER_KP = 4.0
"""Proportional gain for module azimuth control (output per radian)."""

STEER_KI = 0.0
"""Integral gain for module azimuth control."""

STEER_KD = 0.05
"""Derivative gain for module azimuth control."""

STEER_TOLERANCE = 0.01
"""Azimuth tolerance (radians) for at_setpoint()."""

DRIVE_KP = 0.1
"""Proportional gain for wheel speed correction (volts per m/s)."""

DRIVE_KI = 0.0
"""Integral gain for wheel speed correction."""

DRIVE_KD = 0.0
"""Derivative gain for wheel speed correction."""

DRIVE_KS = 0.2
"""Static friction feedforward (volts).

Applied with the sign of the commanded velocity; zero at rest.
"""

DRIVE_KV = 2.5
"""Velocity feedforward (volts per m/s)."""

DRIVE_KA = 0.3
"""Acceleration feedforward (volts per m/s²)."""


# ============================================================================
# Terminal Output
# ============================================================================

TERM_BLUE = "\033[38;2;35;116;247m"
"""ANSI color for highlighted CLI output."""

TERM_ORANGE = "\033[38;2;247;72;35m"
"""ANSI color for CLI warnings and errors."""

TERM_RESET = "\033[0m"
"""ANSI reset sequence."""
