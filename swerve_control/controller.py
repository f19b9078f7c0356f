"""Discrete-time PID feedback controller.

This module provides the closed-loop half of the actuator pipeline: each
module azimuth and each wheel speed is driven by its own PIDController,
called once per control period with the latest measurement.
"""

import math
from typing import Dict

from .config import (
    DEFAULT_MAX_INTEGRAL,
    DEFAULT_MIN_INTEGRAL,
    DEFAULT_PERIOD,
    DEFAULT_POSITION_TOLERANCE,
    DEFAULT_VELOCITY_TOLERANCE,
)


def input_modulus(value: float, minimum: float, maximum: float) -> float:
    """Wrap a value into the half-open range [minimum, maximum).

    Boundaries are exact: maximum wraps to minimum, minimum stays minimum.

    Args:
        value: Value to wrap
        minimum: Lower bound of the range (inclusive)
        maximum: Upper bound of the range (exclusive)

    Returns:
        The value shifted by a whole number of periods into the range

    Example:
        >>> input_modulus(370.0, 0.0, 360.0)
        10.0
        >>> input_modulus(-190.0, -180.0, 180.0)
        170.0
    """
    modulus = maximum - minimum

    # Wrap value if it's above the range
    if value >= maximum:
        value -= math.floor((value - minimum) / modulus) * modulus

    # Wrap value if it's below the range
    if value < minimum:
        value += math.ceil((minimum - value) / modulus) * modulus

    # A value just below minimum can round up to exactly maximum
    if value >= maximum:
        value = minimum

    return value


class PIDController:
    """PID controller with continuous input and integrator anti-windup.

    Control law, evaluated once per period:
        output = kp * e + ki * integral(e) + kd * de/dt

    where e = setpoint - measurement (wrapped to the shortest way around when
    continuous input is enabled), integral(e) is accumulated as e * period and
    de/dt is the backward difference of e over one period.

    The accumulator is clamped so that ki * integral(e) stays inside the
    integrator range. While ki == 0 the accumulator is left untouched; a stale
    value resurfaces if ki is set back to a nonzero value. Gain changes never
    clear transient state, only reset() does.

    Attributes:
        kp: Proportional gain
        ki: Integral gain
        kd: Derivative gain
    """

    def __init__(self, kp: float, ki: float, kd: float, period: float = DEFAULT_PERIOD):
        """Initialize the controller.

        Args:
            kp: Proportional gain
            ki: Integral gain
            kd: Derivative gain
            period: Control loop period in seconds. Default: 0.02 (50 Hz)

        Raises:
            ValueError: If period is not positive.
        """
        if period <= 0:
            raise ValueError(f"Controller period must be > 0, got {period}")

        self.kp = kp
        self.ki = ki
        self.kd = kd
        self._period = period

        # Anti-windup limits on the integral term contribution
        self._minimum_integral = DEFAULT_MIN_INTEGRAL
        self._maximum_integral = DEFAULT_MAX_INTEGRAL

        # Continuous input range (only used when enabled)
        self._minimum_input = 0.0
        self._maximum_input = 0.0
        self._continuous = False

        self._position_tolerance = DEFAULT_POSITION_TOLERANCE
        self._velocity_tolerance = DEFAULT_VELOCITY_TOLERANCE

        # Transient state
        self._position_error = 0.0
        self._velocity_error = 0.0
        self._prev_error = 0.0
        self._total_error = 0.0
        self._setpoint = 0.0
        self._measurement = 0.0
        self._have_setpoint = False
        self._have_measurement = False

    def set_pid(self, kp: float, ki: float, kd: float) -> None:
        """Replace all three gains. Transient state is kept."""
        self.kp = kp
        self.ki = ki
        self.kd = kd

    @property
    def period(self) -> float:
        return self._period

    @property
    def setpoint(self) -> float:
        return self._setpoint

    @property
    def position_error(self) -> float:
        return self._position_error

    @property
    def velocity_error(self) -> float:
        return self._velocity_error

    @property
    def total_error(self) -> float:
        return self._total_error

    @property
    def position_tolerance(self) -> float:
        return self._position_tolerance

    @property
    def velocity_tolerance(self) -> float:
        return self._velocity_tolerance

    def set_setpoint(self, setpoint: float) -> None:
        """Set the target and preview the error against the last measurement.

        The previous error is not advanced, so the next calculate() still
        differentiates against the error it last computed.
        """
        self._setpoint = setpoint
        self._have_setpoint = True

        self._position_error = self._compute_error(self._measurement)
        self._velocity_error = (self._position_error - self._prev_error) / self._period

    def at_setpoint(self) -> bool:
        """Whether both errors are within tolerance.

        Always False until a setpoint and a measurement have been supplied.
        """
        return (
            self._have_measurement
            and self._have_setpoint
            and abs(self._position_error) < self._position_tolerance
            and abs(self._velocity_error) < self._velocity_tolerance
        )

    def enable_continuous_input(self, minimum_input: float, maximum_input: float) -> None:
        """Treat the input range as circular, e.g. [-π, π) for angles.

        The error then takes the shortest way around the range.
        """
        self._continuous = True
        self._minimum_input = minimum_input
        self._maximum_input = maximum_input

    def disable_continuous_input(self) -> None:
        self._continuous = False

    def is_continuous_input_enabled(self) -> bool:
        return self._continuous

    def set_integrator_range(self, minimum_integral: float, maximum_integral: float) -> None:
        """Bound the integral term contribution ki * integral(e)."""
        self._minimum_integral = minimum_integral
        self._maximum_integral = maximum_integral

    def set_tolerance(self, position_tolerance: float) -> None:
        """Set the position tolerance; velocity becomes unconstrained."""
        self.set_tolerances(position_tolerance, math.inf)

    def set_tolerances(self, position_tolerance: float, velocity_tolerance: float) -> None:
        self._position_tolerance = position_tolerance
        self._velocity_tolerance = velocity_tolerance

    def calculate(self, measurement: float) -> float:
        """Run one control step against a new measurement.

        Args:
            measurement: Current process variable

        Returns:
            Controller output
        """
        self._measurement = measurement
        self._have_measurement = True
        self._prev_error = self._position_error

        self._position_error = self._compute_error(measurement)
        self._velocity_error = (self._position_error - self._prev_error) / self._period

        if self.ki != 0:
            # Clamp the accumulator so the integral term stays in range
            low = self._minimum_integral / self.ki
            high = self._maximum_integral / self.ki
            if low > high:
                low, high = high, low
            self._total_error = max(
                low, min(high, self._total_error + self._position_error * self._period)
            )

        return (
            self.kp * self._position_error
            + self.ki * self._total_error
            + self.kd * self._velocity_error
        )

    def calculate_with_new_setpoint(self, measurement: float, setpoint: float) -> float:
        """Set a new setpoint, then run calculate()."""
        self._setpoint = setpoint
        self._have_setpoint = True
        return self.calculate(measurement)

    def reset(self) -> None:
        """Reset error and integral state.

        at_setpoint() stays False until the next calculate(). The setpoint
        itself is kept.
        """
        self._position_error = 0.0
        self._prev_error = 0.0
        self._total_error = 0.0
        self._velocity_error = 0.0
        self._have_measurement = False

    def get_diagnostics(self) -> Dict[str, float]:
        """Get diagnostic information for logging and debugging.

        Returns:
            Dictionary containing the gains and transient state
        """
        return {
            "kp": self.kp,
            "ki": self.ki,
            "kd": self.kd,
            "setpoint": self._setpoint,
            "measurement": self._measurement,
            "position_error": self._position_error,
            "velocity_error": self._velocity_error,
            "total_error": self._total_error,
        }

    def _compute_error(self, measurement: float) -> float:
        error = self._setpoint - measurement
        if self._continuous:
            error_bound = (self._maximum_input - self._minimum_input) / 2.0
            error = input_modulus(error, -error_bound, error_bound)
        return error
