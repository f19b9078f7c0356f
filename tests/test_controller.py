"""
Tests for the PID controller and the input modulus helper.

Covers the control law, continuous-input wrap-around, integrator
anti-windup, setpoint tolerance and reset semantics.
"""

import math

import pytest
from swerve_control.controller import PIDController, input_modulus


class TestInputModulus:
    """Test wrapping values into [minimum, maximum)."""

    def test_value_in_range_is_unchanged(self):
        assert input_modulus(0.5, 0.0, 1.0) == 0.5
        assert input_modulus(-170.0, -180.0, 180.0) == -170.0

    def test_maximum_wraps_to_minimum(self):
        assert input_modulus(1.0, 0.0, 1.0) == 0.0
        assert input_modulus(math.pi, -math.pi, math.pi) == -math.pi

    def test_minimum_stays_minimum(self):
        assert input_modulus(0.0, 0.0, 1.0) == 0.0
        assert input_modulus(-180.0, -180.0, 180.0) == -180.0

    def test_wraps_values_above_range(self):
        assert input_modulus(370.0, 0.0, 360.0) == pytest.approx(10.0)
        assert input_modulus(725.0, 0.0, 360.0) == pytest.approx(5.0)

    def test_wraps_values_below_range(self):
        assert input_modulus(-190.0, -180.0, 180.0) == pytest.approx(170.0)
        assert input_modulus(-725.0, 0.0, 360.0) == pytest.approx(355.0)

    def test_angle_wrap(self):
        assert input_modulus(3.0 * math.pi / 2.0, -math.pi, math.pi) == pytest.approx(-math.pi / 2.0)

    def test_tiny_value_below_minimum_stays_in_range(self):
        once = input_modulus(-1e-17, 0.0, 1.0)
        assert 0.0 <= once < 1.0
        assert input_modulus(once, 0.0, 1.0) == once

    @pytest.mark.parametrize(
        "minimum, maximum",
        [(0.0, 1.0), (-math.pi, math.pi), (-180.0, 180.0), (0.0, 360.0)],
    )
    def test_one_ulp_outside_bounds(self, minimum, maximum):
        """Values one float step past either bound wrap into the half-open range."""
        for value in (math.nextafter(minimum, -math.inf), math.nextafter(maximum, math.inf)):
            once = input_modulus(value, minimum, maximum)
            twice = input_modulus(once, minimum, maximum)
            assert minimum <= once < maximum
            assert twice == once

    @pytest.mark.parametrize("value", [-1000.3, -7.0, -math.pi, -0.1, 0.0, 2.5, math.pi, 9.9, 1234.5])
    def test_idempotent(self, value):
        """Wrapping an already wrapped value changes nothing."""
        once = input_modulus(value, -math.pi, math.pi)
        twice = input_modulus(once, -math.pi, math.pi)
        assert twice == pytest.approx(once)
        assert -math.pi <= once < math.pi


class TestConstruction:
    """Test controller construction and configuration."""

    def test_default_period(self):
        pid = PIDController(1.0, 0.0, 0.0)
        assert pid.period == pytest.approx(0.02)

    def test_custom_period(self):
        pid = PIDController(1.0, 0.0, 0.0, period=0.05)
        assert pid.period == pytest.approx(0.05)

    @pytest.mark.parametrize("period", [0.0, -0.02])
    def test_non_positive_period_rejected(self, period):
        with pytest.raises(ValueError):
            PIDController(1.0, 0.0, 0.0, period=period)

    def test_default_tolerances(self):
        pid = PIDController(1.0, 0.0, 0.0)
        assert pid.position_tolerance == pytest.approx(0.05)
        assert pid.velocity_tolerance == math.inf

    def test_set_pid_replaces_gains(self):
        pid = PIDController(1.0, 2.0, 3.0)
        pid.set_pid(4.0, 5.0, 6.0)
        assert (pid.kp, pid.ki, pid.kd) == (4.0, 5.0, 6.0)


class TestControlLaw:
    """Test the proportional, integral and derivative terms."""

    def test_proportional(self):
        pid = PIDController(2.0, 0.0, 0.0)
        pid.set_setpoint(10.0)
        assert pid.calculate(4.0) == pytest.approx(12.0)
        assert pid.position_error == pytest.approx(6.0)

    def test_derivative_uses_period(self):
        pid = PIDController(0.0, 0.0, 1.0)
        output = pid.calculate_with_new_setpoint(0.0, 1.0)
        assert pid.velocity_error == pytest.approx(50.0)
        assert output == pytest.approx(50.0)

    def test_integral_accumulates_error_times_period(self):
        pid = PIDController(0.0, 1.0, 0.0, period=0.1)
        pid.set_setpoint(1.0)
        assert pid.calculate(0.0) == pytest.approx(0.1)
        assert pid.calculate(0.0) == pytest.approx(0.2)
        assert pid.total_error == pytest.approx(0.2)

    def test_calculate_with_new_setpoint(self):
        pid = PIDController(1.0, 0.0, 0.0)
        assert pid.calculate_with_new_setpoint(2.0, 5.0) == pytest.approx(3.0)
        assert pid.setpoint == 5.0

    def test_set_setpoint_previews_error_against_last_measurement(self):
        pid = PIDController(1.0, 0.0, 0.0)
        pid.calculate_with_new_setpoint(2.0, 5.0)

        pid.set_setpoint(10.0)
        assert pid.position_error == pytest.approx(8.0)
        # Previous error was not advanced by the preview
        assert pid.velocity_error == pytest.approx((8.0 - 0.0) / 0.02)

        # calculate() differentiates against the previewed error
        assert pid.calculate(2.0) == pytest.approx(8.0)
        assert pid.velocity_error == pytest.approx(0.0)


class TestAntiWindup:
    """Test integrator clamping."""

    def test_integral_term_clamped_to_range(self):
        pid = PIDController(0.0, 0.5, 0.0)
        pid.set_integrator_range(-0.2, 0.2)
        pid.set_setpoint(100.0)

        for _ in range(1000):
            output = pid.calculate(0.0)
            assert output <= 0.2 + 1e-12

        assert output == pytest.approx(0.2)
        assert pid.ki * pid.total_error == pytest.approx(0.2)

    def test_negative_error_clamped_to_lower_bound(self):
        pid = PIDController(0.0, 0.5, 0.0)
        pid.set_integrator_range(-0.2, 0.2)
        pid.set_setpoint(-100.0)

        for _ in range(1000):
            output = pid.calculate(0.0)

        assert output == pytest.approx(-0.2)

    def test_default_integrator_range(self):
        pid = PIDController(0.0, 2.0, 0.0)
        pid.set_setpoint(50.0)
        for _ in range(500):
            output = pid.calculate(0.0)
        assert output == pytest.approx(1.0)

    def test_negative_ki_clamps_integral_term(self):
        pid = PIDController(0.0, -1.0, 0.0)
        pid.set_setpoint(100.0)
        for _ in range(500):
            output = pid.calculate(0.0)
            assert -1.0 - 1e-12 <= output <= 1.0 + 1e-12
        assert output == pytest.approx(-1.0)

    def test_zero_ki_leaves_accumulator_untouched(self):
        pid = PIDController(0.0, 1.0, 0.0, period=0.1)
        pid.set_setpoint(1.0)
        pid.calculate(0.0)
        pid.calculate(0.0)

        pid.ki = 0.0
        assert pid.calculate(0.0) == pytest.approx(0.0)
        assert pid.total_error == pytest.approx(0.2)

        # Stale accumulator resurfaces when ki comes back
        pid.ki = 1.0
        assert pid.calculate(0.0) == pytest.approx(0.3)

    def test_gain_change_keeps_state(self):
        pid = PIDController(1.0, 1.0, 0.0, period=0.1)
        pid.set_setpoint(1.0)
        pid.calculate(0.0)
        pid.set_pid(2.0, 2.0, 0.0)
        assert pid.total_error == pytest.approx(0.1)
        assert pid.position_error == pytest.approx(1.0)


class TestContinuousInput:
    """Test wrap-around error computation."""

    def test_error_takes_shortest_path(self):
        pid = PIDController(1.0, 0.0, 0.0)
        pid.enable_continuous_input(-math.pi, math.pi)
        output = pid.calculate_with_new_setpoint(-math.pi + 0.1, math.pi - 0.1)
        assert output == pytest.approx(-0.2)

    def test_degrees(self):
        pid = PIDController(1.0, 0.0, 0.0)
        pid.enable_continuous_input(0.0, 360.0)
        assert pid.calculate_with_new_setpoint(350.0, 10.0) == pytest.approx(20.0)

    def test_set_setpoint_wraps_error(self):
        pid = PIDController(1.0, 0.0, 0.0)
        pid.enable_continuous_input(0.0, 360.0)
        pid.calculate(350.0)
        pid.set_setpoint(10.0)
        assert pid.position_error == pytest.approx(20.0)

    def test_disabled_uses_plain_difference(self):
        pid = PIDController(1.0, 0.0, 0.0)
        pid.enable_continuous_input(-math.pi, math.pi)
        pid.disable_continuous_input()
        output = pid.calculate_with_new_setpoint(-math.pi + 0.1, math.pi - 0.1)
        assert output == pytest.approx(2.0 * math.pi - 0.2)

    def test_mode_reporting(self):
        pid = PIDController(1.0, 0.0, 0.0)
        assert not pid.is_continuous_input_enabled()
        pid.enable_continuous_input(-math.pi, math.pi)
        assert pid.is_continuous_input_enabled()
        pid.disable_continuous_input()
        assert not pid.is_continuous_input_enabled()


class TestAtSetpoint:
    """Test tolerance checks and reset semantics."""

    def test_false_before_any_input(self):
        pid = PIDController(1.0, 0.0, 0.0)
        assert not pid.at_setpoint()

    def test_false_with_only_setpoint(self):
        pid = PIDController(1.0, 0.0, 0.0)
        pid.set_setpoint(0.0)
        assert not pid.at_setpoint()

    def test_false_with_only_measurement(self):
        pid = PIDController(1.0, 0.0, 0.0)
        pid.calculate(0.0)
        assert not pid.at_setpoint()

    def test_true_once_both_supplied(self):
        pid = PIDController(1.0, 0.0, 0.0)
        pid.set_setpoint(0.0)
        pid.calculate(0.0)
        assert pid.at_setpoint()

    def test_velocity_tolerance(self):
        pid = PIDController(1.0, 0.0, 0.0)
        pid.set_tolerances(0.1, 0.5)
        pid.set_setpoint(1.0)

        # Error dropped from 1.0 to 0.05 in one period: still moving fast
        pid.calculate(0.95)
        assert not pid.at_setpoint()

        pid.calculate(0.95)
        assert pid.at_setpoint()

    def test_set_tolerance_unconstrains_velocity(self):
        pid = PIDController(1.0, 0.0, 0.0)
        pid.set_tolerances(0.1, 0.5)
        pid.set_tolerance(0.2)
        assert pid.position_tolerance == pytest.approx(0.2)
        assert pid.velocity_tolerance == math.inf

    def test_outside_position_tolerance(self):
        pid = PIDController(1.0, 0.0, 0.0)
        pid.set_setpoint(1.0)
        pid.calculate(0.5)
        assert not pid.at_setpoint()

    def test_reset_clears_state_and_keeps_setpoint(self):
        pid = PIDController(1.0, 1.0, 0.0)
        pid.set_setpoint(3.0)
        pid.calculate(3.0)
        pid.calculate(2.0)
        assert pid.total_error != 0.0

        pid.reset()
        assert pid.position_error == 0.0
        assert pid.velocity_error == 0.0
        assert pid.total_error == 0.0
        assert pid.setpoint == 3.0

    def test_reset_forces_not_at_setpoint_until_calculate(self):
        pid = PIDController(1.0, 0.0, 0.0)
        pid.set_setpoint(0.0)
        pid.calculate(0.0)
        assert pid.at_setpoint()

        pid.reset()
        assert not pid.at_setpoint()

        pid.calculate(0.0)
        assert pid.at_setpoint()


class TestDiagnostics:
    """Test diagnostic snapshot."""

    def test_diagnostics_reflect_state(self):
        pid = PIDController(1.0, 0.0, 0.5)
        pid.calculate_with_new_setpoint(1.0, 4.0)
        diagnostics = pid.get_diagnostics()
        assert diagnostics["setpoint"] == 4.0
        assert diagnostics["measurement"] == 1.0
        assert diagnostics["position_error"] == pytest.approx(3.0)
        assert diagnostics["kd"] == 0.5
