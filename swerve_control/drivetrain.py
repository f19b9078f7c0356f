"""Reference swerve drivetrain control pipeline.

Wires the library components into the per-cycle data flow:

1. Inverse kinematics: desired ChassisSpeeds -> four target module states
2. Desaturation: scale wheel speeds into the attainable range
3. Steering: PID on module azimuth (continuous over [-π, π))
4. Driving: feedforward on target speed/acceleration + PID on wheel speed
5. Odometry: measured module states -> estimated ChassisSpeeds

Hardware I/O stays with the caller: measured states go in through
update_measurements() and actuator commands come out of `commands`. In
simulation, simulation_periodic() stands in for the hardware with an ideal
plant that reaches every target instantly.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .config import (
    DEFAULT_PERIOD,
    DRIVE_KA,
    DRIVE_KD,
    DRIVE_KI,
    DRIVE_KP,
    DRIVE_KS,
    DRIVE_KV,
    MAX_MODULE_SPEED,
    NUM_MODULES,
    STEER_KD,
    STEER_KI,
    STEER_KP,
    STEER_TOLERANCE,
    WHEEL_OFFSETS,
)
from .controller import PIDController
from .feedforward import SimpleMotorFeedforward
from .geometry import Vector2
from .kinematics import SwerveDriveKinematics
from .speeds import ChassisSpeeds, SwerveModulePosition, SwerveModuleState
from .subsystem import Subsystem


@dataclass
class ModuleCommand:
    """Actuator efforts for one module.

    Attributes:
        steer_output: Azimuth motor effort
        drive_output: Drive motor effort (volts with the default gains)
    """

    steer_output: float = 0.0
    drive_output: float = 0.0


class SwerveDrivetrain(Subsystem):
    """Four-module swerve drivetrain driven by a fixed-period scheduler.

    Attributes:
        kinematics: Wheel geometry transform
        feedforward: Drive motor feedforward, shared by all modules
        steer_controllers: Azimuth PID per module
        drive_controllers: Wheel speed PID per module
        max_module_speed: Wheel speed ceiling used for desaturation (m/s)
        period: Control loop period (seconds)
    """

    def __init__(
        self,
        wheel_offsets: Optional[Sequence[Vector2]] = None,
        max_module_speed: float = MAX_MODULE_SPEED,
        period: float = DEFAULT_PERIOD,
    ):
        """Initialize the drivetrain.

        Args:
            wheel_offsets: Four wheel offsets from the robot center (meters).
                Default: config.WHEEL_OFFSETS
            max_module_speed: Attainable wheel speed (m/s). Default: 4.5
            period: Control loop period (seconds). Default: 0.02

        Raises:
            ValueError: If the wheel layout is invalid or period is not positive.
        """
        if wheel_offsets is None:
            wheel_offsets = [Vector2(x, y) for x, y in WHEEL_OFFSETS]

        self.kinematics = SwerveDriveKinematics(wheel_offsets)
        self.feedforward = SimpleMotorFeedforward(DRIVE_KS, DRIVE_KV, DRIVE_KA)
        self.max_module_speed = max_module_speed
        self.period = period

        self.steer_controllers: List[PIDController] = []
        self.drive_controllers: List[PIDController] = []
        for _ in range(NUM_MODULES):
            steer = PIDController(STEER_KP, STEER_KI, STEER_KD, period)
            steer.enable_continuous_input(-math.pi, math.pi)
            steer.set_tolerance(STEER_TOLERANCE)
            self.steer_controllers.append(steer)
            self.drive_controllers.append(PIDController(DRIVE_KP, DRIVE_KI, DRIVE_KD, period))

        # Desired command
        self._desired_speeds = ChassisSpeeds()
        self._center_of_rotation = Vector2(0.0, 0.0)

        # Per-module state
        self._target_states = [SwerveModuleState() for _ in range(NUM_MODULES)]
        self._measured_states = [SwerveModuleState() for _ in range(NUM_MODULES)]
        self._positions = [SwerveModulePosition() for _ in range(NUM_MODULES)]
        self._commands = [ModuleCommand() for _ in range(NUM_MODULES)]
        self._previous_target_speeds = [0.0] * NUM_MODULES
        self._estimated_speeds = ChassisSpeeds()

        logging.info(
            f"Swerve drivetrain ready: {NUM_MODULES} modules, "
            f"max speed {max_module_speed:.2f} m/s, period {period * 1000:.0f} ms"
        )

    @property
    def target_states(self) -> List[SwerveModuleState]:
        return list(self._target_states)

    @property
    def measured_states(self) -> List[SwerveModuleState]:
        return list(self._measured_states)

    @property
    def module_positions(self) -> List[SwerveModulePosition]:
        return list(self._positions)

    @property
    def commands(self) -> List[ModuleCommand]:
        return list(self._commands)

    @property
    def estimated_speeds(self) -> ChassisSpeeds:
        """Chassis speeds reconstructed from the measured module states."""
        return self._estimated_speeds

    def drive(self, speeds: ChassisSpeeds, center_of_rotation: Vector2 = Vector2(0.0, 0.0)) -> None:
        """Set the desired robot-frame velocity for the next cycles.

        Args:
            speeds: Desired chassis speeds
            center_of_rotation: Pivot point (meters, robot frame). Default: robot center
        """
        self._desired_speeds = speeds
        self._center_of_rotation = center_of_rotation

    def stop(self) -> None:
        """Command zero velocity; wheels keep their azimuth."""
        self.drive(ChassisSpeeds())

    def update_measurements(self, states: Sequence[SwerveModuleState]) -> None:
        """Supply measured module states read from the hardware."""
        if len(states) != NUM_MODULES:
            raise ValueError(f"Expected {NUM_MODULES} module states, got {len(states)}")
        self._measured_states = [SwerveModuleState(s.speed, s.angle) for s in states]

    def at_target_angles(self) -> bool:
        """Whether every module azimuth is within steering tolerance."""
        return all(steer.at_setpoint() for steer in self.steer_controllers)

    def periodic(self) -> None:
        targets = self.kinematics.to_swerve_module_states(
            self._desired_speeds, self._center_of_rotation
        )
        SwerveDriveKinematics.desaturate_wheel_speeds(targets, self.max_module_speed)
        self._target_states = targets

        for i, (target, measured) in enumerate(zip(targets, self._measured_states)):
            steer_output = self.steer_controllers[i].calculate_with_new_setpoint(
                measured.angle.radians(), target.angle.radians()
            )

            acceleration = (target.speed - self._previous_target_speeds[i]) / self.period
            self._previous_target_speeds[i] = target.speed
            drive_output = self.feedforward.calculate(
                target.speed, acceleration
            ) + self.drive_controllers[i].calculate_with_new_setpoint(measured.speed, target.speed)

            self._commands[i] = ModuleCommand(steer_output, drive_output)

        self._estimated_speeds = self.kinematics.to_chassis_speeds(self._measured_states)

    def simulation_periodic(self) -> None:
        # Ideal plant: every module reaches its target within one cycle
        self._measured_states = [
            SwerveModuleState(target.speed, target.angle) for target in self._target_states
        ]
        for position, state in zip(self._positions, self._measured_states):
            position.distance += state.speed * self.period
            position.angle = state.angle

    def reset(self) -> None:
        """Clear controller state and odometry distances."""
        for controller in self.steer_controllers + self.drive_controllers:
            controller.reset()
        self._positions = [
            SwerveModulePosition(0.0, state.angle) for state in self._measured_states
        ]
        self._previous_target_speeds = [0.0] * NUM_MODULES
