"""Swerve drive kinematic model.

This module converts between robot-frame chassis speeds and the states of
four independently steered wheels.

For a wheel at offset (wx, wy) from the center of rotation, the planar
velocity of the wheel contact point is:
    v_x = vx - omega * wy
    v_y = vy + omega * wx

Stacking the 2x3 block [[1, 0, -wy], [0, 1, wx]] for every wheel gives an
8x3 matrix A with [v_x1, v_y1, ..., v_x4, v_y4] = A @ [vx, vy, omega].
The inverse direction (module states to chassis speeds) is overdetermined
and solved in the least-squares sense with the pseudoinverse of A.
"""

import logging
from typing import List, Sequence

import numpy as np

from .config import NUM_MODULES
from .geometry import Vector2
from .speeds import ChassisSpeeds, SwerveModuleState


def _kinematics_matrix(wheels: Sequence[Vector2], center_of_rotation: Vector2) -> np.ndarray:
    matrix = np.zeros((2 * len(wheels), 3))
    for i, wheel in enumerate(wheels):
        matrix[2 * i] = [1.0, 0.0, -wheel.y + center_of_rotation.y]
        matrix[2 * i + 1] = [0.0, 1.0, wheel.x - center_of_rotation.x]
    return matrix


class SwerveDriveKinematics:
    """Bidirectional transform between ChassisSpeeds and module states.

    The geometry is fixed at construction. The only mutable state is the
    matrix cached for the last center of rotation and the last module states,
    which supply the held azimuth when a wheel is commanded to stop.

    Attributes:
        modules: Wheel offsets from the robot center (meters, robot frame)
    """

    def __init__(self, wheels: Sequence[Vector2]):
        """Build the kinematics for a fixed wheel layout.

        Args:
            wheels: Four wheel offsets relative to the robot center

        Raises:
            ValueError: If there are not exactly four wheels, or the layout is
                degenerate (the kinematics matrix does not have full rank).
        """
        if len(wheels) != NUM_MODULES:
            raise ValueError(f"Expected {NUM_MODULES} wheel offsets, got {len(wheels)}")

        self.modules: List[Vector2] = list(wheels)

        origin = Vector2(0.0, 0.0)
        self._inverse_kinematics = _kinematics_matrix(self.modules, origin)
        if np.linalg.matrix_rank(self._inverse_kinematics) < 3:
            raise ValueError(f"Degenerate wheel layout {self.modules}: kinematics matrix is singular")

        # Least-squares solution operator for the robot-center geometry
        self._forward_kinematics = np.linalg.pinv(self._inverse_kinematics)

        self._module_states = [SwerveModuleState() for _ in self.modules]
        self._previous_center_of_rotation = origin

    def to_swerve_module_states(
        self,
        chassis_speeds: ChassisSpeeds,
        center_of_rotation: Vector2 = Vector2(0.0, 0.0),
    ) -> List[SwerveModuleState]:
        """Compute wheel states that realize the given chassis speeds.

        A zero command stops every wheel and holds its last azimuth. A wheel
        with zero planar velocity (sitting on the center of rotation) also
        holds its azimuth.

        Args:
            chassis_speeds: Desired robot-frame velocity
            center_of_rotation: Point the robot rotates about (meters, robot
                frame). Default: the robot center

        Returns:
            Four new SwerveModuleState objects, in wheel order
        """
        if chassis_speeds.is_zero():
            for state in self._module_states:
                state.speed = 0.0
            return self._copy_states()

        if center_of_rotation != self._previous_center_of_rotation:
            logging.debug(
                f"Rebuilding kinematics matrix for center of rotation "
                f"({center_of_rotation.x:.3f}, {center_of_rotation.y:.3f})"
            )
            self._inverse_kinematics = _kinematics_matrix(self.modules, center_of_rotation)
            self._previous_center_of_rotation = center_of_rotation

        chassis_vector = np.array([chassis_speeds.vx, chassis_speeds.vy, chassis_speeds.omega])
        module_vector = self._inverse_kinematics @ chassis_vector

        for i, state in enumerate(self._module_states):
            velocity = Vector2(float(module_vector[2 * i]), float(module_vector[2 * i + 1]))
            state.speed = velocity.norm()
            state.angle = velocity.normalized(fallback=state.angle)

        return self._copy_states()

    @staticmethod
    def desaturate_wheel_speeds(
        module_states: Sequence[SwerveModuleState], attainable_max_speed: float
    ) -> None:
        """Scale wheel speeds down in place so none exceeds the attainable maximum.

        All wheels are scaled by the same factor, which keeps the ratios between
        them and therefore the direction of travel and rotation.

        Args:
            module_states: Module states to modify
            attainable_max_speed: Physical wheel speed ceiling (m/s)
        """
        if len(module_states) != NUM_MODULES:
            raise ValueError(f"Expected {NUM_MODULES} module states, got {len(module_states)}")

        max_speed = max(abs(state.speed) for state in module_states)
        if max_speed > attainable_max_speed:
            logging.debug(f"Desaturating wheel speeds: {max_speed:.3f} > {attainable_max_speed:.3f} m/s")
            for state in module_states:
                state.speed = state.speed / max_speed * attainable_max_speed

    def to_chassis_speeds(self, module_states: Sequence[SwerveModuleState]) -> ChassisSpeeds:
        """Estimate chassis speeds from measured module states.

        Solves the 8 wheel velocity equations for the 3 chassis unknowns in the
        least-squares sense, so small per-wheel inconsistencies (slip, sensor
        noise) are averaged out. Always uses the robot-center geometry.

        Args:
            module_states: Four measured module states, in wheel order

        Returns:
            Best-fit robot-frame ChassisSpeeds
        """
        if len(module_states) != NUM_MODULES:
            raise ValueError(f"Expected {NUM_MODULES} module states, got {len(module_states)}")

        module_vector = np.zeros(2 * NUM_MODULES)
        for i, state in enumerate(module_states):
            module_vector[2 * i] = state.speed * state.angle.x
            module_vector[2 * i + 1] = state.speed * state.angle.y

        vx, vy, omega = self._forward_kinematics @ module_vector
        return ChassisSpeeds(float(vx), float(vy), float(omega))

    def _copy_states(self) -> List[SwerveModuleState]:
        return [SwerveModuleState(state.speed, state.angle) for state in self._module_states]
