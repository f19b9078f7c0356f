"""Velocity and module state types shared by the control pipeline.

- ChassisSpeeds: robot-frame velocity command or estimate
- SwerveModuleState: per-wheel speed and azimuth
- SwerveModulePosition: per-wheel cumulative distance and azimuth (odometry)
"""

from dataclasses import dataclass, field

from .geometry import Vector2


@dataclass(frozen=True)
class ChassisSpeeds:
    """Robot-frame velocity triple.

    Attributes:
        vx: Forward velocity (m/s)
        vy: Leftward velocity (m/s)
        omega: Angular velocity (rad/s), positive counter-clockwise
    """

    vx: float = 0.0
    vy: float = 0.0
    omega: float = 0.0

    @classmethod
    def from_field_relative_speeds(
        cls, vx: float, vy: float, omega: float, robot_angle: Vector2
    ) -> "ChassisSpeeds":
        """Convert a field-relative command into robot-relative speeds.

        The translation is rotated by the inverse of the robot heading so that
        "forward" on the field stays forward regardless of where the robot faces.

        Args:
            vx: Field-frame velocity along the field x axis (m/s)
            vy: Field-frame velocity along the field y axis (m/s)
            omega: Angular velocity (rad/s), frame independent
            robot_angle: Robot heading as a unit direction vector

        Returns:
            ChassisSpeeds in the robot frame
        """
        c, s = robot_angle.x, robot_angle.y
        return cls(vx * c + vy * s, -vx * s + vy * c, omega)

    def is_zero(self) -> bool:
        return self.vx == 0.0 and self.vy == 0.0 and self.omega == 0.0


@dataclass
class SwerveModuleState:
    """Commanded or measured state of one swerve module.

    Attributes:
        speed: Signed wheel speed (m/s)
        angle: Wheel azimuth as a unit direction vector
    """

    speed: float = 0.0
    angle: Vector2 = field(default_factory=lambda: Vector2(1.0, 0.0))


@dataclass
class SwerveModulePosition:
    """Cumulative wheel travel for odometry.

    Attributes:
        distance: Distance driven by the wheel (m)
        angle: Wheel azimuth as a unit direction vector
    """

    distance: float = 0.0
    angle: Vector2 = field(default_factory=lambda: Vector2(1.0, 0.0))
