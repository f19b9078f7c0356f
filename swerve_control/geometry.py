"""2D vector primitives for wheel azimuth and robot-frame geometry.

A `Vector2` doubles as a position (wheel offset, center of rotation) and as
a direction (wheel azimuth, robot heading). Directions are unit vectors
(cos θ, sin θ), which avoids angle wrap handling in the kinematics.
"""

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Vector2:
    """Immutable 2D vector.

    Attributes:
        x: Forward component (robot frame) or cosine of a direction.
        y: Leftward component (robot frame) or sine of a direction.
    """

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_radians(cls, theta: float) -> "Vector2":
        """Build a unit direction vector from an angle in radians."""
        return cls(math.cos(theta), math.sin(theta))

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def radians(self) -> float:
        """Angle of the vector in radians, in [-π, π]."""
        return math.atan2(self.y, self.x)

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def normalized(self, fallback: Optional["Vector2"] = None) -> "Vector2":
        """Return the unit vector pointing the same way.

        Args:
            fallback: Returned instead when this vector has zero length.

        Returns:
            Unit vector, or `fallback` for a zero vector.

        Raises:
            ValueError: If the vector has zero length and no fallback is given.
        """
        length = self.norm()
        if length == 0.0:
            if fallback is None:
                raise ValueError("Cannot normalize a zero-length vector")
            return fallback
        return Vector2(self.x / length, self.y / length)

    def rotate_by(self, direction: "Vector2") -> "Vector2":
        """Rotate this vector by the angle of a unit direction vector.

        Equivalent to complex multiplication (x + iy) * (c + is).
        """
        c, s = direction.x, direction.y
        return Vector2(self.x * c - self.y * s, self.x * s + self.y * c)

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)
