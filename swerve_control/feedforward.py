"""Open-loop motor feedforward model."""


class SimpleMotorFeedforward:
    """Permanent-magnet DC motor feedforward.

    Control law:
        output = ks * sign(velocity) + kv * velocity + ka * acceleration

    sign(0) is 0: no static friction compensation is commanded at rest, so a
    stationary wheel never receives a kick in an arbitrary direction.

    Attributes:
        ks: Static friction gain (output units)
        kv: Velocity gain (output units per unit velocity)
        ka: Acceleration gain (output units per unit acceleration)
    """

    def __init__(self, ks: float, kv: float, ka: float = 0.0):
        self.ks = ks
        self.kv = kv
        self.ka = ka

    def calculate(self, velocity: float, acceleration: float = 0.0) -> float:
        """Compute the feedforward output.

        Args:
            velocity: Desired velocity
            acceleration: Desired acceleration. Default: 0.0

        Returns:
            Open-loop actuator effort
        """
        if velocity > 0.0:
            direction = 1.0
        elif velocity < 0.0:
            direction = -1.0
        else:
            direction = 0.0
        return self.ks * direction + self.kv * velocity + self.ka * acceleration
