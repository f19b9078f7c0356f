"""Swerve Control - Motion-Control Math for Four-Module Swerve Drivetrains

Converts high-level velocity commands into per-module targets and reconstructs
robot velocity from module feedback, for use inside a fixed-period control loop.

## Architecture Overview

Each control cycle runs the same pipeline:

### Inverse Kinematics (kinematics.py)
Maps a robot-frame ChassisSpeeds onto four wheel states.
- Center-of-rotation aware: pivot about any robot-frame point
- Desaturation keeps wheel speeds under the hardware ceiling
- Wheels hold their azimuth when stopped

### Closed-Loop Control (controller.py)
Discrete-time PID per actuator.
- Continuous input for wrap-around domains (module azimuth)
- Anti-windup: integral term contribution is clamped

### Open-Loop Control (feedforward.py)
Static friction, velocity and acceleration feedforward for the drive motors.

### Forward Kinematics (kinematics.py)
Least-squares reconstruction of ChassisSpeeds from the four measured wheel
states, tolerant of wheel slip and sensor noise.

## Modules

- `geometry.py` - 2D vectors and unit direction vectors
- `speeds.py` - ChassisSpeeds, SwerveModuleState, SwerveModulePosition
- `controller.py` - PIDController and input_modulus
- `feedforward.py` - SimpleMotorFeedforward
- `kinematics.py` - SwerveDriveKinematics
- `subsystem.py` - Periodic hook interface for the scheduler
- `drivetrain.py` - Reference drivetrain pipeline with an ideal simulated plant
- `config.py` - Centralized default parameters

## Quick Start

```python
from swerve_control import ChassisSpeeds, SwerveDriveKinematics, Vector2

kinematics = SwerveDriveKinematics(
    [Vector2(0.3, 0.3), Vector2(0.3, -0.3), Vector2(-0.3, 0.3), Vector2(-0.3, -0.3)]
)
states = kinematics.to_swerve_module_states(ChassisSpeeds(1.0, 0.0, 0.5))
SwerveDriveKinematics.desaturate_wheel_speeds(states, 4.5)
estimate = kinematics.to_chassis_speeds(states)
```

Or simulate the full pipeline from the command line:
```bash
python -m swerve_control --vx 1.0 --omega 0.5
```
"""

__version__ = "0.1.0"

from .controller import PIDController, input_modulus
from .drivetrain import ModuleCommand, SwerveDrivetrain
from .feedforward import SimpleMotorFeedforward
from .geometry import Vector2
from .kinematics import SwerveDriveKinematics
from .speeds import ChassisSpeeds, SwerveModulePosition, SwerveModuleState
from .subsystem import Subsystem

__all__ = [
    "ChassisSpeeds",
    "ModuleCommand",
    "PIDController",
    "SimpleMotorFeedforward",
    "Subsystem",
    "SwerveDriveKinematics",
    "SwerveDrivetrain",
    "SwerveModulePosition",
    "SwerveModuleState",
    "Vector2",
    "input_modulus",
]
