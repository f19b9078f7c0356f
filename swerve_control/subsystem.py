"""Periodic hook interface for the external scheduler.

The scheduler owns timing. Each subsystem is called back synchronously once
per real-hardware control cycle and once per simulated-hardware cycle; the
library never calls back into the scheduler.
"""

from abc import ABC, abstractmethod


class Subsystem(ABC):
    """A unit of robot behavior driven by a fixed-period scheduler."""

    @abstractmethod
    def periodic(self) -> None:
        """Run one control cycle against the current measurements."""

    @abstractmethod
    def simulation_periodic(self) -> None:
        """Advance the simulated hardware by one cycle."""
