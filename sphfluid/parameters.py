"""Physical parameters of the simulated fluid."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FluidParameters:
    """Constants that define the fluid and the smoothing kernel support."""

    gravity: float
    damping: float
    rest_density: float
    stiffness: float
    viscosity: float
    smoothing_radius: float

    @property
    def sq_smoothing_radius(self) -> float:
        """Square of the smoothing radius."""
        return self.smoothing_radius * self.smoothing_radius