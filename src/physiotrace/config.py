from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SimulationConfig:
    """Settings for a standard simulation run."""
    horizon_h: float = 24.0  # Last grid point (hours)
    step_h: float = 0.25     # Grid spacing (hours)

    # Check compounds and subject before simulating instead of letting NaN/inf through.
    validate: bool = False

    def grid(self) -> np.ndarray:
        """
        Uniform grid from 0 to horizon_h inclusive (97 points with the defaults).
        horizon_h must be a whole number of steps; anything else raises ValueError.
        """
        if not (self.step_h > 0):
            raise ValueError(f"step_h must be > 0 (got {self.step_h}).")
        if not (self.horizon_h >= 0):
            raise ValueError(f"horizon_h must be >= 0 (got {self.horizon_h}).")
        steps = self.horizon_h / self.step_h
        n = int(round(steps))
        if not np.isclose(steps, n, rtol=0.0, atol=1e-9):
            raise ValueError(f"horizon_h ({self.horizon_h}) must be a whole number of "
                             f"step_h ({self.step_h}) steps.")
        return np.linspace(0.0, self.horizon_h, n + 1)
