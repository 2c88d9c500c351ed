from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .simulation_validator import ConfigError

"""
This central configuration module defines all simulation parameters through the SimConfig dataclass. Key parameters include the gravitational parameter G shared by the gravity accumulator and the circular-orbit initializer, the default host-loop tick, the minimum separation below which a body pair exerts no force, the epsilon used to detect a radial vector parallel to the up axis, and the two reference axes used to build orbit tangents. The class provides a copy method for configuration inheritance and a validate method that rejects inconsistent settings. It serves as the single source of truth for simulation behavior, with all components referencing this configuration.

"""

Vec3 = Tuple[float, float, float]


@dataclass
class SimConfig:
    G: float = 0.001
    default_dt: float = 0.1
    min_separation: float = 1.0e-9
    tangent_epsilon: float = 1.0e-6
    up_axis: Vec3 = (0.0, 1.0, 0.0)
    secondary_axis: Vec3 = (1.0, 0.0, 0.0)
    check_finite: bool = False
    seed: Optional[int] = None

    def copy(self) -> "SimConfig":
        new = object.__new__(SimConfig)
        new.__dict__ = dict(getattr(self, "__dict__", {}))
        return new

    def validate(self) -> "SimConfig":
        if not (np.isfinite(self.G) and self.G > 0.0):
            raise ConfigError(f"G must be a positive finite number, got {self.G!r}")
        if not (np.isfinite(self.default_dt) and self.default_dt > 0.0):
            raise ConfigError(f"default_dt must be positive, got {self.default_dt!r}")
        if not (np.isfinite(self.min_separation) and self.min_separation >= 0.0):
            raise ConfigError(f"min_separation must be finite and non-negative, got {self.min_separation!r}")
        if self.tangent_epsilon <= 0.0:
            raise ConfigError(f"tangent_epsilon must be positive, got {self.tangent_epsilon!r}")

        up = np.asarray(self.up_axis, dtype=float)
        sec = np.asarray(self.secondary_axis, dtype=float)
        if up.shape != (3,) or sec.shape != (3,):
            raise ConfigError("reference axes must be 3-vectors")
        if float(np.dot(np.cross(up, sec), np.cross(up, sec))) < self.tangent_epsilon:
            raise ConfigError("up_axis and secondary_axis must not be parallel")
        return self
