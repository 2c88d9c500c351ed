"""
This initialization file serves as the main entry point for the orrery package,
exposing its public API through a clean namespace.

It re-exports the body model and its dynamics modes (Body, Fixed, KinematicOrbit,
FreeDynamic), scene construction (BodySpec, BodyRegistry), the simulation facade
(Simulation) with its configuration (SimConfig), the integrator and the circular-orbit
initializer, the force helpers, the asteroid belt generator, ready-made scenes,
diagnostics, the read-only BodyView for renderers, and the package's error types.
"""

from .sim_config import SimConfig
from .simulation_validator import (
    SimulationValidator,
    OrreryError,
    ConfigError,
    InvalidBodyError,
    RegistryError,
)

from .body import Body, Fixed, FreeDynamic, KinematicOrbit
from .body_view import BodyView
from .registry import BodyRegistry, BodySpec
from .simulation import Simulation
from .integrator import Integrator
from .orbit_initializer import CircularOrbitInitializer

from .forces import gravitational_acceleration, influence_magnitudes, potential_energy
from .geometry_cache import geometry_buffers

from .diagnostics import Diagnostics
from .initial_condition_generator import AsteroidBeltGenerator, BeltConfig
from .specialized_generators import SpecializedGenerators, INNER_SOLAR_SYSTEM



__all__ = [
    "SimConfig",
    "SimulationValidator",
    "OrreryError",
    "ConfigError",
    "InvalidBodyError",
    "RegistryError",
    "Body",
    "Fixed",
    "FreeDynamic",
    "KinematicOrbit",
    "BodyView",
    "BodyRegistry",
    "BodySpec",
    "Simulation",
    "Integrator",
    "CircularOrbitInitializer",
    "gravitational_acceleration",
    "influence_magnitudes",
    "potential_energy",
    "geometry_buffers",
    "Diagnostics",
    "AsteroidBeltGenerator",
    "BeltConfig",
    "SpecializedGenerators",
    "INNER_SOLAR_SYSTEM",
]
