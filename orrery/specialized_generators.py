import numpy as np
from dataclasses import replace
from typing import List, Optional
from .registry import BodySpec
from .initial_condition_generator import AsteroidBeltGenerator, BeltConfig
from .sim_config import SimConfig
from .simulation import Simulation

"""
This module provides ready-made scenes. The SpecializedGenerators class offers static methods for the inner solar system (a fixed Sun, the four rocky planets on free orbits, the Moon as a kinematic satellite of Earth, and a 200-body asteroid belt around the Sun between radii 180 and 250) and for a minimal star/planet pair used in validation runs. Masses, distances and spin rates are in the simulation's arbitrary unit system, tuned for G = 0.001. Each builder registers bodies in a fixed order, since order drives gravity summation and tie-breaking, and can optionally run the circular-orbit initializer. Random draws (the Moon's initial phase, the belt) come from the simulation's and the belt's own seedable generators.

"""


INNER_SOLAR_SYSTEM: List[BodySpec] = [
	BodySpec("Sun", mass=1000.0, distance=0.0, fixed=True, spin_speed=0.001, visual_radius=20.0),
	BodySpec("Mercury", mass=0.055, distance=30.0, spin_speed=0.03, visual_radius=3.0),
	BodySpec("Venus", mass=0.815, distance=70.0, spin_speed=0.2, visual_radius=5.0),
	BodySpec("Earth", mass=1.0, distance=100.0, spin_speed=0.01, visual_radius=5.0),
	BodySpec("Moon", mass=0.0123, distance=110.0, parent="Earth", orbit_speed=0.01,
			 spin_speed=-0.0001, visual_radius=1.5),
	BodySpec("Mars", mass=0.107, distance=150.0, spin_speed=0.007, visual_radius=4.0),
]


class SpecializedGenerators:

	@staticmethod
	def inner_solar_system(
			cfg: SimConfig | None = None,
			*,
			belt: Optional[BeltConfig] = None,
			with_belt: bool = True,
			seed: int | None = None,
			initialize: bool = True,
		) -> Simulation:

		if cfg is None:
			cfg = SimConfig(seed=seed)
		sim = Simulation(cfg)

		for spec in INNER_SOLAR_SYSTEM:
			sim.add_body(replace(spec))

		if with_belt:
			belt_cfg = belt or BeltConfig(seed=seed)
			AsteroidBeltGenerator(belt_cfg).populate(sim, "Sun")

		if initialize:
			sim.init_circular_orbits()
		return sim

	@staticmethod
	def star_and_planet(
		star_mass: float = 1000.0,
		distance: float = 100.0,
		planet_mass: float = 1.0,
		cfg: SimConfig | None = None,
		*,
		initialize: bool = True,
	) -> Simulation:
		sim = Simulation(cfg)
		sim.add_body(BodySpec("Star", mass=star_mass, fixed=True))
		sim.add_body(BodySpec("Planet", mass=planet_mass, distance=distance))
		if initialize:
			sim.init_circular_orbits()
		return sim

	@staticmethod
	def orbital_period(central_mass: float, radius: float, G: float = 0.001) -> float:
		return float(2.0 * np.pi * np.sqrt(radius ** 3 / (G * central_mass)))
