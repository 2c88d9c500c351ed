"""
This module generates randomized satellite populations, such as an asteroid belt, that
orbit one dominant body on kinematic orbits.

The AsteroidBeltGenerator draws, independently and uniformly per body, a cosmetic
visual radius, an orbit radius in [min_dist, max_dist], an orbit phase in [0, 2pi), a
vertical offset symmetric around zero and an angular speed. The BeltConfig dataclass
encapsulates those ranges together with the body mass, name prefix and seed. Every
body is placed on its orbit immediately with the same formula the integrator uses, so
a fresh belt is orbit-consistent before the first step. All randomness comes from an
explicit numpy Generator, either injected or seeded from the config, never from the
global numpy random state.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple, TYPE_CHECKING

import numpy as np

from .body import Body, KinematicOrbit
from .simulation_validator import RegistryError

if TYPE_CHECKING:
	from .registry import BodyRegistry
	from .simulation import Simulation


logger = logging.getLogger(__name__)




@dataclass
class BeltConfig:
	count: int = 200
	visual_radius_range: Tuple[float, float] = (0.5, 2.0)
	dist_range: Tuple[float, float] = (180.0, 250.0)
	vertical_spread: float = 5.0
	speed_range: Tuple[float, float] = (0.005, 0.02)
	mass: float = 0.001
	spin_speed: float = 0.01
	name_prefix: str = "Asteroid"
	seed: Optional[int] = None


class AsteroidBeltGenerator:

	def __init__(self, config: BeltConfig | None = None, rng: np.random.Generator | None = None):
		self.config: BeltConfig = config or BeltConfig()
		if rng is None:
			rng = np.random.default_rng(self.config.seed)
		self.rng = rng


	def _uniform(self, bounds: Tuple[float, float]) -> float:
		lo, hi = bounds
		return float(self.rng.uniform(lo, hi))

	def generate_one(self, name: str, parent: int, parent_position: np.ndarray) -> Body:
		cfg = self.config

		visual_radius = self._uniform(cfg.visual_radius_range)
		orbit = KinematicOrbit(
			parent=parent,
			radius=self._uniform(cfg.dist_range),
			angle=self._uniform((0.0, 2.0 * math.pi)),
			vertical_offset=self._uniform((-cfg.vertical_spread / 2.0, cfg.vertical_spread / 2.0)),
			speed=self._uniform(cfg.speed_range),
		)

		body = Body(
			name,
			cfg.mass,
			orbit,
			spin_speed=cfg.spin_speed,
			visual_radius=visual_radius,
		)
		body.place_on_orbit(parent_position)
		return body

	def generate(self, parent: int, registry: "BodyRegistry", start: int = 0) -> List[Body]:
		parent_position = registry[parent].position
		out: list = []
		for i in range(start, start + self.config.count):
			out.append(self.generate_one(f"{self.config.name_prefix}_{i}", parent, parent_position))
		return out

	def populate(self, sim: "Simulation", parent: str | int) -> List[Body]:
		reg = sim.registry
		parent_idx = reg.index_of(parent) if isinstance(parent, str) else int(parent)
		if not 0 <= parent_idx < len(reg):
			raise RegistryError(f"parent index {parent_idx} is not a registered body")

		# checked up front so a clash registers nothing
		names = [f"{self.config.name_prefix}_{i}" for i in range(self.config.count)]
		taken = [n for n in names if reg.find(n) is not None]
		if taken:
			raise RegistryError(
				f"{len(taken)} belt name(s) already registered, first {taken[0]!r}"
			)

		bodies = self.generate(parent_idx, reg)
		for b in bodies:
			reg.add(b)
		logger.info(
			"added %d %s bodies around %r", len(bodies), self.config.name_prefix, reg[parent_idx].name
		)
		return bodies
