"""
This module implements Simulation, the facade a host loop and a scene builder talk to.

A Simulation owns a BodyRegistry, a SimConfig (whose G is shared by the gravity
accumulator and the orbit initializer) and an Integrator. Scene construction calls
add_body for each body in order, init_circular_orbits once, and then the host loop
calls step(dt) once per tick. The simulation keeps an elapsed-time counter and hands
read-only BodyView objects to rendering collaborators. compute_gravity is the gravity
accumulator: it refreshes the acceleration of every parent-less body from all other
bodies, satellites included as sources, and zeroes satellite accelerations.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Union

import numpy as np

from .body import Body
from .body_view import BodyView
from .diagnostics import Diagnostics
from .forces import gravitational_acceleration
from .integrator import Integrator
from .orbit_initializer import CircularOrbitInitializer
from .registry import BodyRegistry, BodySpec
from .sim_config import SimConfig


logger = logging.getLogger(__name__)




class Simulation:
	def __init__(
		self,
		cfg: SimConfig | None = None,
		*,
		rng: np.random.Generator | None = None,
	) -> None:
		self.cfg: SimConfig = (cfg or SimConfig()).copy().validate()
		self.registry = BodyRegistry(rng=rng, seed=self.cfg.seed)
		self._integrator = Integrator(self)
		self.time = 0.0
		self._orbits_initialized = False
		self._warned_diverged = False

	@property
	def G(self) -> float:
		return self.cfg.G

	@property
	def bodies(self) -> List[Body]:
		return self.registry.bodies

	@property
	def n_bodies(self) -> int:
		return len(self.registry)

	def find(self, name: str) -> Optional[Body]:
		return self.registry.find(name)

	def add_body(self, spec: Union[BodySpec, Body]) -> Body:
		idx = self.registry.add(spec)
		return self.registry[idx]

	def init_circular_orbits(self) -> int:
		if self._orbits_initialized:
			logger.warning("init_circular_orbits called more than once; re-running")
		n_set = CircularOrbitInitializer(self.registry, self.cfg).run()
		self._orbits_initialized = True
		# the first step kicks with this acceleration
		self.compute_gravity()
		logger.info("initialized circular orbits for %d of %d bodies", n_set, self.n_bodies)
		return n_set

	def compute_gravity(self) -> None:
		reg = self.registry
		if len(reg) == 0:
			return
		acc = gravitational_acceleration(
			reg.positions(),
			reg.masses(),
			reg.sink_mask(),
			G=self.cfg.G,
			min_sep=self.cfg.min_separation,
		)
		for body, a in zip(reg, acc):
			body.acceleration[...] = a

	def step(self, dt: float | None = None) -> None:
		if dt is None:
			dt = self.cfg.default_dt
		self._integrator.step(dt)
		self.time += float(dt)

		if self.cfg.check_finite and not self._warned_diverged:
			if Diagnostics(self).has_diverged():
				logger.warning("non-finite state at t=%g; the simulation has diverged", self.time)
				self._warned_diverged = True

	def run(self, n_steps: int, dt: float | None = None) -> None:
		for _ in range(int(n_steps)):
			self.step(dt)

	def views(self) -> List[BodyView]:
		return [BodyView(self, i) for i in range(self.n_bodies)]

	def view(self, name: str) -> BodyView:
		return BodyView(self, self.registry.index_of(name))
