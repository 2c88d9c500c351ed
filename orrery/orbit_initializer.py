"""
This module implements the one-time circular-orbit velocity initializer.

For every body that is not fixed, CircularOrbitInitializer picks a center (the parent
of a satellite, otherwise the body exerting the strongest G*m/r^2 pull, scanned in
registry order with strict comparison so ties keep the earliest candidate), then sets
the body's velocity to the circular-orbit speed sqrt(G*M/r) along the tangent r x up.
When the radial vector is parallel to the up axis the secondary axis is used instead.
Satellites receive a velocity too, but the integrator never reads it. Bodies for which
no usable center exists (alone in the registry, or coincident with every candidate)
are skipped with a warning and keep their velocity.
"""

from __future__ import annotations
import logging
import math
from typing import TYPE_CHECKING, Optional

import numpy as np

from .forces import influence_magnitudes
from .sim_config import SimConfig

if TYPE_CHECKING:
	from .registry import BodyRegistry


logger = logging.getLogger(__name__)




class CircularOrbitInitializer:
	def __init__(self, registry: "BodyRegistry", cfg: SimConfig | None = None) -> None:
		self.registry = registry
		self.cfg = cfg or SimConfig()
		self._up = np.asarray(self.cfg.up_axis, dtype=np.float64)
		self._secondary = np.asarray(self.cfg.secondary_axis, dtype=np.float64)

	def dominant_center(self, i: int) -> Optional[int]:
		reg = self.registry
		if len(reg) < 2:
			return None
		strength = influence_magnitudes(
			i, reg.positions(), reg.masses(), self.cfg.G, self.cfg.min_separation
		)

		best = None
		max_force = -math.inf
		for j, f in enumerate(strength):
			if j == i:
				continue
			if f > max_force:
				max_force = f
				best = j
		return best

	def center_of(self, i: int) -> Optional[int]:
		body = self.registry[i]
		if body.parent is not None:
			return body.parent
		return self.dominant_center(i)

	def tangent(self, r_vec: np.ndarray) -> np.ndarray:
		t = np.cross(r_vec, self._up)
		if float(np.dot(t, t)) < self.cfg.tangent_epsilon:
			t = np.cross(r_vec, self._secondary)
		return t / np.linalg.norm(t)

	def circular_velocity(self, i: int, center: int) -> Optional[np.ndarray]:
		body = self.registry[i]
		c = self.registry[center]

		r_vec = body.position - c.position
		r = float(np.linalg.norm(r_vec))
		if not r > self.cfg.min_separation:
			return None

		v = math.sqrt(self.cfg.G * c.mass / r)
		return self.tangent(r_vec) * v

	def run(self) -> int:
		"""Assign circular-orbit velocities; returns how many bodies were set."""
		n_set = 0
		for i, body in enumerate(self.registry):
			if body.is_fixed:
				continue

			center = self.center_of(i)
			if center is None:
				logger.warning("no gravitational center for %r, velocity left unchanged", body.name)
				continue

			vel = self.circular_velocity(i, center)
			if vel is None:
				logger.warning(
					"%r coincides with its center %r, velocity left unchanged",
					body.name, self.registry[center].name,
				)
				continue

			body.velocity[...] = vel
			n_set += 1
			logger.debug("%r orbits %r at speed %.6g", body.name, self.registry[center].name, float(np.linalg.norm(vel)))
		return n_set
