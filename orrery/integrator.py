from __future__ import annotations
import math
from typing import TYPE_CHECKING

from .body import Body, KinematicOrbit

if TYPE_CHECKING:
	from .simulation import Simulation

"""
This module implements the Integrator, the per-tick stepper of the simulation. For every body in registry order it advances the cosmetic spin, then branches on the body's dynamics mode: a satellite advances its orbit phase by speed*dt and is re-placed around its parent's current position; a free body gets a kick-drift-kick update using the acceleration left by the previous gravity pass for both half kicks (acceleration is not recomputed between the kicks); a fixed body is left alone. Once every body has moved, the simulation's gravity accumulator runs once to prepare the next step. Both half kicks therefore see the same acceleration, which makes the update x += h*v + h^2*a/2, v += h*a in effect.

"""




class Integrator:
	def __init__(self, sim: "Simulation") -> None:
		self.sim = sim

	@staticmethod
	def spin(body: Body) -> None:
		body.spin_angle += body.spin_speed

	def advance_orbit(self, body: Body, dt: float) -> None:
		orbit = body.mode
		orbit.angle += orbit.speed * dt
		body.place_on_orbit(self.sim.registry[orbit.parent].position)

	@staticmethod
	def kick(body: Body, h: float) -> None:
		body.velocity += body.acceleration * h

	@staticmethod
	def drift(body: Body, h: float) -> None:
		body.position += body.velocity * h

	def kick_drift_kick(self, body: Body, dt: float) -> None:
		h2 = dt / 2
		self.kick(body, h2)
		self.drift(body, dt)
		self.kick(body, h2)

	def step(self, dt: float) -> None:
		dt = float(dt)
		if not math.isfinite(dt) or dt < 0.0:
			raise ValueError(f"dt must be finite and non-negative, got {dt!r}")

		for body in self.sim.registry:
			self.spin(body)

			if isinstance(body.mode, KinematicOrbit):
				self.advance_orbit(body, dt)
			elif body.is_free:
				self.kick_drift_kick(body, dt)

		self.sim.compute_gravity()

