from __future__ import annotations
import numpy as np
from typing import TYPE_CHECKING, Dict, Tuple
from .forces import potential_energy
if TYPE_CHECKING:
    from .simulation import Simulation

"""
This module computes conserved quantities and health metrics for a running simulation. The Diagnostics class provides kinetic and potential energy, total angular and linear momentum, the center of mass, and a divergence check reporting whether any position, velocity or acceleration has become non-finite. Kinetic energy and momenta are taken over free bodies only, because satellites and fixed bodies are not driven by the forces and their stored velocities carry no dynamical meaning; the potential covers every pair, as every body is a gravity source. A diverged simulation cannot be recovered and has to be rebuilt by the caller. The summary method bundles the metrics for the headless runner.

"""




class Diagnostics:

	def __init__(self, simulation: "Simulation"):
		self.sim = simulation

	def _free_state(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
		free = [b for b in self.sim.bodies if b.is_free]
		if not free:
			return np.empty(0), np.empty((0, 3)), np.empty((0, 3))
		m = np.array([b.mass for b in free], dtype=np.float64)
		q = np.stack([b.position for b in free])
		v = np.stack([b.velocity for b in free])
		return m, q, v

	def kinetic_energy(self) -> float:
		m, _, v = self._free_state()
		if m.size == 0:
			return 0.0
		return float(0.5 * np.sum(m * np.einsum("ij,ij->i", v, v)))

	def potential_energy(self) -> float:
		reg = self.sim.registry
		return potential_energy(
			reg.positions(), reg.masses(), self.sim.G, self.sim.cfg.min_separation
		)

	def energy(self) -> float:
		return self.kinetic_energy() + self.potential_energy()

	def linear_momentum(self) -> np.ndarray:
		m, _, v = self._free_state()
		if m.size == 0:
			return np.zeros(3)
		return np.sum(m[:, None] * v, axis=0)

	def angular_momentum(self) -> np.ndarray:
		m, q, v = self._free_state()
		if m.size == 0:
			return np.zeros(3)
		return np.sum(m[:, None] * np.cross(q, v), axis=0)

	def center_of_mass(self) -> np.ndarray:
		reg = self.sim.registry
		m = reg.masses()
		if m.size == 0:
			return np.zeros(3)
		return np.sum(m[:, None] * reg.positions(), axis=0) / float(np.sum(m))

	def has_diverged(self) -> bool:
		for b in self.sim.bodies:
			for vec in (b.position, b.velocity, b.acceleration):
				if not np.all(np.isfinite(vec)):
					return True
		return False

	def summary(self) -> Dict[str, float]:
		L = self.angular_momentum()
		return {
			"time": float(self.sim.time),
			"kinetic_energy": self.kinetic_energy(),
			"potential_energy": self.potential_energy(),
			"total_energy": self.energy(),
			"angular_momentum": float(np.linalg.norm(L)),
			"diverged": self.has_diverged(),
		}
