"""
This module implements BodyView, a read-only proxy a rendering collaborator uses to
read one body's per-frame state.

The view exposes the body's name, a copy of its current position, the cosmetic spin
angle and the visual radius, looking the body up by registry index on every access so
it always reflects the latest step. Nothing can be written back through it; the core
never reads render state.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .simulation import Simulation




class BodyView:
	__slots__ = ("_sim", "_i")

	def __init__(self, sim: "Simulation", idx: int) -> None:
		self._sim = sim
		self._i = int(idx)

	@property
	def name(self) -> str:
		return self._sim.registry[self._i].name

	@property
	def position(self) -> Tuple[float, float, float]:
		p = self._sim.registry[self._i].position
		return (float(p[0]), float(p[1]), float(p[2]))

	@property
	def spin_angle(self) -> float:
		return float(self._sim.registry[self._i].spin_angle)

	@property
	def visual_radius(self) -> float:
		return float(self._sim.registry[self._i].visual_radius)

	def __repr__(self) -> str:
		x, y, z = self.position
		return (f"BodyView(name={self.name!r}, x={x}, y={y}, z={z}, "
				f"spin_angle={self.spin_angle})")
