"""
This module defines the Body class, the physical and orbital state unit of the
simulation, together with the three dynamics modes a body can be in.

A body is either Fixed (never moves), on a KinematicOrbit around a parent (its
position is an explicit function of the orbit phase and the parent's position), or
FreeDynamic (integrated from accumulated gravitational acceleration). The mode is a
tagged variant chosen once at construction; no transitions happen at runtime. State
vectors are 3-component float64 numpy arrays mutated in place by the integrator. The
parent of a kinematic orbit is held as an index into the owning registry, never as a
reference to the parent Body itself.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .simulation_validator import InvalidBodyError



@dataclass(frozen=True)
class Fixed:
	pass


@dataclass(frozen=True)
class FreeDynamic:
	pass


@dataclass
class KinematicOrbit:
	parent: int
	radius: float
	angle: float = 0.0
	speed: float = 0.01
	vertical_offset: float = 0.0

	def __post_init__(self) -> None:
		object.__setattr__(self, "radius", float(self.radius))
		self.angle = float(self.angle)
		self.speed = float(self.speed)
		self.vertical_offset = float(self.vertical_offset)

	def __setattr__(self, name, value) -> None:
		# radius is set once in __init__ and never again
		if name == "radius" and "radius" in self.__dict__:
			raise AttributeError("orbit radius is immutable after creation")
		object.__setattr__(self, name, value)

	def offset(self) -> np.ndarray:
		return np.array(
			[
				self.radius * math.cos(self.angle),
				self.vertical_offset,
				self.radius * math.sin(self.angle),
			],
			dtype=np.float64,
		)


Mode = Union[Fixed, KinematicOrbit, FreeDynamic]


def _vec3(v) -> np.ndarray:
	if v is None:
		return np.zeros(3, dtype=np.float64)
	arr = np.array(v, dtype=np.float64)
	if arr.size != 3:
		raise InvalidBodyError(f"expected a 3-vector, got shape {arr.shape}")
	return arr.reshape(3)


class Body:
	def __init__(
		self,
		name: str,
		mass: float,
		mode: Mode | None = None,
		position=None,
		velocity=None,
		*,
		spin_speed: float = 0.01,
		visual_radius: float = 1.0,
	) -> None:
		self.name = str(name)
		self.mass = float(mass)
		self.mode: Mode = mode if mode is not None else FreeDynamic()
		self.position = _vec3(position)
		self.velocity = _vec3(velocity)
		self.acceleration = np.zeros(3, dtype=np.float64)
		self.spin_speed = float(spin_speed)
		self.spin_angle = 0.0
		self.visual_radius = float(visual_radius)

	@property
	def is_fixed(self) -> bool:
		return isinstance(self.mode, Fixed)

	@property
	def is_satellite(self) -> bool:
		return isinstance(self.mode, KinematicOrbit)

	@property
	def is_free(self) -> bool:
		return isinstance(self.mode, FreeDynamic)

	@property
	def parent(self) -> Optional[int]:
		if isinstance(self.mode, KinematicOrbit):
			return self.mode.parent
		return None

	@property
	def orbit_radius(self) -> Optional[float]:
		if isinstance(self.mode, KinematicOrbit):
			return self.mode.radius
		return None

	@property
	def orbit_angle(self) -> Optional[float]:
		if isinstance(self.mode, KinematicOrbit):
			return self.mode.angle
		return None

	@property
	def orbit_speed(self) -> Optional[float]:
		if isinstance(self.mode, KinematicOrbit):
			return self.mode.speed
		return None

	@property
	def vertical_offset(self) -> Optional[float]:
		if isinstance(self.mode, KinematicOrbit):
			return self.mode.vertical_offset
		return None

	def place_on_orbit(self, parent_position: np.ndarray) -> None:
		"""Set position from the kinematic formula around ``parent_position``."""
		orbit = self.mode
		if not isinstance(orbit, KinematicOrbit):
			return
		self.position[...] = np.asarray(parent_position, dtype=np.float64) + orbit.offset()

	def __repr__(self) -> str:
		return (f"Body(name={self.name!r}, mass={self.mass}, mode={self.mode!r}, "
				f"position={self.position.tolist()}, velocity={self.velocity.tolist()})")
