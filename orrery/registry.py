"""
This module implements the BodyRegistry, the ordered collection of bodies a simulation
owns, and BodySpec, the scene-construction description a body is built from.

Insertion order is significant: it fixes the gravity summation order and the
tie-breaking of the dominant-influence search. The registry resolves a spec's parent
(by name or index) to a registry index, derives the orbit radius from the initial
separation when none is given, draws a missing orbit phase from its own seedable
random generator, and places satellites on their orbit immediately so the kinematic
invariant holds before the first step. Validation (unique names, registered parents,
positive mass, finite vectors) happens here, once, at insertion time. Packed numpy
views of positions, masses and the sink mask feed the vectorized accumulator.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Union

import numpy as np

from .body import Body, Fixed, FreeDynamic, KinematicOrbit
from .simulation_validator import InvalidBodyError, RegistryError, SimulationValidator


logger = logging.getLogger(__name__)




@dataclass
class BodySpec:
	name: str
	mass: float = 1.0
	distance: float = 0.0
	fixed: bool = False
	parent: Union[str, int, Body, None] = None
	position: Optional[Sequence[float]] = None
	velocity: Optional[Sequence[float]] = None
	orbit_radius: Optional[float] = None
	orbit_angle: Optional[float] = None
	orbit_speed: float = 0.01
	vertical_offset: float = 0.0
	spin_speed: float = 0.01
	visual_radius: float = 1.0


class BodyRegistry:
	def __init__(self, rng: np.random.Generator | None = None, seed: int | None = None) -> None:
		self._bodies: List[Body] = []
		self._index: Dict[str, int] = {}
		self.rng = rng if rng is not None else np.random.default_rng(seed)

	def __len__(self) -> int:
		return len(self._bodies)

	def __iter__(self) -> Iterator[Body]:
		return iter(self._bodies)

	def __getitem__(self, idx: int) -> Body:
		return self._bodies[idx]

	@property
	def bodies(self) -> List[Body]:
		return self._bodies

	def find(self, name: str) -> Optional[Body]:
		idx = self._index.get(name)
		if idx is None:
			return None
		return self._bodies[idx]

	def index_of(self, name: str) -> int:
		try:
			return self._index[name]
		except KeyError:
			raise RegistryError(f"no body named {name!r} is registered") from None

	def parent_of(self, body: Body) -> Optional[Body]:
		p = body.parent
		if p is None:
			return None
		return self._bodies[p]

	def _resolve_parent(self, spec: BodySpec) -> Optional[int]:
		parent = spec.parent
		if parent is None:
			return None
		if isinstance(parent, Body):
			parent = parent.name
		if isinstance(parent, str):
			if parent == spec.name:
				raise RegistryError(f"body {spec.name!r} cannot be its own parent")
			return self.index_of(parent)
		return int(parent)

	def build(self, spec: BodySpec) -> Body:
		parent = self._resolve_parent(spec)
		SimulationValidator.check_parent(spec.name, parent, len(self._bodies))

		if spec.position is None:
			position = np.array([spec.distance, 0.0, 0.0], dtype=np.float64)
		else:
			position = np.asarray(spec.position, dtype=np.float64)

		if parent is None:
			mode = Fixed() if spec.fixed else FreeDynamic()
		else:
			if spec.fixed:
				raise InvalidBodyError(f"satellite {spec.name!r} cannot also be fixed")
			parent_pos = self._bodies[parent].position
			if spec.orbit_radius is None:
				radius = float(np.linalg.norm(position - parent_pos))
			else:
				radius = float(spec.orbit_radius)
			if spec.orbit_angle is None:
				angle = float(self.rng.uniform(0.0, 2.0 * math.pi))
			else:
				angle = float(spec.orbit_angle)
			mode = KinematicOrbit(
				parent=parent,
				radius=radius,
				angle=angle,
				speed=spec.orbit_speed,
				vertical_offset=spec.vertical_offset,
			)

		return Body(
			spec.name,
			spec.mass,
			mode,
			position,
			spec.velocity,
			spin_speed=spec.spin_speed,
			visual_radius=spec.visual_radius,
		)

	def add(self, item: Union[BodySpec, Body]) -> int:
		body = self.build(item) if isinstance(item, BodySpec) else item

		if body.name in self._index:
			raise RegistryError(f"a body named {body.name!r} is already registered")
		SimulationValidator.check_parent(body.name, body.parent, len(self._bodies))
		SimulationValidator.check_body(body)

		if isinstance(body.mode, KinematicOrbit):
			if not math.isfinite(body.mode.radius) or body.mode.radius < 0.0:
				raise InvalidBodyError(
					f"satellite {body.name!r} needs a finite non-negative orbit radius"
				)
			body.place_on_orbit(self._bodies[body.mode.parent].position)

		idx = len(self._bodies)
		self._bodies.append(body)
		self._index[body.name] = idx
		logger.debug("registered %r as body %d", body.name, idx)
		return idx

	def positions(self) -> np.ndarray:
		if not self._bodies:
			return np.empty((0, 3), dtype=np.float64)
		return np.stack([b.position for b in self._bodies])

	def masses(self) -> np.ndarray:
		return np.array([b.mass for b in self._bodies], dtype=np.float64)

	def sink_mask(self) -> np.ndarray:
		return np.array([b.parent is None for b in self._bodies], dtype=bool)
