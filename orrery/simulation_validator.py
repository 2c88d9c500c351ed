"""
This module provides validation utilities and error types for building a simulation.

The SimulationValidator class offers static methods to check that a body is physically
meaningful (positive finite mass, finite 3-dimensional state vectors) and that its
parent relation is sound (the parent is already registered, is not the body itself).
Because a parent must exist before its satellite is inserted, the parent relation is
acyclic by construction. Validation runs once at insertion time rather than during
traversal. The report_invalid_body helper logs the offending values for debugging.
"""

from __future__ import annotations
import logging
import math
from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
	from .body import Body


logger = logging.getLogger(__name__)


class OrreryError(Exception):
	"""Base class for errors raised while configuring or populating a simulation."""


class ConfigError(OrreryError, ValueError):
	"""Raised by ``SimConfig.validate`` for inconsistent settings."""


class InvalidBodyError(OrreryError, ValueError):
	"""Raised when a body's mass, state vectors or mode flags are not usable."""


class RegistryError(OrreryError, KeyError):
	"""Raised for duplicate names and unknown or self-referencing parents."""

	def __str__(self) -> str:
		# KeyError quotes its message by default
		return str(self.args[0]) if self.args else ""


class SimulationValidator:
	@staticmethod
	def vector_is_valid(v) -> bool:
		arr = np.asarray(v, dtype=float)
		if arr.shape != (3,):
			return False
		return bool(np.all(np.isfinite(arr)))

	@staticmethod
	def body_is_valid(body: "Body") -> bool:
		m = body.mass
		if not (m > 0.0 and math.isfinite(m)):
			return False
		for vec in (body.position, body.velocity, body.acceleration):
			if not SimulationValidator.vector_is_valid(vec):
				return False
		return True

	@staticmethod
	def check_body(body: "Body") -> None:
		if not SimulationValidator.body_is_valid(body):
			SimulationValidator.report_invalid_body(body)
			raise InvalidBodyError(
				f"body {body.name!r} needs a positive finite mass and finite 3-vectors"
			)

	@staticmethod
	def check_parent(name: str, parent: Optional[int], n_registered: int) -> None:
		if parent is None:
			return
		if parent == n_registered:
			raise RegistryError(f"body {name!r} cannot be its own parent")
		if not (0 <= parent < n_registered):
			raise RegistryError(
				f"parent index {parent} of body {name!r} is not a registered body"
			)

	@staticmethod
	def report_invalid_body(body: "Body") -> None:
		logger.error(
			"invalid body %r: mass=%r position=%r velocity=%r",
			body.name, body.mass, body.position.tolist(), body.velocity.tolist(),
		)
