"""
This module implements the gravity accumulator and the related pairwise force helpers.

The gravitational_acceleration function computes, for every sink body, the net
acceleration G*m_j/r^2 along the unit separation vector from every other body. Bodies
flagged as non-sinks (satellites on kinematic orbits) receive zero acceleration but
still act as sources for everybody else. The sum over sources runs sequentially in
registry order, vectorized across sinks, so the floating-point accumulation order is
the same as a plain double loop. influence_magnitudes gives the G*m/r^2 field strength
one body feels from each of the others, used to find the dominant influence.
potential_energy returns the pairwise Newtonian potential. All functions use
geometry_buffers and drop pairs closer than the minimum separation.
"""

from __future__ import annotations
import numpy as np
from numpy.typing import NDArray
from .geometry_cache import geometry_buffers, pair_mask









def gravitational_acceleration(
    q: NDArray[np.floating],
    m: NDArray[np.floating],
    sinks: NDArray[np.bool_] | None = None,
    G: float = 1.0,
    min_sep: float = 0.0,
) -> NDArray[np.floating]:

    q_arr = np.asarray(q, dtype=float)
    m_arr = np.asarray(m, dtype=float)
    n = q_arr.shape[0]

    acc = np.zeros_like(q_arr, dtype=float)
    if n < 2 or float(G) == 0.0:
        return acc

    if sinks is None:
        sink_arr = np.ones(n, dtype=bool)
    else:
        sink_arr = np.asarray(sinks, dtype=bool)
    if not np.any(sink_arr):
        return acc

    diff, _, inv_r3 = geometry_buffers(q_arr, min_sep)
    coeff = float(G) * m_arr[None, :] * inv_r3

    for j in range(n):
        acc += coeff[:, j, None] * diff[:, j, :]

    acc[~sink_arr] = 0.0
    return acc


def influence_magnitudes(
    i: int,
    q: NDArray[np.floating],
    m: NDArray[np.floating],
    G: float = 1.0,
    min_sep: float = 0.0,
) -> NDArray[np.floating]:
    q_arr = np.asarray(q, dtype=float)
    m_arr = np.asarray(m, dtype=float)

    d = q_arr - q_arr[i]
    r2 = np.einsum("jk,jk->j", d, d)

    out = np.full(q_arr.shape[0], -np.inf, dtype=float)
    mask = pair_mask(r2, min_sep)
    mask[i] = False
    out[mask] = float(G) * m_arr[mask] / r2[mask]
    return out


def potential_energy(
    q: NDArray[np.floating],
    m: NDArray[np.floating],
    G: float = 1.0,
    min_sep: float = 0.0,
) -> float:
    q_arr = np.asarray(q, dtype=float)
    m_arr = np.asarray(m, dtype=float)
    n = q_arr.shape[0]
    if n < 2 or float(G) == 0.0:
        return 0.0

    _, r2, _ = geometry_buffers(q_arr, min_sep)
    mask = pair_mask(r2, min_sep)
    iu = np.triu_indices(n, 1)
    keep = mask[iu]
    if not np.any(keep):
        return 0.0

    mprod = (m_arr[:, None] * m_arr[None, :])[iu][keep]
    r = np.sqrt(r2[iu][keep])
    return float(-G * np.sum(mprod / r))
