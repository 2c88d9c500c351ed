from __future__ import annotations
import numpy as np
from typing import Tuple

"""
This module provides the pairwise geometric kernel shared by the gravity accumulator, the circular-orbit initializer and the diagnostics. The geometry_buffers function computes separation vectors from every sink to every source, their squared lengths, and the inverse cubed distances in a single pass using Einstein summation. Pairs closer than the minimum separation (the diagonal included) get a zero inverse distance, so coincident bodies exert no force on each other instead of producing non-finite values. It assumes (N, 3) position arrays and a non-negative minimum separation.

"""




__all__ = ["geometry_buffers", "pair_mask"]


def pair_mask(r2: np.ndarray, min_sep: float = 0.0) -> np.ndarray:
    mask = r2 > min_sep * min_sep
    if r2.ndim == 2 and r2.shape[0] == r2.shape[1]:
        np.fill_diagonal(mask, False)
    return mask


def geometry_buffers(
    pos: np.ndarray,
    min_sep: float = 0.0,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    pos = np.asarray(pos, dtype=float)

    # diff[i, j] points from body i towards body j
    diff = pos[None, :, :] - pos[:, None, :]
    r2 = np.einsum("ijk,ijk->ij", diff, diff, optimize=True)

    inv_r3 = np.zeros_like(r2, dtype=float)
    mask = pair_mask(r2, min_sep)
    if np.any(mask):
        inv_r3[mask] = np.power(r2[mask], -1.5)

    return diff, r2, inv_r3
