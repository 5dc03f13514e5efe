#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
3-Vector Helpers
================================================================================

Project:        Mechanical AFM Force Field
Module:         vectors.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

Positions, forces, spacings and origins are plain NumPy arrays of length 3.
The compiled helpers below are used inside the Numba kernels, where calling
np.dot / np.cross on tiny arrays would either need BLAS or allocate more
than necessary.
"""

import numpy as np
from numba import jit
from typing import Sequence, Union


VectorLike = Union[Sequence[float], np.ndarray]


@jit(nopython=True, cache=True)
def dot3(a: np.ndarray, b: np.ndarray) -> float:
    """Dot product of two 3-vectors."""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


@jit(nopython=True, cache=True)
def cross3(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Cross product a × b of two 3-vectors."""
    c = np.empty(3)
    c[0] = a[1] * b[2] - a[2] * b[1]
    c[1] = a[2] * b[0] - a[0] * b[2]
    c[2] = a[0] * b[1] - a[1] * b[0]
    return c


@jit(nopython=True, cache=True)
def norm3(a: np.ndarray) -> float:
    """Euclidean length of a 3-vector."""
    return np.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def as_vector3(value: VectorLike, name: str = "vector") -> np.ndarray:
    """
    Convert a sequence to a float64 array of length 3.

    Args:
        value: Anything NumPy can turn into three floats
        name: Name used in the error message

    Returns:
        Contiguous float64 array of shape (3,)

    Raises:
        ValueError: If the value does not hold exactly three components
    """
    vec = np.ascontiguousarray(value, dtype=np.float64).reshape(-1)
    if vec.shape != (3,):
        raise ValueError(f"{name} must have exactly 3 components, got shape {np.shape(value)}")
    return vec
