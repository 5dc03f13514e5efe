#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Fourier Transforms of Data Grids
================================================================================

Project:        Mechanical AFM Force Field
Module:         fourier.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

Thin wrappers around numpy.fft that keep track of the lattice spacing.

A real-space grid with n points of spacing h along an axis maps to a k-space
grid with spacing dk = 1 / (n h). Values are stored in the transform's
natural ordering, so k-space index m stands for the frequency

    m dk          for m <  n/2
    (m - n) dk    for m >= n/2

With this convention the forward transform is unnormalised and the inverse
divides by the number of grid points, so a forward/inverse pair is the
identity and ifft(fft(a) * fft(b)) is the periodic convolution of a and b.
"""

import numpy as np
from typing import Optional, Tuple

from .grid import DataGrid
from .vectors import VectorLike


AXES = (0, 1, 2)


def wrapped_frequencies(n: int, dk: float) -> np.ndarray:
    """
    Frequencies of the n k-space points along one axis.

    Args:
        n: Number of grid points along the axis
        dk: k-space spacing along the axis

    Returns:
        Array of n frequencies in transform order
    """
    m = np.arange(n)
    return np.where(m < n / 2.0, m, m - n) * dk


def fft_data_grid(grid: DataGrid) -> DataGrid:
    """
    Forward transform of a scalar grid.

    Args:
        grid: Real or complex scalar grid

    Returns:
        Complex k-space grid with spacing 1 / (n * spacing)
    """
    if grid.is_vector:
        raise ValueError("Only scalar grids can be transformed")

    n = np.array(grid.n_grid, dtype=np.float64)
    return DataGrid(
        values=np.fft.fftn(grid.values, axes=AXES),
        spacing=1.0 / (n * grid.spacing),
        origin=np.zeros(3),
        periodic=True
    )


def ifft_data_grid(
    kgrid: DataGrid,
    origin: Optional[VectorLike] = None,
    real: bool = True
) -> DataGrid:
    """
    Inverse transform of a k-space grid.

    Args:
        kgrid: Complex k-space grid
        origin: Origin of the resulting real-space grid (default: zero)
        real: Keep only the real part of the result

    Returns:
        Real-space grid with spacing 1 / (n * dk)
    """
    if kgrid.is_vector:
        raise ValueError("Only scalar grids can be transformed")

    values = np.fft.ifftn(kgrid.values, axes=AXES)
    if real:
        values = values.real

    n = np.array(kgrid.n_grid, dtype=np.float64)
    return DataGrid(
        values=np.ascontiguousarray(values),
        spacing=1.0 / (n * kgrid.spacing),
        origin=np.zeros(3) if origin is None else origin,
        periodic=True
    )


def kspace_axes(kgrid: DataGrid) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Wrapped frequencies along x, y and z for a k-space grid."""
    nx, ny, nz = kgrid.n_grid
    return (
        wrapped_frequencies(nx, kgrid.spacing[0]),
        wrapped_frequencies(ny, kgrid.spacing[1]),
        wrapped_frequencies(nz, kgrid.spacing[2])
    )
