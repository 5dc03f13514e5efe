#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Electrostatic Tip-Sample Force Grid
================================================================================

Project:        Mechanical AFM Force Field
Module:         electrostatics.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

One-time precomputation of the electrostatic interaction between a smeared
tip charge and the electrostatic potential of the sample.

The tip charge is an isotropic Gaussian

    ρ(r) = Q / (w √(2π))³ · exp(-r² / 2w²)

and the interaction energy with the tip at R is the convolution

    E(R) = ∫ ρ(r - R) V(r) d³r

which becomes an elementwise product in k-space. The force is obtained by
differentiating in k-space, F = -∇E  ↔  F(k) = -2πi k E(k), and transforming
each component back to real space. The cost is two forward and four
inverse transforms of the full grid, instead of a direct O(N²) sum.
"""

import logging
import numpy as np
from typing import Optional

from .grid import DataGrid, ForceGrid, GridIndex
from .fourier import fft_data_grid, ifft_data_grid, kspace_axes, wrapped_frequencies
from .vectors import VectorLike, as_vector3


logger = logging.getLogger(__name__)

# Gaussian amplitude (relative to its peak) below which the density is cut off
GAUSSIAN_CUTOFF_THRESHOLD = 1.0e-10


def gaussian_cutoff_distance(gaussian_width: float, step: float, max_steps: int) -> Optional[float]:
    """
    Distance at which the tip Gaussian has decayed below the threshold.

    Steps outward along one axis in increments of `step` until
    exp(-x² / 2w²) < GAUSSIAN_CUTOFF_THRESHOLD.

    Args:
        gaussian_width: Standard deviation w of the Gaussian
        step: Grid spacing along the axis
        max_steps: Number of steps to try

    Returns:
        Cutoff distance, or None if the threshold is not reached
    """
    width_sqr = gaussian_width * gaussian_width
    for i in range(max_steps):
        x = i * step
        if np.exp(-0.5 * x * x / width_sqr) < GAUSSIAN_CUTOFF_THRESHOLD:
            return x
    return None


def gaussian_tip_density(
    n_grid: GridIndex,
    spacing: VectorLike,
    tip_charge: float,
    gaussian_width: float
) -> DataGrid:
    """
    Gaussian tip charge density centred on lattice point (0, 0, 0).

    Grid points further than the cutoff distance from the centre (measured
    through the periodic boundaries) are left at zero.

    Args:
        n_grid: Grid dimensions (nx, ny, nz)
        spacing: Grid spacing
        tip_charge: Total charge Q of the tip
        gaussian_width: Standard deviation w of the Gaussian

    Returns:
        Periodic scalar DataGrid with origin at zero
    """
    if gaussian_width <= 0:
        raise ValueError(f"Gaussian width must be positive, got {gaussian_width}")

    spacing = as_vector3(spacing, "spacing")
    nx, ny, nz = (int(n) for n in n_grid)

    width_sqr = gaussian_width * gaussian_width
    norm_factor = 1.0 / (gaussian_width * np.sqrt(2.0 * np.pi)) ** 3

    cutoff = gaussian_cutoff_distance(gaussian_width, spacing[0], min(nx, ny, nz) - 1)
    if cutoff is None:
        logger.warning(
            "Tip Gaussian (width %.3f) does not decay below %.0e inside the grid; no cutoff applied",
            gaussian_width, GAUSSIAN_CUTOFF_THRESHOLD
        )
    else:
        logger.debug("Tip Gaussian cutoff distance: %.3f", cutoff)

    dx = wrapped_frequencies(nx, spacing[0])
    dy = wrapped_frequencies(ny, spacing[1])
    dz = wrapped_frequencies(nz, spacing[2])
    r_sqr = dx[:, None, None] ** 2 + dy[None, :, None] ** 2 + dz[None, None, :] ** 2

    rho = tip_charge * norm_factor * np.exp(-0.5 * r_sqr / width_sqr)
    if cutoff is not None:
        rho[r_sqr > cutoff * cutoff] = 0.0

    return DataGrid(rho, spacing, np.zeros(3), periodic=True)


def _check_potential(potential: DataGrid) -> None:
    if potential.is_vector or potential.values.ndim != 3:
        raise ValueError("The electrostatic potential must be a scalar 3D grid")
    if potential.is_complex:
        raise ValueError("The electrostatic potential must be real valued")
    if np.any(potential.spacing <= 0):
        raise ValueError(f"Potential grid spacing must be positive, got {potential.spacing}")


def _derivative_component(energy_kspace: DataGrid, k_axis: np.ndarray, axis: int) -> np.ndarray:
    """Real-space -dE/dx_axis from the k-space energy."""
    shape = [1, 1, 1]
    shape[axis] = -1
    k = k_axis.reshape(shape)

    force_kspace = DataGrid(
        values=-2.0j * np.pi * k * energy_kspace.values,
        spacing=energy_kspace.spacing,
        periodic=True
    )
    return ifft_data_grid(force_kspace).values


def build_electrostatic_grid(
    potential: DataGrid,
    tip_charge: float,
    gaussian_width: float
) -> ForceGrid:
    """
    Precompute the tip-sample electrostatic force and energy on a grid.

    Args:
        potential: Sample electrostatic potential (real scalar grid)
        tip_charge: Total tip charge
        gaussian_width: Standard deviation of the tip charge Gaussian

    Returns:
        Periodic ForceGrid on the potential's lattice (same spacing and origin)

    Raises:
        ValueError: If the potential grid or the tip parameters are invalid
    """
    _check_potential(potential)
    n_grid = potential.n_grid
    logger.info(
        "Building electrostatic force grid %dx%dx%d (tip charge %.4f, width %.4f)",
        n_grid[0], n_grid[1], n_grid[2], tip_charge, gaussian_width
    )

    rho_tip = gaussian_tip_density(n_grid, potential.spacing, tip_charge, gaussian_width)
    logger.debug("Total charge at tip: %.6f", rho_tip.values.sum() * rho_tip.volume_element)

    potential_kspace = fft_data_grid(potential)
    rho_kspace = fft_data_grid(rho_tip)

    # Convolution theorem, scaled by the real-space volume element
    energy_kspace = DataGrid(
        values=potential_kspace.values * rho_kspace.values * potential.volume_element,
        spacing=potential_kspace.spacing,
        periodic=True
    )

    energy = ifft_data_grid(energy_kspace, origin=potential.origin)

    kx, ky, kz = kspace_axes(energy_kspace)
    force = np.empty(n_grid + (3,))
    for axis, k_axis in enumerate((kx, ky, kz)):
        force[..., axis] = _derivative_component(energy_kspace, k_axis, axis)

    return ForceGrid(
        forces=force,
        energies=energy.values,
        spacing=potential.spacing.copy(),
        offset=potential.origin.copy(),
        periodic=True
    )