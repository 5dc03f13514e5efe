#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Force Grid Interpolation
================================================================================

Project:        Mechanical AFM Force Field
Module:         interpolation.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

Trilinear sampling of a precomputed force/energy grid at an arbitrary
continuous position.

For a position p the fractional grid index is

    u = (p - origin) / spacing

and the eight lattice points surrounding u are blended with the weights

    w = (1 - tx or tx) * (1 - ty or ty) * (1 - tz or tz)

where (tx, ty, tz) is the fractional offset inside the enclosing cell.

Periodic grids wrap the corner indices modulo the grid dimensions.
Non-periodic grids clamp positions outside the grid to the nearest boundary
node, so a query below the first plane returns the first plane's values
and a query beyond the last plane returns the last plane's values.
"""

import numpy as np
from numba import jit
from typing import Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .grid import ForceGrid


# Fractional indices closer than this to an integer are snapped onto the node
NODE_TOLERANCE = 1.0e-9


@jit(nopython=True, cache=True)
def _cell_index(u: float, n: int, periodic: bool) -> Tuple[int, int, float]:
    """Lower corner, upper corner and fractional offset along one axis."""
    nearest = np.floor(u + 0.5)
    if abs(u - nearest) < NODE_TOLERANCE:
        u = nearest

    i0 = int(np.floor(u))
    t = u - i0

    if periodic:
        i0 = i0 % n
        return i0, (i0 + 1) % n, t

    if i0 < 0:
        return 0, 0, 0.0
    if i0 >= n - 1:
        return n - 1, n - 1, 0.0
    return i0, i0 + 1, t


@jit(nopython=True, cache=True)
def trilinear_interpolate(
    forces: np.ndarray,
    energies: np.ndarray,
    spacing: np.ndarray,
    origin: np.ndarray,
    periodic: bool,
    position: np.ndarray
) -> Tuple[np.ndarray, float]:
    """
    Interpolate force and energy at a continuous position.

    Args:
        forces: (nx, ny, nz, 3) force vectors at the lattice points
        energies: (nx, ny, nz) energies at the lattice points
        spacing: Grid spacing (3,)
        origin: Position of lattice point (0, 0, 0)
        periodic: Wrap indices around the grid boundaries
        position: Query position (3,)

    Returns:
        force: Interpolated force vector (3,)
        energy: Interpolated energy
    """
    nx, ny, nz = energies.shape

    x0, x1, tx = _cell_index((position[0] - origin[0]) / spacing[0], nx, periodic)
    y0, y1, ty = _cell_index((position[1] - origin[1]) / spacing[1], ny, periodic)
    z0, z1, tz = _cell_index((position[2] - origin[2]) / spacing[2], nz, periodic)

    force = np.zeros(3)
    energy = 0.0

    for a in range(2):
        ix = x0 if a == 0 else x1
        wx = 1.0 - tx if a == 0 else tx
        for b in range(2):
            iy = y0 if b == 0 else y1
            wy = 1.0 - ty if b == 0 else ty
            for c in range(2):
                iz = z0 if c == 0 else z1
                wz = 1.0 - tz if c == 0 else tz

                w = wx * wy * wz
                energy += w * energies[ix, iy, iz]
                force[0] += w * forces[ix, iy, iz, 0]
                force[1] += w * forces[ix, iy, iz, 1]
                force[2] += w * forces[ix, iy, iz, 2]

    return force, energy


def interpolate(force_grid: "ForceGrid", position: np.ndarray) -> Tuple[np.ndarray, float]:
    """
    Sample a ForceGrid at a continuous position.

    Evaluating exactly at a lattice position returns the stored values
    at that node.

    Args:
        force_grid: Precomputed force/energy grid
        position: Query position (3,)

    Returns:
        (force, energy) at the position
    """
    position = np.ascontiguousarray(position, dtype=np.float64)
    force, energy = trilinear_interpolate(
        force_grid.forces,
        force_grid.energies,
        force_grid.spacing,
        force_grid.offset,
        force_grid.periodic,
        position
    )
    return force, float(energy)


def sample_plane(
    force_grid: "ForceGrid",
    z: float,
    nx: int = 64,
    ny: int = 64
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Sample forces and energies on a regular xy plane at height z.

    The plane covers one full period of the grid laterally, starting at the
    grid offset.

    Args:
        force_grid: Precomputed force/energy grid
        z: Height of the plane
        nx: Number of samples along x
        ny: Number of samples along y

    Returns:
        xs: (nx,) sample x coordinates
        ys: (ny,) sample y coordinates
        forces: (nx, ny, 3) interpolated forces
        energies: (nx, ny) interpolated energies
    """
    if nx < 1 or ny < 1:
        raise ValueError("nx and ny must be positive")

    gx, gy, _ = force_grid.n_grid
    xs = force_grid.offset[0] + np.arange(nx) * (gx * force_grid.spacing[0] / nx)
    ys = force_grid.offset[1] + np.arange(ny) * (gy * force_grid.spacing[1] / ny)

    forces = np.zeros((nx, ny, 3))
    energies = np.zeros((nx, ny))
    position = np.zeros(3)
    position[2] = z

    for i in range(nx):
        for j in range(ny):
            position[0] = xs[i]
            position[1] = ys[j]
            forces[i, j], energies[i, j] = interpolate(force_grid, position)

    return xs, ys, forces, energies
