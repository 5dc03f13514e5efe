#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Data Grids and Force Grids
================================================================================

Project:        Mechanical AFM Force Field
Module:         grid.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

Containers for volumetric data on a regular 3D lattice.

A DataGrid holds scalar (float or complex) or 3-vector values together with
the lattice spacing, the position of lattice point (0, 0, 0) and a periodic
flag. Lattice point (i, j, k) sits at

    origin + spacing * (i, j, k)

and values are flattened in C order, (i * ny + j) * nz + k.

A ForceGrid pairs a vector force grid with a scalar energy grid on the same
lattice. It is built once and then only read, so it can be shared by any
number of concurrent force evaluations.
"""

import numpy as np
from typing import Tuple, Optional
from dataclasses import dataclass, field

from .vectors import VectorLike, as_vector3
from .interpolation import interpolate


GridIndex = Tuple[int, int, int]


@dataclass
class DataGrid:
    """
    Dense 3D grid of scalar or vector values.

    values has shape (nx, ny, nz) for scalar grids and (nx, ny, nz, 3) for
    vector grids.
    """
    values: np.ndarray
    spacing: np.ndarray = field(default_factory=lambda: np.ones(3))
    origin: np.ndarray = field(default_factory=lambda: np.zeros(3))
    periodic: bool = False

    def __post_init__(self):
        self.values = np.asarray(self.values)
        if self.values.ndim == 4 and self.values.shape[3] != 3:
            raise ValueError(f"Vector grid values must end in a 3-component axis, got {self.values.shape}")
        if self.values.ndim not in (3, 4):
            raise ValueError(f"Grid values must be 3D (scalar) or 4D (vector), got shape {self.values.shape}")
        self.spacing = as_vector3(self.spacing, "spacing")
        self.origin = as_vector3(self.origin, "origin")

    @classmethod
    def zeros(
        cls,
        n_grid: GridIndex,
        spacing: VectorLike = (1.0, 1.0, 1.0),
        origin: VectorLike = (0.0, 0.0, 0.0),
        periodic: bool = False,
        dtype=np.float64,
        vector: bool = False
    ) -> "DataGrid":
        """Create a zero-filled grid with the given dimensions."""
        shape = tuple(int(n) for n in n_grid) + ((3,) if vector else ())
        return cls(np.zeros(shape, dtype=dtype), spacing, origin, periodic)

    @property
    def n_grid(self) -> GridIndex:
        """Number of lattice points along x, y and z."""
        nx, ny, nz = self.values.shape[:3]
        return nx, ny, nz

    @property
    def size(self) -> int:
        nx, ny, nz = self.n_grid
        return nx * ny * nz

    @property
    def volume_element(self) -> float:
        """Volume of one grid cell."""
        return float(np.prod(self.spacing))

    @property
    def is_vector(self) -> bool:
        return self.values.ndim == 4

    @property
    def is_complex(self) -> bool:
        return np.iscomplexobj(self.values)

    def position_at(self, ix: int, iy: int, iz: int) -> np.ndarray:
        """Cartesian position of lattice point (ix, iy, iz)."""
        return self.origin + self.spacing * np.array([ix, iy, iz], dtype=np.float64)

    def wrap_index(self, ix: int, iy: int, iz: int) -> GridIndex:
        """Map any integer index onto the grid using periodic images."""
        nx, ny, nz = self.n_grid
        return ix % nx, iy % ny, iz % nz

    def _checked_index(self, ix: int, iy: int, iz: int) -> GridIndex:
        if self.periodic:
            return self.wrap_index(ix, iy, iz)
        for i, n, axis in zip((ix, iy, iz), self.n_grid, "xyz"):
            if i < 0 or i >= n:
                raise IndexError(f"Index {i} out of range along {axis} for non-periodic grid of size {n}")
        return ix, iy, iz

    def at(self, ix: int, iy: int, iz: int):
        """
        Value at lattice point (ix, iy, iz).

        Periodic grids answer out-of-range indices by wrapping; non-periodic
        grids raise IndexError.
        """
        return self.values[self._checked_index(ix, iy, iz)]

    def at_pbc(self, ix: int, iy: int, iz: int):
        """Value at (ix, iy, iz), always wrapping around the boundaries."""
        return self.values[self.wrap_index(ix, iy, iz)]

    def set(self, ix: int, iy: int, iz: int, value) -> None:
        """Store a value at (ix, iy, iz), with the same index rules as at()."""
        self.values[self._checked_index(ix, iy, iz)] = value

    def flat_index(self, ix: int, iy: int, iz: int) -> int:
        """Position of (ix, iy, iz) in the flattened value array."""
        _, ny, nz = self.n_grid
        return (ix * ny + iy) * nz + iz

    def at_flat(self, index: int):
        """Value at a flattened index."""
        nx, ny, nz = self.n_grid
        return self.values.reshape((nx * ny * nz,) + self.values.shape[3:])[index]

    def positions(self) -> np.ndarray:
        """Positions of all lattice points as an (nx, ny, nz, 3) array."""
        axes = [self.origin[d] + self.spacing[d] * np.arange(n) for d, n in enumerate(self.n_grid)]
        gx, gy, gz = np.meshgrid(*axes, indexing="ij")
        return np.stack([gx, gy, gz], axis=-1)


@dataclass
class ForceGrid:
    """
    Co-registered force (vector) and energy (scalar) grids.

    The arrays, spacing and offset included, are private read-only copies.
    """
    forces: np.ndarray
    energies: np.ndarray
    spacing: np.ndarray = field(default_factory=lambda: np.ones(3))
    offset: np.ndarray = field(default_factory=lambda: np.zeros(3))
    periodic: bool = True

    def __post_init__(self):
        # Private copies: the arrays are frozen below
        self.forces = np.array(self.forces, dtype=np.float64, order="C")
        self.energies = np.array(self.energies, dtype=np.float64, order="C")

        if self.energies.ndim != 3:
            raise ValueError(f"Energy grid must be 3D, got shape {self.energies.shape}")
        if self.forces.shape != self.energies.shape + (3,):
            raise ValueError(
                f"Force grid shape {self.forces.shape} does not match energy grid shape {self.energies.shape}"
            )

        self.spacing = np.array(as_vector3(self.spacing, "spacing"), dtype=np.float64)
        self.offset = np.array(as_vector3(self.offset, "offset"), dtype=np.float64)
        if np.any(self.spacing <= 0):
            raise ValueError(f"Grid spacing must be positive, got {self.spacing}")

        for array in (self.forces, self.energies, self.spacing, self.offset):
            array.setflags(write=False)

    @classmethod
    def from_grids(
        cls,
        forces: DataGrid,
        energies: DataGrid,
        periodic: Optional[bool] = None
    ) -> "ForceGrid":
        """
        Combine a vector DataGrid and a scalar DataGrid into a ForceGrid.

        Raises:
            ValueError: If the grids are not on the same lattice
        """
        if forces.n_grid != energies.n_grid:
            raise ValueError(f"Grid dimensions differ: {forces.n_grid} vs {energies.n_grid}")
        if not np.allclose(forces.spacing, energies.spacing):
            raise ValueError("Force and energy grids must share the same spacing")
        if not forces.is_vector or energies.is_vector:
            raise ValueError("Expected a vector force grid and a scalar energy grid")

        if periodic is None:
            periodic = energies.periodic

        return cls(
            forces=forces.values,
            energies=energies.values,
            spacing=energies.spacing.copy(),
            offset=energies.origin.copy(),
            periodic=periodic
        )

    @property
    def n_grid(self) -> GridIndex:
        nx, ny, nz = self.energies.shape
        return nx, ny, nz

    def interpolate(self, position: VectorLike) -> Tuple[np.ndarray, float]:
        """Trilinearly interpolated (force, energy) at a position."""
        return interpolate(self, as_vector3(position, "position"))

    def energy_grid(self) -> DataGrid:
        """Read-only DataGrid view of the energies."""
        return DataGrid(self.energies, self.spacing.copy(), self.offset.copy(), self.periodic)

    def force_grid(self) -> DataGrid:
        """Read-only DataGrid view of the forces."""
        return DataGrid(self.forces, self.spacing.copy(), self.offset.copy(), self.periodic)
