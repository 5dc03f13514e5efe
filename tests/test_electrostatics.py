#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Electrostatic Force Grid Tests
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
License:        MIT License
================================================================================
"""

import numpy as np
import pytest
from afmsim.grid import DataGrid
from afmsim.electrostatics import (
    build_electrostatic_grid,
    gaussian_cutoff_distance,
    gaussian_tip_density
)


N_GRID = (32, 32, 32)
SPACING = 0.25
WIDTH = 0.5
CHARGE = 1.3


def sine_potential(amplitude=0.8, origin=(-1.0, 0.5, 2.0)):
    """Potential A sin(2πx/L) with one full period along x."""
    grid = DataGrid.zeros(N_GRID, (SPACING,) * 3, origin, periodic=True)
    length = N_GRID[0] * SPACING
    x = grid.positions()[..., 0]
    grid.values = amplitude * np.sin(2 * np.pi * x / length)
    return grid


class TestTipDensity:
    """Tests for the Gaussian tip charge density."""

    def test_cutoff_distance(self):
        """exp(-2x²) first drops below 1e-10 at x = 3.5 on a 0.25 lattice."""
        assert gaussian_cutoff_distance(WIDTH, SPACING, 31) == pytest.approx(3.5)

    def test_cutoff_not_reached(self):
        """A grid too small for the Gaussian gives no cutoff."""
        assert gaussian_cutoff_distance(WIDTH, SPACING, 5) is None

    @pytest.mark.parametrize("n_grid, spacing, width, tolerance", [
        (N_GRID, (SPACING,) * 3, WIDTH, 1e-3),
        ((40, 32, 28), (0.2, 0.25, 0.3), 0.5, 1e-3),
        ((48, 40, 32), (0.15, 0.2, 0.25), 0.4, 1e-3),
        ((12, 12, 12), (SPACING,) * 3, WIDTH, 2e-2),
    ])
    def test_charge_conservation(self, n_grid, spacing, width, tolerance):
        """The discretised density integrates to the tip charge."""
        rho = gaussian_tip_density(n_grid, spacing, CHARGE, width)
        total = rho.values.sum() * rho.volume_element

        assert abs(total - CHARGE) / CHARGE < tolerance

    def test_charge_error_shrinks_with_box(self):
        """A box wide enough for the full cutoff conserves charge better."""
        errors = []
        for n in (12, 20, 32):
            rho = gaussian_tip_density((n, n, n), (SPACING,) * 3, CHARGE, WIDTH)
            errors.append(abs(rho.values.sum() * rho.volume_element - CHARGE))

        assert errors[0] > errors[1] > errors[2]

    def test_centred_on_origin(self):
        """Peak at lattice point (0, 0, 0), symmetric through the boundaries."""
        rho = gaussian_tip_density(N_GRID, (SPACING,) * 3, CHARGE, WIDTH)

        assert np.argmax(rho.values) == 0
        assert abs(rho.at(1, 0, 0) - rho.at(-1, 0, 0)) < 1e-15
        assert abs(rho.at(0, 3, 2) - rho.at(0, -3, -2)) < 1e-15
        assert rho.periodic
        assert np.allclose(rho.origin, 0.0)

    def test_zero_beyond_cutoff(self):
        """Points past the cutoff radius are exactly zero."""
        rho = gaussian_tip_density(N_GRID, (SPACING,) * 3, CHARGE, WIDTH)

        assert rho.at(14, 0, 0) > 0.0
        assert rho.at(15, 0, 0) == 0.0
        assert rho.at(16, 0, 0) == 0.0
        assert rho.at(10, 10, 0) == 0.0

    def test_invalid_width(self):
        with pytest.raises(ValueError):
            gaussian_tip_density(N_GRID, (SPACING,) * 3, CHARGE, 0.0)


class TestElectrostaticGrid:
    """Tests for the FFT electrostatic force grid."""

    def test_lattice_preserved(self):
        """The force grid shares dimensions, spacing and origin with the potential."""
        potential = sine_potential()
        grid = build_electrostatic_grid(potential, CHARGE, WIDTH)

        assert grid.n_grid == potential.n_grid
        assert np.allclose(grid.spacing, potential.spacing)
        assert np.allclose(grid.offset, potential.origin)
        assert grid.periodic

    def test_constant_potential(self):
        """A constant potential gives energy q·V0 and no force."""
        v0 = 0.8
        potential = DataGrid(np.full(N_GRID, v0), (SPACING,) * 3, periodic=True)
        rho = gaussian_tip_density(N_GRID, (SPACING,) * 3, CHARGE, WIDTH)
        q_grid = rho.values.sum() * rho.volume_element

        grid = build_electrostatic_grid(potential, CHARGE, WIDTH)

        assert np.allclose(grid.energies, v0 * q_grid, atol=1e-10)
        assert np.allclose(grid.forces, 0.0, atol=1e-10)

    def test_sine_potential(self):
        """A single Fourier mode is damped by the Gaussian form factor."""
        amplitude = 0.8
        potential = sine_potential(amplitude)
        grid = build_electrostatic_grid(potential, CHARGE, WIDTH)

        k = 2 * np.pi / (N_GRID[0] * SPACING)
        damping = CHARGE * np.exp(-0.5 * (k * WIDTH) ** 2)
        x = potential.positions()[..., 0]

        expected_energy = amplitude * damping * np.sin(k * x)
        expected_fx = -amplitude * damping * k * np.cos(k * x)

        assert np.allclose(grid.energies, expected_energy, atol=1e-6)
        assert np.allclose(grid.forces[..., 0], expected_fx, atol=1e-6)
        assert np.allclose(grid.forces[..., 1], 0.0, atol=1e-9)
        assert np.allclose(grid.forces[..., 2], 0.0, atol=1e-9)

    def test_interpolated_between_nodes(self):
        """Interpolation between nodes stays close to the analytic energy."""
        amplitude = 0.8
        potential = sine_potential(amplitude)
        grid = build_electrostatic_grid(potential, CHARGE, WIDTH)

        k = 2 * np.pi / (N_GRID[0] * SPACING)
        damping = CHARGE * np.exp(-0.5 * (k * WIDTH) ** 2)
        position = potential.origin + np.array([1.13, 0.4, 2.2])

        _, energy = grid.interpolate(position)

        # Trilinear error is bounded by h²/8 times the curvature
        bound = SPACING ** 2 / 8 * amplitude * damping * k * k
        assert abs(energy - amplitude * damping * np.sin(k * position[0])) < bound + 1e-9

    def test_rejects_vector_potential(self):
        with pytest.raises(ValueError):
            build_electrostatic_grid(DataGrid.zeros(N_GRID, vector=True), CHARGE, WIDTH)

    def test_rejects_complex_potential(self):
        potential = DataGrid(np.zeros(N_GRID, dtype=complex), (SPACING,) * 3)
        with pytest.raises(ValueError):
            build_electrostatic_grid(potential, CHARGE, WIDTH)

    def test_rejects_bad_width(self):
        with pytest.raises(ValueError):
            build_electrostatic_grid(sine_potential(), CHARGE, -1.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
