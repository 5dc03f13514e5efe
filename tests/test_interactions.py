#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Interaction and Force Field Tests
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
from concurrent.futures import ThreadPoolExecutor
from afmsim.grid import DataGrid, ForceGrid
from afmsim.interactions import (
    InteractionKind,
    ForceField,
    LennardJones,
    Morse,
    Coulomb,
    Harmonic,
    HarmonicAngle,
    HarmonicDihedral,
    TipHarmonic,
    XYHarmonic,
    SubstrateWall,
    GridLookup,
    ElectrostaticGrid,
    evaluate_all,
    term_energy,
    numerical_forces
)


# Four atoms in a generic, non-degenerate arrangement
POSITIONS = np.array([
    [1.0, 0.2, 0.0],
    [0.0, 0.0, 0.0],
    [0.0, 0.0, 1.5],
    [0.8, 0.6, 1.6],
])


ANALYTIC_TERMS = [
    LennardJones(0, 1, es12=4.0, es6=4.0),
    Morse(0, 1, de=0.5, a=1.2, re=1.5),
    Coulomb(0, 2, qq=1.3),
    Harmonic(1, 3, k=10.0, r0=1.0),
    HarmonicAngle(0, 2, 1, k=2.0, theta0=1.9),
    HarmonicDihedral(0, 1, 2, 3, k=1.5, sigma0=0.3),
    TipHarmonic(0, 3, k=0.7, r0=0.3),
    XYHarmonic(1, k=0.4, anchor=(0.1, -0.2)),
    SubstrateWall(2, z0=-1.0, sigma=1.0, cutoff=4.0, multiplier=0.3, ulj=0.01),
]


def smooth_force_grid(periodic=True):
    """Force grid of the analytic field E = sin(x) cos(y) + z on a coarse lattice."""
    grid = DataGrid.zeros((8, 8, 8), spacing=(0.5, 0.5, 0.5), origin=(-2.0, -2.0, -2.0))
    r = grid.positions()
    x, y, z = r[..., 0], r[..., 1], r[..., 2]
    energies = np.sin(x) * np.cos(y) + z
    forces = np.stack([-np.cos(x) * np.cos(y), np.sin(x) * np.sin(y), -np.ones_like(z)], axis=-1)
    return ForceGrid(forces, energies, grid.spacing, grid.origin, periodic)


class TestInteractionTerms:
    """Tests for individual interaction terms."""

    @pytest.mark.parametrize("term", ANALYTIC_TERMS, ids=lambda t: t.kind.value)
    def test_forces_match_energy_gradient(self, term):
        """Analytic forces agree with central differences of the energy."""
        forces = np.zeros_like(POSITIONS)
        energies = np.zeros(len(POSITIONS))
        term.evaluate(POSITIONS, forces, energies)

        assert np.allclose(forces, numerical_forces(term, POSITIONS), atol=1e-5, rtol=1e-5)

    @pytest.mark.parametrize("term", ANALYTIC_TERMS, ids=lambda t: t.kind.value)
    def test_energy_on_every_atom(self, term):
        """Each atom of a term receives the full term energy; others none."""
        forces = np.zeros_like(POSITIONS)
        energies = np.zeros(len(POSITIONS))
        term.evaluate(POSITIONS, forces, energies)

        e = term_energy(term, POSITIONS)
        for i in range(len(POSITIONS)):
            if i in term.atoms:
                assert energies[i] == e
            else:
                assert energies[i] == 0.0
                assert np.all(forces[i] == 0.0)

    def test_lennard_jones_from_epsilon_sigma(self):
        term = LennardJones.from_epsilon_sigma(0, 1, epsilon=0.5, sigma=2.0)
        assert abs(term.es12 - 2.0 * 2.0 ** 12) < 1e-9
        assert abs(term.es6 - 2.0 * 2.0 ** 6) < 1e-12

    def test_substrate_shift(self):
        """The derived shift zeroes the energy at the cutoff."""
        wall = SubstrateWall(0, z0=1.0, sigma=2.0, cutoff=3.0, multiplier=0.5)
        positions = np.array([[0.0, 0.0, 4.0]])
        assert abs(term_energy(wall, positions)) < 1e-12

    def test_substrate_invalid_cutoff(self):
        with pytest.raises(ValueError):
            SubstrateWall(0, z0=0.0, sigma=1.0, cutoff=0.0, multiplier=1.0)

    def test_terms_are_immutable(self):
        term = Harmonic(0, 1, k=1.0, r0=1.0)
        with pytest.raises(AttributeError):
            term.k = 2.0


class TestGridLookup:
    """Tests for force grid lookup terms."""

    def test_node_values(self):
        """At a lattice node the grid term returns the stored values."""
        force_grid = smooth_force_grid()
        term = GridLookup(force_grid)
        positions = np.zeros((2, 3))
        positions[1] = force_grid.offset + force_grid.spacing * np.array([3, 5, 2])

        forces = np.zeros((2, 3))
        energies = np.zeros(2)
        term.evaluate(positions, forces, energies)

        assert energies[1] == force_grid.energies[3, 5, 2]
        assert np.array_equal(forces[1], force_grid.forces[3, 5, 2])
        assert energies[0] == 0.0
        assert np.all(forces[0] == 0.0)

    def test_default_atom_is_apex(self):
        assert GridLookup(smooth_force_grid()).atoms == (1,)

    def test_matches_interpolate(self):
        """The term and ForceGrid.interpolate agree off the nodes."""
        force_grid = smooth_force_grid(periodic=False)
        term = GridLookup(force_grid, atom=0)
        position = np.array([0.37, -0.81, 0.55])

        forces = np.zeros((1, 3))
        energies = np.zeros(1)
        term.evaluate(position[None, :], forces, energies)
        expected_force, expected_energy = force_grid.interpolate(position)

        assert abs(energies[0] - expected_energy) < 1e-14
        assert np.allclose(forces[0], expected_force)

    def test_electrostatic_grid_from_potential(self):
        """A constant potential gives q·V0 on the apex and no force."""
        potential = DataGrid(np.full((16, 16, 16), 0.5), (0.25, 0.25, 0.25), periodic=True)
        term = ElectrostaticGrid.from_potential(potential, tip_charge=-0.2, gaussian_width=0.4)

        assert term.kind is InteractionKind.ELECTROSTATIC_GRID
        forces, energies = evaluate_all([term], np.array([[0.0, 0.0, 5.0], [1.1, 0.3, 2.7]]))

        assert abs(energies[1] - 0.5 * -0.2) < 1e-3
        assert np.allclose(forces, 0.0, atol=1e-10)


class TestForceField:
    """Tests for the ordered force field collection."""

    def test_sum_of_terms(self):
        """The force field is the sum of its terms."""
        force_field = ForceField(ANALYTIC_TERMS)
        forces, energies = force_field.evaluate_all(POSITIONS)

        expected_f = np.zeros_like(POSITIONS)
        expected_e = np.zeros(len(POSITIONS))
        for term in ANALYTIC_TERMS:
            term.evaluate(POSITIONS, expected_f, expected_e)

        assert np.array_equal(forces, expected_f)
        assert np.array_equal(energies, expected_e)

    def test_deterministic(self):
        """Repeated evaluations are bitwise identical."""
        force_field = ForceField(ANALYTIC_TERMS)
        f1, e1 = force_field.evaluate_all(POSITIONS)
        f2, e2 = force_field.evaluate_all(POSITIONS)

        assert np.array_equal(f1, f2)
        assert np.array_equal(e1, e2)

    def test_evaluate_into_overwrites(self):
        """Caller-owned accumulators are zeroed before accumulation."""
        force_field = ForceField(ANALYTIC_TERMS)
        forces = np.full_like(POSITIONS, 99.0)
        energies = np.full(len(POSITIONS), -7.0)

        force_field.evaluate_into(POSITIONS, forces, energies)
        expected_f, expected_e = force_field.evaluate_all(POSITIONS)

        assert np.array_equal(forces, expected_f)
        assert np.array_equal(energies, expected_e)

    def test_module_level_evaluate_all(self):
        f1, e1 = evaluate_all(ANALYTIC_TERMS, POSITIONS)
        f2, e2 = ForceField(ANALYTIC_TERMS).evaluate_all(POSITIONS)
        assert np.array_equal(f1, f2)
        assert np.array_equal(e1, e2)

    def test_empty(self):
        """An empty force field yields zeros."""
        forces, energies = ForceField([]).evaluate_all(POSITIONS)
        assert np.all(forces == 0.0)
        assert np.all(energies == 0.0)

    def test_pair_terms_conserve_momentum(self):
        """Pair and multi-body terms without external anchors sum to zero force."""
        internal = [t for t in ANALYTIC_TERMS if not isinstance(t, (XYHarmonic, SubstrateWall))]
        forces, _ = ForceField(internal).evaluate_all(POSITIONS)
        assert np.allclose(np.sum(forces, axis=0), 0.0, atol=1e-10)

    def test_too_few_positions(self):
        force_field = ForceField([Harmonic(0, 5, k=1.0, r0=1.0)])
        assert force_field.n_atoms_required == 6
        with pytest.raises(IndexError):
            force_field.evaluate_all(np.zeros((3, 3)))

    @pytest.mark.parametrize("term", [
        Harmonic(0, -1, k=10.0, r0=1.0),
        HarmonicAngle(0, 1, -2, k=1.0, theta0=1.0),
        XYHarmonic(-1, k=1.0),
        GridLookup(smooth_force_grid(), atom=-1),
    ], ids=lambda t: t.kind.value)
    def test_negative_atom_index(self, term):
        """Negative indices are rejected instead of wrapping to the last atom."""
        with pytest.raises(IndexError):
            ForceField([term])
        with pytest.raises(IndexError):
            evaluate_all([term], np.zeros((3, 3)))

    def test_bad_position_shape(self):
        with pytest.raises(ValueError):
            ForceField(ANALYTIC_TERMS).evaluate_all(np.zeros((4, 2)))

    def test_bad_accumulator_shape(self):
        with pytest.raises(ValueError):
            ForceField(ANALYTIC_TERMS).evaluate_into(POSITIONS, np.zeros((3, 3)), np.zeros(4))

    def test_count_by_kind(self):
        terms = [Harmonic(0, 1, 1.0, 1.0), Coulomb(0, 1, 1.0), Harmonic(1, 2, 1.0, 1.0)]
        counts = ForceField(terms).count_by_kind()
        assert counts == {InteractionKind.HARMONIC: 2, InteractionKind.COULOMB: 1}
        assert len(ForceField(terms)) == 3

    def test_concurrent_evaluation(self):
        """Workers with their own buffers reproduce the serial results."""
        force_field = ForceField(ANALYTIC_TERMS + [GridLookup(smooth_force_grid(), atom=3)])
        rng = np.random.default_rng(5)
        configurations = [POSITIONS + rng.normal(scale=0.05, size=POSITIONS.shape) for _ in range(16)]

        serial = [force_field.evaluate_all(p) for p in configurations]
        with ThreadPoolExecutor(max_workers=4) as pool:
            parallel = list(pool.map(force_field.evaluate_all, configurations))

        for (f1, e1), (f2, e2) in zip(serial, parallel):
            assert np.array_equal(f1, f2)
            assert np.array_equal(e1, e2)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
