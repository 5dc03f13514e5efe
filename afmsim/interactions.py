#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Interaction Terms and Force Field
================================================================================

Project:        Mechanical AFM Force Field
Module:         interactions.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

The interaction set is closed: every term is one of the InteractionKind
members and is represented by a frozen dataclass that stores its atom
indices and fixed parameters. evaluate() hands those to the matching
compiled kernel in physics.py, which adds into the caller's accumulators.

A ForceField is the fixed, ordered collection of terms assembled once at
setup. Evaluation only reads the positions and the (immutable) terms and
writes to the accumulators passed in, so independent scan points can be
evaluated concurrently as long as each worker owns its own buffers.
"""

import logging
import numpy as np
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import ClassVar, Dict, Iterable, Iterator, Tuple, Union

from .grid import DataGrid, ForceGrid
from .physics import (
    lennard_jones_pair,
    morse_pair,
    coulomb_pair,
    harmonic_bond,
    harmonic_angle,
    harmonic_dihedral,
    tip_harmonic,
    xy_harmonic,
    substrate_energy_force,
    substrate_wall,
    grid_lookup
)


logger = logging.getLogger(__name__)

# Conventional atom roles in the position array
ANCHOR_INDEX = 0
TIP_APEX_INDEX = 1


class InteractionKind(Enum):
    """Physical interaction terms understood by the force field."""
    LENNARD_JONES = "lennard_jones"
    MORSE = "morse"
    COULOMB = "coulomb"
    HARMONIC = "harmonic"
    HARMONIC_ANGLE = "harmonic_angle"
    HARMONIC_DIHEDRAL = "harmonic_dihedral"
    TIP_HARMONIC = "tip_harmonic"
    XY_HARMONIC = "xy_harmonic"
    SUBSTRATE_WALL = "substrate_wall"
    GRID_LOOKUP = "grid_lookup"
    ELECTROSTATIC_GRID = "electrostatic_grid"


@dataclass(frozen=True)
class LennardJones:
    """Lennard-Jones pair, V = es12/r¹² - es6/r⁶."""
    atom_i: int
    atom_j: int
    es12: float
    es6: float
    kind: ClassVar[InteractionKind] = InteractionKind.LENNARD_JONES

    @classmethod
    def from_epsilon_sigma(cls, atom_i: int, atom_j: int, epsilon: float, sigma: float) -> "LennardJones":
        """Build from well depth ε and zero-crossing distance σ."""
        sigma6 = sigma ** 6
        return cls(atom_i, atom_j, es12=4.0 * epsilon * sigma6 * sigma6, es6=4.0 * epsilon * sigma6)

    @property
    def atoms(self) -> Tuple[int, ...]:
        return (self.atom_i, self.atom_j)

    def evaluate(self, positions: np.ndarray, forces: np.ndarray, energies: np.ndarray) -> None:
        lennard_jones_pair(positions, forces, energies, self.atom_i, self.atom_j, self.es12, self.es6)


@dataclass(frozen=True)
class Morse:
    """Morse pair with well depth de, stiffness a and equilibrium distance re."""
    atom_i: int
    atom_j: int
    de: float
    a: float
    re: float
    kind: ClassVar[InteractionKind] = InteractionKind.MORSE

    @property
    def atoms(self) -> Tuple[int, ...]:
        return (self.atom_i, self.atom_j)

    def evaluate(self, positions: np.ndarray, forces: np.ndarray, energies: np.ndarray) -> None:
        morse_pair(positions, forces, energies, self.atom_i, self.atom_j, self.de, self.a, self.re)


@dataclass(frozen=True)
class Coulomb:
    """Coulomb pair; qq is the charge product including the unit prefactor."""
    atom_i: int
    atom_j: int
    qq: float
    kind: ClassVar[InteractionKind] = InteractionKind.COULOMB

    @property
    def atoms(self) -> Tuple[int, ...]:
        return (self.atom_i, self.atom_j)

    def evaluate(self, positions: np.ndarray, forces: np.ndarray, energies: np.ndarray) -> None:
        coulomb_pair(positions, forces, energies, self.atom_i, self.atom_j, self.qq)


@dataclass(frozen=True)
class Harmonic:
    """Harmonic bond, V = k (r - r0)²."""
    atom_i: int
    atom_j: int
    k: float
    r0: float
    kind: ClassVar[InteractionKind] = InteractionKind.HARMONIC

    @property
    def atoms(self) -> Tuple[int, ...]:
        return (self.atom_i, self.atom_j)

    def evaluate(self, positions: np.ndarray, forces: np.ndarray, energies: np.ndarray) -> None:
        harmonic_bond(positions, forces, energies, self.atom_i, self.atom_j, self.k, self.r0)


@dataclass(frozen=True)
class HarmonicAngle:
    """Harmonic angle i-shared-j with equilibrium angle theta0 (radians)."""
    atom_i: int
    atom_j: int
    shared: int
    k: float
    theta0: float
    kind: ClassVar[InteractionKind] = InteractionKind.HARMONIC_ANGLE

    @property
    def atoms(self) -> Tuple[int, ...]:
        return (self.atom_i, self.atom_j, self.shared)

    def evaluate(self, positions: np.ndarray, forces: np.ndarray, energies: np.ndarray) -> None:
        harmonic_angle(positions, forces, energies, self.atom_i, self.atom_j, self.shared, self.k, self.theta0)


@dataclass(frozen=True)
class HarmonicDihedral:
    """Harmonic torsion 1-2-3-4 with equilibrium angle sigma0 (radians)."""
    atom_1: int
    atom_2: int
    atom_3: int
    atom_4: int
    k: float
    sigma0: float
    kind: ClassVar[InteractionKind] = InteractionKind.HARMONIC_DIHEDRAL

    @property
    def atoms(self) -> Tuple[int, ...]:
        return (self.atom_1, self.atom_2, self.atom_3, self.atom_4)

    def evaluate(self, positions: np.ndarray, forces: np.ndarray, energies: np.ndarray) -> None:
        harmonic_dihedral(
            positions, forces, energies,
            self.atom_1, self.atom_2, self.atom_3, self.atom_4,
            self.k, self.sigma0
        )


@dataclass(frozen=True)
class TipHarmonic:
    """Lateral restraint between two tip atoms, V = k (ρ - r0)²."""
    atom_i: int
    atom_j: int
    k: float
    r0: float = 0.0
    kind: ClassVar[InteractionKind] = InteractionKind.TIP_HARMONIC

    @property
    def atoms(self) -> Tuple[int, ...]:
        return (self.atom_i, self.atom_j)

    def evaluate(self, positions: np.ndarray, forces: np.ndarray, energies: np.ndarray) -> None:
        tip_harmonic(positions, forces, energies, self.atom_i, self.atom_j, self.k, self.r0)


@dataclass(frozen=True)
class XYHarmonic:
    """Lateral restraint of one atom to a fixed (x, y) anchor, V = k ρ²."""
    atom: int
    k: float
    anchor: Tuple[float, float] = (0.0, 0.0)
    kind: ClassVar[InteractionKind] = InteractionKind.XY_HARMONIC

    @property
    def atoms(self) -> Tuple[int, ...]:
        return (self.atom,)

    def evaluate(self, positions: np.ndarray, forces: np.ndarray, energies: np.ndarray) -> None:
        xy_harmonic(positions, forces, energies, self.atom, self.k, float(self.anchor[0]), float(self.anchor[1]))


@dataclass(frozen=True)
class SubstrateWall:
    """
    One-sided 10-4 wall below height z0 + cutoff, acting along z only.

    The energy shift is derived from the other parameters so that the energy
    vanishes at the cutoff.
    """
    atom: int
    z0: float
    sigma: float
    cutoff: float
    multiplier: float
    ulj: float = 0.0
    kind: ClassVar[InteractionKind] = InteractionKind.SUBSTRATE_WALL

    def __post_init__(self):
        if self.cutoff <= 0:
            raise ValueError(f"Substrate cutoff must be positive, got {self.cutoff}")

    @cached_property
    def shift(self) -> float:
        """Unshifted wall energy at the cutoff height."""
        e, _ = substrate_energy_force(self.cutoff, self.sigma, self.multiplier, self.ulj)
        return e

    @property
    def atoms(self) -> Tuple[int, ...]:
        return (self.atom,)

    def evaluate(self, positions: np.ndarray, forces: np.ndarray, energies: np.ndarray) -> None:
        substrate_wall(
            positions, forces, energies, self.atom,
            self.z0, self.sigma, self.cutoff, self.multiplier, self.ulj, self.shift
        )


@dataclass(frozen=True, eq=False)
class GridLookup:
    """Force and energy on one atom read from a precomputed ForceGrid."""
    force_grid: ForceGrid
    atom: int = TIP_APEX_INDEX
    kind: ClassVar[InteractionKind] = InteractionKind.GRID_LOOKUP

    @property
    def atoms(self) -> Tuple[int, ...]:
        return (self.atom,)

    def evaluate(self, positions: np.ndarray, forces: np.ndarray, energies: np.ndarray) -> None:
        grid = self.force_grid
        grid_lookup(
            positions, forces, energies, self.atom,
            grid.forces, grid.energies, grid.spacing, grid.offset, grid.periodic
        )


@dataclass(frozen=True, eq=False)
class ElectrostaticGrid(GridLookup):
    """Tip-sample electrostatics from an FFT-precomputed ForceGrid."""
    kind: ClassVar[InteractionKind] = InteractionKind.ELECTROSTATIC_GRID

    @classmethod
    def from_potential(
        cls,
        potential: DataGrid,
        tip_charge: float,
        gaussian_width: float,
        atom: int = TIP_APEX_INDEX
    ) -> "ElectrostaticGrid":
        """Precompute the electrostatic force grid for a sample potential."""
        # Imported here: electrostatics builds on grid/fourier only
        from .electrostatics import build_electrostatic_grid
        return cls(build_electrostatic_grid(potential, tip_charge, gaussian_width), atom)


Interaction = Union[
    LennardJones, Morse, Coulomb, Harmonic, HarmonicAngle, HarmonicDihedral,
    TipHarmonic, XYHarmonic, SubstrateWall, GridLookup, ElectrostaticGrid
]


def _check_positions(positions: np.ndarray) -> np.ndarray:
    positions = np.ascontiguousarray(positions, dtype=np.float64)
    if positions.ndim != 2 or positions.shape[1] != 3:
        raise ValueError(f"Positions must have shape (N, 3), got {positions.shape}")
    return positions


class ForceField:
    """
    Fixed, ordered collection of interaction terms.

    Terms are evaluated in the order given, so floating point summation is
    reproducible from run to run.
    """

    def __init__(self, interactions: Iterable[Interaction]):
        """
        Raises:
            IndexError: If a term refers to a negative atom index
        """
        self.interactions: Tuple[Interaction, ...] = tuple(interactions)
        for term in self.interactions:
            if min(term.atoms) < 0:
                raise IndexError(f"{term.kind.value} term has a negative atom index: {term.atoms}")

        self.n_atoms_required = 1 + max(
            (max(term.atoms) for term in self.interactions), default=-1
        )

        counts = ", ".join(f"{kind.value}={n}" for kind, n in self.count_by_kind().items())
        logger.info("Force field assembled with %d terms (%s)", len(self.interactions), counts or "empty")

    def __len__(self) -> int:
        return len(self.interactions)

    def __iter__(self) -> Iterator[Interaction]:
        return iter(self.interactions)

    def count_by_kind(self) -> Dict[InteractionKind, int]:
        """Number of terms of each kind, in order of first appearance."""
        return dict(Counter(term.kind for term in self.interactions))

    def check_atom_count(self, n_atoms: int) -> None:
        """
        Raises:
            IndexError: If a term refers to an atom index >= n_atoms
        """
        if n_atoms < self.n_atoms_required:
            raise IndexError(
                f"Force field references atom {self.n_atoms_required - 1} "
                f"but only {n_atoms} positions were given"
            )

    def evaluate_into(self, positions: np.ndarray, forces: np.ndarray, energies: np.ndarray) -> None:
        """
        Zero caller-owned accumulators and add every term into them.

        Args:
            positions: (N, 3) float64 positions
            forces: (N, 3) float64 force accumulator, overwritten
            energies: (N,) float64 energy accumulator, overwritten
        """
        positions = _check_positions(positions)
        n_atoms = positions.shape[0]
        if forces.shape != (n_atoms, 3) or energies.shape != (n_atoms,):
            raise ValueError(
                f"Accumulator shapes {forces.shape} / {energies.shape} do not match {n_atoms} positions"
            )
        self.check_atom_count(n_atoms)

        forces.fill(0.0)
        energies.fill(0.0)
        for term in self.interactions:
            term.evaluate(positions, forces, energies)

    def evaluate_all(self, positions: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Evaluate every term at the given configuration.

        Args:
            positions: (N, 3) atom positions

        Returns:
            forces: (N, 3) accumulated forces
            energies: (N,) accumulated energies
        """
        positions = _check_positions(positions)
        forces = np.zeros_like(positions)
        energies = np.zeros(positions.shape[0])
        self.evaluate_into(positions, forces, energies)
        return forces, energies


def evaluate_all(interactions: Iterable[Interaction], positions: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Evaluate a sequence of interaction terms, see ForceField.evaluate_all."""
    return ForceField(interactions).evaluate_all(positions)


def term_energy(term: Interaction, positions: np.ndarray) -> float:
    """
    Energy of a single term.

    Every atom a term acts on receives the same energy, so the value on the
    term's first atom is the term's energy.
    """
    positions = _check_positions(positions)
    forces = np.zeros_like(positions)
    energies = np.zeros(positions.shape[0])
    term.evaluate(positions, forces, energies)
    return float(energies[term.atoms[0]])


def numerical_forces(term: Interaction, positions: np.ndarray, delta: float = 1.0e-6) -> np.ndarray:
    """
    Central-difference forces -dV/dr of a single term.

    Used to check the analytic forces of a term against its energy.

    Args:
        term: Interaction term
        positions: (N, 3) positions
        delta: Displacement used for the finite differences

    Returns:
        (N, 3) array of numerical forces
    """
    positions = _check_positions(positions)
    forces = np.zeros_like(positions)
    displaced = positions.copy()

    for i in term.atoms:
        for c in range(3):
            displaced[i, c] = positions[i, c] + delta
            e_plus = term_energy(term, displaced)
            displaced[i, c] = positions[i, c] - delta
            e_minus = term_energy(term, displaced)
            displaced[i, c] = positions[i, c]
            forces[i, c] = -(e_plus - e_minus) / (2.0 * delta)

    return forces
