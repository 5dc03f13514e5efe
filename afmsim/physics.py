#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Interaction Physics Kernels
================================================================================

Project:        Mechanical AFM Force Field
Module:         physics.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

Compiled force/energy kernels, one per interaction term.

Every kernel has the same shape of signature:

    kernel(positions, forces, energies, <atom indices>, <parameters>)

and ADDS its contribution into forces (N x 3) and energies (N). Nothing is
ever overwritten, so any number of kernels can be applied to the same
accumulators in sequence. The energy of a term is added to every atom the
term acts on.

For pair terms r_vec = r_i - r_j points from atom j to atom i; the force f
is added to atom i and subtracted from atom j (Newton's third law).

The kernels are compiled with NumPy's floating point error model: a
degenerate geometry (zero bond length, colinear bonds) produces inf/nan in
the accumulators rather than raising.
"""

import numpy as np
from numba import jit
from typing import Tuple

from .vectors import dot3, cross3, norm3
from .interpolation import trilinear_interpolate


# Lateral offsets below this are treated as zero by the xy restraints
TOLERANCE = 1.0e-10


@jit(nopython=True, cache=True, error_model="numpy")
def lennard_jones_pair(
    positions: np.ndarray,
    forces: np.ndarray,
    energies: np.ndarray,
    i1: int,
    i2: int,
    es12: float,
    es6: float
) -> None:
    """
    Lennard-Jones pair in the es12/es6 parameterisation.

    V(r) = es12 / r¹² - es6 / r⁶

    With es12 = 4εσ¹² and es6 = 4εσ⁶ this is the usual 4ε[(σ/r)¹² - (σ/r)⁶].
    """
    dx = positions[i1, 0] - positions[i2, 0]
    dy = positions[i1, 1] - positions[i2, 1]
    dz = positions[i1, 2] - positions[i2, 2]

    r_sq = dx * dx + dy * dy + dz * dz
    r6 = r_sq * r_sq * r_sq
    term_a = es12 / (r6 * r6)
    term_b = es6 / r6

    e = term_a - term_b
    f_over_r = (12.0 * term_a - 6.0 * term_b) / r_sq

    forces[i1, 0] += f_over_r * dx
    forces[i1, 1] += f_over_r * dy
    forces[i1, 2] += f_over_r * dz
    forces[i2, 0] -= f_over_r * dx
    forces[i2, 1] -= f_over_r * dy
    forces[i2, 2] -= f_over_r * dz
    energies[i1] += e
    energies[i2] += e


@jit(nopython=True, cache=True, error_model="numpy")
def morse_pair(
    positions: np.ndarray,
    forces: np.ndarray,
    energies: np.ndarray,
    i1: int,
    i2: int,
    de: float,
    a: float,
    re: float
) -> None:
    """
    Morse pair.

    V(r) = De [1 - exp(-a (r - re))]²
    """
    dx = positions[i1, 0] - positions[i2, 0]
    dy = positions[i1, 1] - positions[i2, 1]
    dz = positions[i1, 2] - positions[i2, 2]
    r = np.sqrt(dx * dx + dy * dy + dz * dz)

    d_exp = np.exp(-a * (r - re))
    e = de * (d_exp * d_exp - 2.0 * d_exp + 1.0)
    f_over_r = 2.0 * de * a * (d_exp * d_exp - d_exp) / r

    forces[i1, 0] += f_over_r * dx
    forces[i1, 1] += f_over_r * dy
    forces[i1, 2] += f_over_r * dz
    forces[i2, 0] -= f_over_r * dx
    forces[i2, 1] -= f_over_r * dy
    forces[i2, 2] -= f_over_r * dz
    energies[i1] += e
    energies[i2] += e


@jit(nopython=True, cache=True, error_model="numpy")
def coulomb_pair(
    positions: np.ndarray,
    forces: np.ndarray,
    energies: np.ndarray,
    i1: int,
    i2: int,
    qq: float
) -> None:
    """
    Coulomb pair, V(r) = qq / r with the prefactor folded into qq.
    """
    dx = positions[i1, 0] - positions[i2, 0]
    dy = positions[i1, 1] - positions[i2, 1]
    dz = positions[i1, 2] - positions[i2, 2]
    r = np.sqrt(dx * dx + dy * dy + dz * dz)

    e = qq / r
    f_over_r = qq / (r * r * r)

    forces[i1, 0] += f_over_r * dx
    forces[i1, 1] += f_over_r * dy
    forces[i1, 2] += f_over_r * dz
    forces[i2, 0] -= f_over_r * dx
    forces[i2, 1] -= f_over_r * dy
    forces[i2, 2] -= f_over_r * dz
    energies[i1] += e
    energies[i2] += e


@jit(nopython=True, cache=True, error_model="numpy")
def harmonic_bond(
    positions: np.ndarray,
    forces: np.ndarray,
    energies: np.ndarray,
    i1: int,
    i2: int,
    k: float,
    r0: float
) -> None:
    """
    Harmonic bond, V(r) = k (r - r0)².

    Undefined at r = 0.
    """
    dx = positions[i1, 0] - positions[i2, 0]
    dy = positions[i1, 1] - positions[i2, 1]
    dz = positions[i1, 2] - positions[i2, 2]
    r = np.sqrt(dx * dx + dy * dy + dz * dz)

    dr = r - r0
    e = k * dr * dr
    f_over_r = -2.0 * k * dr / r

    forces[i1, 0] += f_over_r * dx
    forces[i1, 1] += f_over_r * dy
    forces[i1, 2] += f_over_r * dz
    forces[i2, 0] -= f_over_r * dx
    forces[i2, 1] -= f_over_r * dy
    forces[i2, 2] -= f_over_r * dz
    energies[i1] += e
    energies[i2] += e


@jit(nopython=True, cache=True, error_model="numpy")
def harmonic_angle(
    positions: np.ndarray,
    forces: np.ndarray,
    energies: np.ndarray,
    i1: int,
    i2: int,
    shared: int,
    k: float,
    theta0: float
) -> None:
    """
    Harmonic angle bend around the shared (vertex) atom.

    V(θ) = k (θ - θ0)²,  cos θ = (r1 · r2) / (|r1| |r2|)

    where r1 and r2 point from the vertex to the two outer atoms. The cosine
    is clamped to [-1, 1] before arccos so round-off on (anti)parallel bonds
    cannot leave the domain.
    """
    r1_vec = positions[i1] - positions[shared]
    r2_vec = positions[i2] - positions[shared]
    r1 = norm3(r1_vec)
    r2 = norm3(r2_vec)

    cos_t = dot3(r1_vec, r2_vec) / (r1 * r2)
    if cos_t > 1.0:
        cos_t = 1.0
    elif cos_t < -1.0:
        cos_t = -1.0

    theta = np.arccos(cos_t)
    d_theta = theta - theta0
    e = k * d_theta * d_theta

    energies[i1] += e
    energies[i2] += e
    energies[shared] += e

    # The bending force vanishes identically at the equilibrium angle
    if d_theta == 0.0:
        return

    sin_t = np.sin(theta)
    f_multiplier = -2.0 * k * d_theta / sin_t

    for c in range(3):
        f1 = -f_multiplier / r1 * (r2_vec[c] / r2 - r1_vec[c] * cos_t / r1)
        f2 = -f_multiplier / r2 * (r1_vec[c] / r1 - r2_vec[c] * cos_t / r2)
        forces[i1, c] += f1
        forces[i2, c] += f2
        forces[shared, c] -= f1 + f2


@jit(nopython=True, cache=True, error_model="numpy")
def harmonic_dihedral(
    positions: np.ndarray,
    forces: np.ndarray,
    energies: np.ndarray,
    i1: int,
    i2: int,
    i3: int,
    i4: int,
    k: float,
    sigma0: float
) -> None:
    """
    Harmonic torsion around the i2-i3 bond.

    V(σ) = k (σ - σ0)²,  tan σ = |r23| (n · r12) / (m · n)

    with r12 = r1 - r2, r23 = r2 - r3, r43 = r4 - r3 and the plane normals
    m = r12 × r23, n = r43 × r23.
    """
    r12 = positions[i1] - positions[i2]
    r23 = positions[i2] - positions[i3]
    r43 = positions[i4] - positions[i3]

    r23_len = norm3(r23)
    m_vec = cross3(r12, r23)
    n_vec = cross3(r43, r23)
    m_sq = dot3(m_vec, m_vec)
    n_sq = dot3(n_vec, n_vec)

    tan_s = dot3(n_vec, r12) * r23_len / dot3(m_vec, n_vec)
    sigma = np.arctan(tan_s)
    d_sigma = sigma - sigma0
    f_multiplier = 2.0 * k * d_sigma

    r12_r23 = dot3(r12, r23)
    r43_r23 = dot3(r43, r23)
    r23_sq = r23_len * r23_len

    for c in range(3):
        f1 = -f_multiplier * r23_len / m_sq * m_vec[c]
        f2 = -f_multiplier * (r43_r23 / (n_sq * r23_len) * n_vec[c]
                              - (r23_sq + r12_r23) / (m_sq * r23_len) * m_vec[c])
        f3 = -f_multiplier * (r12_r23 / (m_sq * r23_len) * m_vec[c]
                              + (r23_sq - r43_r23) / (n_sq * r23_len) * n_vec[c])
        f4 = f_multiplier * r23_len / n_sq * n_vec[c]
        forces[i1, c] += f1
        forces[i2, c] += f2
        forces[i3, c] += f3
        forces[i4, c] += f4

    e = k * d_sigma * d_sigma
    energies[i1] += e
    energies[i2] += e
    energies[i3] += e
    energies[i4] += e


@jit(nopython=True, cache=True, error_model="numpy")
def tip_harmonic(
    positions: np.ndarray,
    forces: np.ndarray,
    energies: np.ndarray,
    i1: int,
    i2: int,
    k: float,
    r0: float
) -> None:
    """
    Lateral (xy only) harmonic restraint between two atoms.

    V(ρ) = k (ρ - r0)²,  ρ = |(x1 - x2, y1 - y2)|
    """
    dx = positions[i1, 0] - positions[i2, 0]
    dy = positions[i1, 1] - positions[i2, 1]
    r = np.sqrt(dx * dx + dy * dy)

    dr = r - r0
    e = k * dr * dr

    if r > TOLERANCE:
        f_over_r = -2.0 * k * dr / r
        forces[i1, 0] += f_over_r * dx
        forces[i1, 1] += f_over_r * dy
        forces[i2, 0] -= f_over_r * dx
        forces[i2, 1] -= f_over_r * dy

    energies[i1] += e
    energies[i2] += e


@jit(nopython=True, cache=True, error_model="numpy")
def xy_harmonic(
    positions: np.ndarray,
    forces: np.ndarray,
    energies: np.ndarray,
    i: int,
    k: float,
    x0: float,
    y0: float
) -> None:
    """
    Lateral harmonic restraint of one atom to the fixed point (x0, y0).

    V(ρ) = k ρ²
    """
    dx = positions[i, 0] - x0
    dy = positions[i, 1] - y0
    r = np.sqrt(dx * dx + dy * dy)

    if r > TOLERANCE:
        forces[i, 0] += -2.0 * k * dx
        forces[i, 1] += -2.0 * k * dy

    energies[i] += k * r * r


@jit(nopython=True, cache=True, error_model="numpy")
def substrate_energy_force(
    dz: float,
    sigma: float,
    multiplier: float,
    ulj: float
) -> Tuple[float, float]:
    """
    Unshifted substrate wall energy and z force at height dz above the wall.

    V(dz) = m [2/5 (σ/dz)¹⁰ - (σ/dz)⁴] + ulj dz²
    F(dz) = -dV/dz = 4m/dz [(σ/dz)¹⁰ - (σ/dz)⁴] - 2 ulj dz
    """
    sig_z = sigma / dz
    sig_z2 = sig_z * sig_z
    sig_z4 = sig_z2 * sig_z2
    sig_z10 = sig_z4 * sig_z4 * sig_z2

    e = multiplier * (0.4 * sig_z10 - sig_z4) + ulj * dz * dz
    f = 4.0 * multiplier / dz * (sig_z10 - sig_z4) - 2.0 * ulj * dz
    return e, f


@jit(nopython=True, cache=True, error_model="numpy")
def substrate_wall(
    positions: np.ndarray,
    forces: np.ndarray,
    energies: np.ndarray,
    i: int,
    z0: float,
    sigma: float,
    cutoff: float,
    multiplier: float,
    ulj: float,
    shift: float
) -> None:
    """
    One-sided 10-4 substrate wall acting on the z coordinate of one atom.

    Active only for z - z0 <= cutoff; shift is subtracted so the energy is
    zero at the cutoff.
    """
    dz = positions[i, 2] - z0
    if dz > cutoff:
        return

    e, f = substrate_energy_force(dz, sigma, multiplier, ulj)
    forces[i, 2] += f
    energies[i] += e - shift


@jit(nopython=True, cache=True)
def grid_lookup(
    positions: np.ndarray,
    forces: np.ndarray,
    energies: np.ndarray,
    i: int,
    grid_forces: np.ndarray,
    grid_energies: np.ndarray,
    spacing: np.ndarray,
    origin: np.ndarray,
    periodic: bool
) -> None:
    """
    Add the interpolated grid force and energy at the position of atom i.
    """
    f, e = trilinear_interpolate(grid_forces, grid_energies, spacing, origin, periodic, positions[i])
    forces[i, 0] += f[0]
    forces[i, 1] += f[1]
    forces[i, 2] += f[2]
    energies[i] += e
