#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Mechanical AFM Force Field
================================================================================

Project:        Mechanical AFM Force Field
Description:    Force-field evaluation engine for simulated Atomic Force
                Microscopy images with a relaxing mechanical tip model

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

This package implements the computational core of a mechanical AFM model:
- Pairwise and multi-body interaction terms (Lennard-Jones, Morse, Coulomb,
  harmonic bond/angle/dihedral, lateral tip restraints, substrate wall)
- FFT-based precomputation of the tip-sample electrostatic force field
- Periodic trilinear interpolation of precomputed force/energy grids

Modules:
    - vectors: Small compiled 3-vector helpers
    - grid: DataGrid and ForceGrid containers
    - fourier: Forward/inverse transforms of data grids
    - physics: Compiled force/energy kernels for every interaction term
    - interactions: Interaction variants and the ForceField collection
    - electrostatics: Gaussian tip density and electrostatic grid builder
    - interpolation: Trilinear sampling of force grids
    - config: Parameter dataclasses
    - visualization: Diagnostic plots of force grids
"""

__version__ = "1.0.0"
__author__ = "Ryan Kamp"
