#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Parameter Dataclasses
================================================================================

Project:        Mechanical AFM Force Field
Module:         config.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

Plain parameter containers with defaults and derived quantities. Parsing of
parameter files is left to the calling application; these dataclasses are
what it hands to the force field.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from .interactions import LennardJones, SubstrateWall, TIP_APEX_INDEX


@dataclass
class LennardJonesParameters:
    """
    Lennard-Jones parameters in the ε/σ form.

    Converted to the es12/es6 form used by the force field:
    es12 = 4εσ¹², es6 = 4εσ⁶.
    """
    epsilon: float = 1.0      # Potential well depth
    sigma: float = 1.0        # Zero-crossing distance

    def __post_init__(self):
        if self.sigma <= 0:
            raise ValueError(f"sigma must be positive, got {self.sigma}")

    @property
    def es12(self) -> float:
        return 4.0 * self.epsilon * self.sigma ** 12

    @property
    def es6(self) -> float:
        return 4.0 * self.epsilon * self.sigma ** 6

    @property
    def r_min(self) -> float:
        """Pair separation of the well bottom, where V = -ε."""
        return self.sigma * (2.0 ** (1.0 / 6.0))

    def interaction(self, atom_i: int, atom_j: int) -> LennardJones:
        return LennardJones(atom_i, atom_j, self.es12, self.es6)


@dataclass
class TipParameters:
    """Electrostatic description of the tip apex."""
    charge: float = 0.0           # Total tip charge
    gaussian_width: float = 0.7   # Standard deviation of the smeared charge
    apex_index: int = TIP_APEX_INDEX

    def __post_init__(self):
        if self.gaussian_width <= 0:
            raise ValueError(f"gaussian_width must be positive, got {self.gaussian_width}")
        if self.apex_index < 0:
            raise ValueError(f"apex_index must be non-negative, got {self.apex_index}")


@dataclass
class SubstrateParameters:
    """
    10-4 substrate wall.

    The wall sits at height z0 and acts on atoms closer than `cutoff` to it.
    """
    z0: float = 0.0
    sigma: float = 3.0
    cutoff: float = 7.5
    multiplier: float = 1.0
    ulj: float = 0.0

    def __post_init__(self):
        if self.cutoff <= 0:
            raise ValueError(f"cutoff must be positive, got {self.cutoff}")

    def interaction(self, atom: int = TIP_APEX_INDEX) -> SubstrateWall:
        return SubstrateWall(atom, self.z0, self.sigma, self.cutoff, self.multiplier, self.ulj)


@dataclass
class DemoConfig:
    """Configuration for the diagnostic force-grid demo."""
    # Potential grid
    n_grid: Tuple[int, int, int] = (48, 48, 48)
    spacing: float = 0.25
    origin: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    # Sample: point charges (x, y, z, q) softened over `softening`
    sample_charges: List[Tuple[float, float, float, float]] = field(default_factory=lambda: [
        (4.0, 6.0, 3.0, 0.4),
        (8.0, 6.0, 3.0, -0.4),
    ])
    softening: float = 0.5

    tip: TipParameters = field(default_factory=lambda: TipParameters(charge=-0.1, gaussian_width=0.7))

    # Plot
    plot_height: float = 6.0
    plot_samples: int = 64
    output_path: str = "electrostatic_grid.png"

    def __post_init__(self):
        if len(self.n_grid) != 3 or min(self.n_grid) < 2:
            raise ValueError(f"n_grid must be three dimensions of at least 2 points, got {self.n_grid}")
        if self.spacing <= 0:
            raise ValueError(f"spacing must be positive, got {self.spacing}")
        if self.softening <= 0:
            raise ValueError(f"softening must be positive, got {self.softening}")

    @property
    def box_size(self) -> Tuple[float, float, float]:
        return tuple(n * self.spacing for n in self.n_grid)
