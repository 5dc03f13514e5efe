#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Force Grid Visualization
================================================================================

Project:        Mechanical AFM Force Field
Module:         visualization.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

Diagnostic plots of precomputed force grids:
- Energy and force maps on constant-height planes
- Force/energy profiles along z above a lateral point
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import LinearSegmentedColormap, TwoSlopeNorm
from typing import Tuple, Optional
from dataclasses import dataclass

from .grid import ForceGrid
from .interpolation import interpolate, sample_plane


def create_field_colormap():
    """
    Create a diverging colormap for signed energies and forces.

    Blue (negative) -> White (zero) -> Red (positive)
    """
    colors = [
        (0.0, 0.1, 0.5),    # Dark blue
        (0.2, 0.5, 1.0),    # Light blue
        (1.0, 1.0, 1.0),    # White
        (1.0, 0.5, 0.2),    # Orange
        (0.5, 0.0, 0.0),    # Dark red
    ]
    return LinearSegmentedColormap.from_list("field", colors, N=256)


FIELD_CMAP = create_field_colormap()

COMPONENTS = {"x": 0, "y": 1, "z": 2}


@dataclass
class VisualizationConfig:
    """Configuration for force grid plots."""
    samples: int = 64
    component: str = "z"     # "x", "y", "z" or "energy"
    show_quiver: bool = True
    quiver_stride: int = 4
    figsize: Tuple[int, int] = (8, 7)


def _signed_norm(values: np.ndarray) -> TwoSlopeNorm:
    limit = float(np.max(np.abs(values)))
    if limit == 0.0:
        limit = 1.0
    return TwoSlopeNorm(vmin=-limit, vcenter=0.0, vmax=limit)


def render_plane(
    force_grid: ForceGrid,
    z: float,
    config: Optional[VisualizationConfig] = None,
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Render an energy or force-component map at height z.

    Args:
        force_grid: Precomputed force grid
        z: Height of the plane
        config: Visualization configuration
        ax: Optional existing axes to draw on

    Returns:
        Matplotlib figure
    """
    if config is None:
        config = VisualizationConfig()

    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=config.figsize)
    else:
        fig = ax.figure

    xs, ys, forces, energies = sample_plane(force_grid, z, config.samples, config.samples)

    if config.component == "energy":
        values = energies
        label = "Energy"
    elif config.component in COMPONENTS:
        values = forces[..., COMPONENTS[config.component]]
        label = f"F{config.component}"
    else:
        raise ValueError(f"Unknown component '{config.component}'")

    extent = [xs[0], xs[-1], ys[0], ys[-1]]
    im = ax.imshow(
        values.T,  # Transpose for correct orientation
        origin='lower',
        extent=extent,
        cmap=FIELD_CMAP,
        norm=_signed_norm(values),
        aspect='equal',
        interpolation='bilinear'
    )

    if config.show_quiver:
        s = max(1, config.quiver_stride)
        gx, gy = np.meshgrid(xs[::s], ys[::s], indexing='ij')
        ax.quiver(
            gx, gy,
            forces[::s, ::s, 0], forces[::s, ::s, 1],
            color='black', alpha=0.5, width=0.003
        )

    plt.colorbar(im, ax=ax, label=label)
    ax.set_xlabel('x')
    ax.set_ylabel('y')
    ax.set_title(f'{label} at z = {z:.2f}')

    return fig


def render_z_profile(
    force_grid: ForceGrid,
    x: float,
    y: float,
    z_range: Tuple[float, float],
    n_points: int = 200,
    ax: Optional[plt.Axes] = None
) -> plt.Figure:
    """
    Plot energy and Fz along a vertical line above (x, y).

    Args:
        force_grid: Precomputed force grid
        x, y: Lateral position of the line
        z_range: (z_min, z_max)
        n_points: Number of samples along the line
        ax: Optional existing axes

    Returns:
        Matplotlib figure
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(10, 4))
    else:
        fig = ax.figure

    zs = np.linspace(z_range[0], z_range[1], n_points)
    energies = np.zeros(n_points)
    fz = np.zeros(n_points)
    for i, z in enumerate(zs):
        f, energies[i] = interpolate(force_grid, np.array([x, y, z]))
        fz[i] = f[2]

    ax.plot(zs, energies, 'b-', label='Energy', linewidth=1.5)
    ax.plot(zs, fz, 'r-', label='Fz', linewidth=1.5)
    ax.axhline(0.0, color='k', linewidth=0.5)

    ax.set_xlabel('z')
    ax.set_ylabel('Energy / Force')
    ax.set_title(f'Profile above ({x:.2f}, {y:.2f})')
    ax.legend(loc='best')
    ax.grid(True, alpha=0.3)

    return fig


def render_dashboard(
    force_grid: ForceGrid,
    z: float,
    profile_xy: Tuple[float, float],
    z_range: Tuple[float, float],
    config: Optional[VisualizationConfig] = None
) -> plt.Figure:
    """
    Energy map, Fz map and a z profile in one figure.
    """
    if config is None:
        config = VisualizationConfig()

    fig = plt.figure(figsize=(14, 10))

    ax_energy = fig.add_subplot(2, 2, 1)
    render_plane(force_grid, z, VisualizationConfig(
        samples=config.samples, component="energy", show_quiver=False
    ), ax=ax_energy)

    ax_fz = fig.add_subplot(2, 2, 2)
    render_plane(force_grid, z, VisualizationConfig(
        samples=config.samples, component="z",
        show_quiver=config.show_quiver, quiver_stride=config.quiver_stride
    ), ax=ax_fz)

    ax_profile = fig.add_subplot(2, 1, 2)
    render_z_profile(force_grid, profile_xy[0], profile_xy[1], z_range, ax=ax_profile)

    plt.tight_layout()
    return fig
