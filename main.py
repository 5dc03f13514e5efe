#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Mechanical AFM Force Field - Command Line Interface
================================================================================

Project:        Mechanical AFM Force Field
Module:         main.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 19, 2026
Last Updated:   October 19, 2026

License:        MIT License
================================================================================

Diagnostic command line interface for the force-field core:
- Build the electrostatic force grid for a synthetic sample and plot it
- Check the analytic forces of every interaction term against finite
  differences of its energy
"""

import argparse
import logging
import time

import numpy as np
import matplotlib.pyplot as plt

from afmsim.config import DemoConfig, LennardJonesParameters, SubstrateParameters, TipParameters
from afmsim.electrostatics import build_electrostatic_grid, gaussian_tip_density
from afmsim.grid import DataGrid
from afmsim.interactions import (
    ForceField, ElectrostaticGrid, Harmonic, HarmonicAngle, HarmonicDihedral,
    Morse, Coulomb, TipHarmonic, XYHarmonic, numerical_forces
)
from afmsim.visualization import VisualizationConfig, render_dashboard


def make_sample_potential(config: DemoConfig) -> DataGrid:
    """
    Periodic potential of softened point charges, V = Σ q / √(r² + a²).

    Distances use the minimum image through the grid boundaries.
    """
    grid = DataGrid.zeros(config.n_grid, (config.spacing,) * 3, config.origin, periodic=True)
    positions = grid.positions()
    box = np.array(config.box_size)
    a_sqr = config.softening ** 2

    for x, y, z, q in config.sample_charges:
        d = positions - np.array([x, y, z])
        d -= box * np.rint(d / box)
        grid.values += q / np.sqrt(np.sum(d * d, axis=-1) + a_sqr)

    return grid


def run_grid_demo(config: DemoConfig, show: bool = True):
    """
    Build and plot the electrostatic force grid of a synthetic sample.

    Args:
        config: Demo configuration
        show: Open an interactive window after saving the plot
    """
    print("=" * 60)
    print("Mechanical AFM - Electrostatic Force Grid")
    print("=" * 60)

    nx, ny, nz = config.n_grid
    print(f"\nSample potential grid: {nx} x {ny} x {nz} (spacing {config.spacing})")
    potential = make_sample_potential(config)

    tip = config.tip
    rho = gaussian_tip_density(config.n_grid, potential.spacing, tip.charge, tip.gaussian_width)
    total_charge = rho.values.sum() * rho.volume_element
    print(f"Tip charge {tip.charge:+.4f}, width {tip.gaussian_width:.3f}")
    print(f"  Discretised tip charge: {total_charge:+.6f}")

    t_start = time.time()
    force_grid = build_electrostatic_grid(potential, tip.charge, tip.gaussian_width)
    t_end = time.time()
    print(f"\nForce grid built in {t_end - t_start:.2f} seconds")

    energies = force_grid.energies
    force_norm = np.linalg.norm(force_grid.forces, axis=-1)
    print(f"  Energy range:    [{energies.min():+.5f}, {energies.max():+.5f}]")
    print(f"  Max |F|:         {force_norm.max():.5f}")

    x, y, _ = np.mean(np.array(config.sample_charges)[:, :3], axis=0)
    z_top = config.origin[2] + (nz - 1) * config.spacing
    fig = render_dashboard(
        force_grid, config.plot_height, (x, y), (config.origin[2], z_top),
        VisualizationConfig(samples=config.plot_samples)
    )
    fig.savefig(config.output_path, dpi=150)
    print(f"\nPlot saved to {config.output_path}")

    if show:
        plt.show()
    plt.close(fig)


def build_check_model(config: DemoConfig):
    """
    Small tip + sample model touching every interaction kind.

    Atom 0 is the tip anchor, atom 1 the tip apex, atoms 2-5 sample atoms.
    """
    positions = np.array([
        [6.0, 6.0, 10.0],
        [6.3, 6.2, 7.0],
        [5.0, 5.5, 3.0],
        [6.4, 5.5, 3.0],
        [6.4, 6.7, 3.3],
        [7.5, 7.0, 3.0],
    ])

    lj = LennardJonesParameters(epsilon=0.01, sigma=3.0)
    substrate = SubstrateParameters(z0=0.0, sigma=3.0, cutoff=7.5, multiplier=0.05, ulj=0.001)
    potential = make_sample_potential(config)

    terms = [
        TipHarmonic(1, 0, k=0.5, r0=0.0),
        Harmonic(1, 0, k=10.0, r0=3.2),
        lj.interaction(1, 2),
        lj.interaction(1, 3),
        Morse(1, 4, de=0.1, a=1.5, re=3.5),
        Coulomb(1, 5, qq=-0.05),
        XYHarmonic(1, k=0.2, anchor=(6.0, 6.0)),
        substrate.interaction(1),
        HarmonicAngle(2, 4, 3, k=1.0, theta0=np.radians(100.0)),
        HarmonicDihedral(2, 3, 4, 5, k=0.5, sigma0=np.radians(20.0)),
        ElectrostaticGrid.from_potential(potential, config.tip.charge, config.tip.gaussian_width),
    ]
    return positions, ForceField(terms)


def run_force_check(config: DemoConfig):
    """
    Compare analytic forces with finite differences of the energy, term by term.
    """
    print("=" * 60)
    print("Mechanical AFM - Force Consistency Check")
    print("=" * 60)

    positions, force_field = build_check_model(config)

    print(f"\n{len(force_field)} terms on {positions.shape[0]} atoms")
    print(f"{'term':<20s} {'max |F - F_num|':>18s}")

    for term in force_field:
        if isinstance(term, ElectrostaticGrid):
            # Forces and energies are interpolated independently
            continue
        analytic = np.zeros_like(positions)
        energies = np.zeros(positions.shape[0])
        term.evaluate(positions, analytic, energies)
        error = np.max(np.abs(analytic - numerical_forces(term, positions)))
        flag = "✓" if error < 1e-5 else "⚠"
        print(f"{term.kind.value:<20s} {error:>18.3e} {flag}")

    forces, energies = force_field.evaluate_all(positions)
    print(f"\nTotal force on apex: {forces[1]}")
    print(f"Energy on apex:      {energies[1]:+.6f}")

    print(f"Net force (all atoms): {np.sum(forces, axis=0)}")


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Mechanical AFM force-field diagnostics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --grid-demo         Build and plot an electrostatic force grid
  python main.py --check             Check analytic forces of every term
        """
    )

    parser.add_argument('--grid-demo', action='store_true',
                       help='Build and plot the electrostatic force grid')
    parser.add_argument('--check', action='store_true',
                       help='Run the force consistency check')
    parser.add_argument('--points', '-n', type=int, default=48,
                       help='Grid points per axis (default: 48)')
    parser.add_argument('--spacing', type=float, default=0.25,
                       help='Grid spacing (default: 0.25)')
    parser.add_argument('--charge', '-q', type=float, default=-0.1,
                       help='Tip charge (default: -0.1)')
    parser.add_argument('--width', '-w', type=float, default=0.7,
                       help='Tip Gaussian width (default: 0.7)')
    parser.add_argument('--height', type=float, default=6.0,
                       help='Height of the plotted plane (default: 6.0)')
    parser.add_argument('--output', '-o', default='electrostatic_grid.png',
                       help='Plot file name')
    parser.add_argument('--no-show', action='store_true',
                       help='Do not open a plot window')
    parser.add_argument('--verbose', '-v', action='store_true',
                       help='Debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s"
    )

    config = DemoConfig(
        n_grid=(args.points,) * 3,
        spacing=args.spacing,
        tip=TipParameters(charge=args.charge, gaussian_width=args.width),
        plot_height=args.height,
        output_path=args.output
    )

    if args.grid_demo:
        run_grid_demo(config, show=not args.no_show)
    elif args.check:
        run_force_check(config)
    else:
        parser.print_help()
        print("\nNo action specified. Run with --grid-demo or --check")


if __name__ == "__main__":
    main()
