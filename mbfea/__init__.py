"""Hermite-smoothed contacts, FIRE minimisation, integrators and text output for 2D multi-body finite-element simulations."""

__version__ = "0.1.0"