"""Plotting utilities for simulation output."""
