"""Powertrain Lab: thermochemistry calculators and an EV energy-flow simulator."""

__version__ = "0.1.0"
