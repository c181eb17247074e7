"""Taxi rank boarding simulation."""

__version__ = "0.1.0"
