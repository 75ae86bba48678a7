"""Dining philosophers simulation with threaded philosophers."""

__version__ = "0.1.0"