"""Hex snapshot lines, merging them into raw chain specs, and file padding."""

__version__ = "0.1.0"