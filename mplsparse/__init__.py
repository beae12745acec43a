"""Blu-ray MPLS playlist decoder."""

__version__ = "0.1.0"
