"""Wavefront pursuit simulation on a rectangular grid."""

__version__ = "0.1.0"
