"""Visualization module for storm cell results."""

from .plotter import StormPlotter, copy_legend

__all__ = ['StormPlotter', 'copy_legend']
