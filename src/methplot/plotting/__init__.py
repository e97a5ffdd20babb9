"""Composite plot rendering."""

from methplot.plotting.render import plot_tracks

__all__ = ["plot_tracks"]
