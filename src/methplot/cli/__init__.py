"""Command line interface."""

from methplot.cli.plot import app

__all__ = ["app"]
