"""Base class for plot tracks."""

from __future__ import annotations

import abc

import matplotlib.axes

from ..core.genome_interval import GenomicInterval


class Track(abc.ABC):
    """
    One horizontal layer of a composite plot.

    ``plot_tracks`` hands every track its own axes. Tracks that share the
    display window get their x limits set to it before ``plot_ax`` runs;
    tracks with ``shares_window = False`` choose their own x scale.
    """

    shares_window: bool = True

    def __init__(self, name: str = "") -> None:
        self.name = name

    @abc.abstractmethod
    def plot_ax(self, ax: matplotlib.axes.Axes, window: GenomicInterval) -> None:
        """Draw the track onto ``ax`` for the given display window."""

    def set_title(self, ax: matplotlib.axes.Axes) -> None:
        """Write the track name to the left of the axes."""
        if self.name:
            ax.set_ylabel(
                self.name, rotation=0, ha="right", va="center", fontsize=8, labelpad=10
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
