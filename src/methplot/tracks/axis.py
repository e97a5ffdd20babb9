"""Genome axis track: a coordinate ruler for the display window."""

from __future__ import annotations

import matplotlib.axes
from matplotlib import ticker

from ..core.genome_interval import GenomicInterval
from .base import Track


class GenomeAxisTrack(Track):
    """Horizontal ruler with labelled coordinate ticks."""

    def __init__(self, name: str = "", n_ticks: int = 6) -> None:
        super().__init__(name)
        self.n_ticks = n_ticks

    def tick_positions(self, window: GenomicInterval) -> list[int]:
        locator = ticker.MaxNLocator(nbins=self.n_ticks, integer=True)
        ticks = locator.tick_values(window.start, window.end)
        return [int(t) for t in ticks if window.start <= t <= window.end]

    def plot_ax(self, ax: matplotlib.axes.Axes, window: GenomicInterval) -> None:
        ax.set_ylim(0, 1)
        ax.axhline(0.6, color="dimgrey", linewidth=1)

        for tick in self.tick_positions(window):
            ax.vlines(tick, 0.45, 0.75, color="dimgrey", linewidth=1)
            ax.text(tick, 0.3, f"{tick:,}", ha="center", va="top", fontsize=7, color="dimgrey")

        # 5' -> 3' direction
        ax.annotate(
            "",
            xy=(window.end, 0.6),
            xytext=(window.end - window.width * 0.02, 0.6),
            arrowprops=dict(arrowstyle="->", color="dimgrey"),
        )
        ax.text(
            window.start, 0.95, f"{window.chromosome} ({window.width:,} bp)",
            ha="left", va="top", fontsize=7, color="dimgrey",
        )
        ax.set_yticks([])
        self.set_title(ax)
