"""Annotation track: coloured blocks for DMRs, enhancers and similar intervals."""

from __future__ import annotations

import matplotlib.axes
from matplotlib.patches import Rectangle

from ..core.genome_interval import GenomeIntervalHandler, GenomicInterval
from .base import Track


class AnnotationTrack(Track):
    """Intervals drawn as filled blocks; only those in the window are drawn."""

    def __init__(
        self,
        intervals: list[GenomicInterval],
        name: str = "",
        fill: str = "green",
        color: str | None = None,
    ) -> None:
        super().__init__(name)
        self.intervals = list(intervals)
        self.fill = fill
        self.color = color or fill
        self._index = GenomeIntervalHandler.from_intervals(self.intervals)

    def visible(self, window: GenomicInterval) -> list[GenomicInterval]:
        return self._index.find_overlaps(window.chromosome, window.start, window.end)

    def plot_ax(self, ax: matplotlib.axes.Axes, window: GenomicInterval) -> None:
        ax.set_ylim(0, 1)
        for interval in self.visible(window):
            ax.add_patch(
                Rectangle(
                    (interval.start, 0.2),
                    interval.width,
                    0.6,
                    facecolor=self.fill,
                    edgecolor=self.color,
                    linewidth=0.75,
                )
            )
        ax.set_yticks([])
        self.set_title(ax)

    def __len__(self) -> int:
        return len(self.intervals)
