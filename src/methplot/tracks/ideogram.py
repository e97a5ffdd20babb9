"""Ideogram track: chromosome overview with the displayed window outlined."""

from __future__ import annotations

import logging
from typing import Optional

import matplotlib.axes
import pandas as pd
from matplotlib.patches import Rectangle

from ..core.genome_interval import GenomicInterval
from .base import Track

logger = logging.getLogger(__name__)

# UCSC Giemsa stain -> fill colour
STAIN_COLORS = {
    "gneg": "#ffffff",
    "gpos25": "#c0c0c0",
    "gpos33": "#a8a8a8",
    "gpos50": "#808080",
    "gpos66": "#565656",
    "gpos75": "#404040",
    "gpos100": "#000000",
    "gvar": "#dcdcdc",
    "stalk": "#708090",
    "acen": "#b22222",
}


class IdeogramTrack(Track):
    """
    Schematic chromosome.

    With a UCSC cytoband table the chromosome is drawn band by band;
    otherwise as a plain bar whose length comes from ``length`` or, lazily,
    from the annotation's chromosome extent.
    """

    shares_window = False

    def __init__(
        self,
        chromosome: str,
        cytobands: Optional[pd.DataFrame] = None,
        annotation=None,
        length: Optional[int] = None,
        name: str = "",
    ) -> None:
        super().__init__(name or chromosome)
        self.chromosome = chromosome
        self.annotation = annotation
        self._length = length
        self.bands = None
        if cytobands is not None:
            self.bands = cytobands[cytobands["chrom"] == chromosome].sort_values("start")
            if self.bands.empty:
                logger.warning(f"No cytobands for {chromosome}, drawing a plain ideogram")
                self.bands = None

    def chromosome_length(self, window: GenomicInterval) -> int:
        """Length of the drawn chromosome, never shorter than the window."""
        if self.bands is not None:
            length = int(self.bands["end"].max())
        elif self._length is not None:
            length = self._length
        elif self.annotation is not None:
            length = self.annotation.chromosome_extent(self.chromosome)
        else:
            length = 0
        return max(length, window.end)

    def plot_ax(self, ax: matplotlib.axes.Axes, window: GenomicInterval) -> None:
        length = self.chromosome_length(window)
        ax.set_xlim(0, length)
        ax.set_ylim(0, 1)

        if self.bands is not None:
            for band in self.bands.itertuples():
                ax.add_patch(
                    Rectangle(
                        (band.start, 0.3),
                        band.end - band.start,
                        0.4,
                        facecolor=STAIN_COLORS.get(band.gie_stain, "#ffffff"),
                        edgecolor="none",
                    )
                )
            ax.add_patch(Rectangle((0, 0.3), length, 0.4, fill=False, edgecolor="black", linewidth=0.8))
        else:
            ax.add_patch(
                Rectangle((0, 0.3), length, 0.4, facecolor="#e8e8e8", edgecolor="black", linewidth=0.8)
            )

        # At whole-chromosome scale the window can be sub-pixel wide
        marker_width = max(window.width, length * 0.005)
        ax.add_patch(
            Rectangle(
                (window.start, 0.15),
                marker_width,
                0.7,
                fill=False,
                edgecolor="red",
                linewidth=1.5,
                zorder=10,
            )
        )
        ax.set_xticks([])
        ax.set_yticks([])
        for spine in ax.spines.values():
            spine.set_visible(False)
        self.set_title(ax)
