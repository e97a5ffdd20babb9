"""
Composite track plot.

Stacks tracks vertically, one axes per track, with heights proportional to
the size weights, all aligned on the same display window.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

import matplotlib.figure
import matplotlib.pyplot as plt

from ..core.genome_interval import GenomicInterval
from ..tracks.base import Track

logger = logging.getLogger(__name__)


def plot_tracks(
    tracks: Sequence[Track],
    window: GenomicInterval,
    sizes: Sequence[float],
    figsize: tuple[float, float] = (10.0, 9.0),
    dpi: int = 150,
    title: Optional[str] = None,
    output: Optional[Path] = None,
    hspace: float = 0.15,
) -> matplotlib.figure.Figure:
    """
    Plot tracks as stacked panels over a genomic window.

    Args:
        tracks: Tracks, top to bottom
        window: Displayed region (x limits of every window-sharing track)
        sizes: Relative height of each track
        figsize: Figure size in inches
        dpi: Resolution of the saved image
        title: Optional title above the first track
        output: Image file to write; the figure is closed after saving
        hspace: Vertical whitespace between panels

    Returns:
        The matplotlib figure

    Raises:
        ValueError: If tracks and sizes differ in length
    """
    if len(tracks) != len(sizes):
        raise ValueError(f"Got {len(tracks)} track(s) but {len(sizes)} size(s)")
    if not tracks:
        raise ValueError("Nothing to plot: no tracks given")

    fig, axes = plt.subplots(
        nrows=len(tracks),
        ncols=1,
        figsize=figsize,
        gridspec_kw={"height_ratios": list(sizes)},
        squeeze=False,
    )
    axes = axes[:, 0]

    try:
        for track, ax in zip(tracks, axes):
            if track.shares_window:
                ax.set_xlim(window.start, window.end)
            track.plot_ax(ax, window)

            ax.spines["top"].set_visible(False)
            ax.spines["right"].set_visible(False)
            ax.spines["bottom"].set_visible(False)
            ax.tick_params(axis="x", which="both", bottom=False, labelbottom=False)
            logger.debug(f"Plotted {track!r}")

        if title is not None:
            axes[0].set_title(title)
        fig.subplots_adjust(hspace=hspace, left=0.18)

        if output is not None:
            output = Path(output)
            output.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(output, dpi=dpi, bbox_inches="tight")
            logger.info(f"Saved plot to {output}")
            plt.close(fig)
    except Exception:
        plt.close(fig)
        raise

    return fig
