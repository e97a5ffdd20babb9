"""
Per-site data tracks.

Both tracks take the normalized site matrix: a DataFrame indexed by CpG
position with one column per sample.

- HeatmapTrack: one row per sample, colour gradient over the observed range
- GroupedLineTrack: mean methylation per sample group, one line per group
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import matplotlib.axes
import numpy as np
import pandas as pd
from matplotlib import colors as plt_colors

from ..core.genome_interval import GenomicInterval
from .base import Track

logger = logging.getLogger(__name__)


def site_edges(positions: Sequence[float]) -> np.ndarray:
    """
    Cell boundaries for sites: halfway to each neighbour.

    Example:
        >>> site_edges([100, 110, 130]).tolist()
        [95.0, 105.0, 120.0, 140.0]
    """
    positions = np.asarray(positions, dtype=float)
    if len(positions) == 1:
        return np.array([positions[0] - 0.5, positions[0] + 0.5])
    mids = (positions[:-1] + positions[1:]) / 2
    first = positions[0] - (mids[0] - positions[0])
    last = positions[-1] + (positions[-1] - mids[-1])
    return np.concatenate([[first], mids, [last]])


class HeatmapTrack(Track):
    """Methylation heatmap, one row per sample."""

    def __init__(
        self,
        values: pd.DataFrame,
        name: str = " ",
        colors: Sequence[str] = ("blue", "white", "red"),
        steps: int = 500,
        show_sample_names: bool = True,
        sample_name_fontsize: float = 7.0,
        separator_width: float = 2.0,
    ) -> None:
        super().__init__(name)
        self.values = values
        self.colormap = plt_colors.LinearSegmentedColormap.from_list(
            "methylation", list(colors), N=steps
        )
        self.show_sample_names = show_sample_names
        self.sample_name_fontsize = sample_name_fontsize
        self.separator_width = separator_width

    @property
    def samples(self) -> list[str]:
        return list(self.values.columns)

    @property
    def value_range(self) -> tuple[float, float]:
        """Observed (min, max); (0, 1) when no value is set."""
        data = self.values.to_numpy(dtype=float)
        if not np.isfinite(data).any():
            return 0.0, 1.0
        return float(np.nanmin(data)), float(np.nanmax(data))

    @property
    def norm(self) -> plt_colors.Normalize:
        vmin, vmax = self.value_range
        return plt_colors.Normalize(vmin=vmin, vmax=vmax)

    def plot_ax(self, ax: matplotlib.axes.Axes, window: GenomicInterval) -> None:
        n_samples = len(self.samples)
        x = site_edges(self.values.index.to_numpy())
        y = np.arange(n_samples + 1)
        data = np.ma.masked_invalid(self.values.to_numpy(dtype=float).T)

        ax.pcolormesh(x, y, data, cmap=self.colormap, norm=self.norm, shading="flat")
        ax.set_ylim(n_samples, 0)

        if self.separator_width > 0 and n_samples > 1:
            ax.hlines(
                np.arange(1, n_samples), x[0], x[-1],
                color="white", linewidth=self.separator_width,
            )

        if self.show_sample_names:
            ax.set_yticks(np.arange(n_samples) + 0.5)
            ax.set_yticklabels(self.samples, fontsize=self.sample_name_fontsize)
            ax.tick_params(axis="y", length=0)
        else:
            ax.set_yticks([])
        self.set_title(ax)


class GroupedLineTrack(Track):
    """Average methylation per group along the region."""

    def __init__(
        self,
        values: pd.DataFrame,
        groups: Optional[dict[str, str]] = None,
        name: str = "Methylation",
    ) -> None:
        super().__init__(name)
        self.values = values
        # one group per sample when ungrouped
        self.groups = groups or {sample: sample for sample in values.columns}

    @property
    def group_labels(self) -> list[str]:
        """Distinct labels in order of first appearance."""
        return list(dict.fromkeys(self.groups[sample] for sample in self.values.columns))

    @property
    def n_groups(self) -> int:
        return len(self.group_labels)

    def group_means(self) -> pd.DataFrame:
        """Position-indexed DataFrame with the mean of each group's samples."""
        means = self.values.T.groupby(self.groups, sort=False).mean().T
        return means[self.group_labels]

    def plot_ax(self, ax: matplotlib.axes.Axes, window: GenomicInterval) -> None:
        means = self.group_means()
        for label in means.columns:
            ax.plot(means.index, means[label], marker="o", markersize=3, linewidth=1.2, label=label)

        ax.legend(fontsize=6, loc="upper right", frameon=False, ncol=min(self.n_groups, 4))
        ax.tick_params(axis="y", labelsize=7)
        self.set_title(ax)
        logger.debug(f"Drew {self.n_groups} group line(s)")
