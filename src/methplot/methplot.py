"""
Methylation plot - methylation levels and DMRs over a genomic region.

Track layout, top to bottom (relative heights in brackets):
ideogram [2], genome axis [2], gene models [5], enhancers [2, optional],
DMRs [2], methylation heatmap [10], group averages [5].
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import matplotlib.figure

from .annotation.genome_resolver import build_gene_model_track, resolve_genome
from .config import PlotConfig
from .core.genome_interval import GenomicInterval
from .exceptions import InputShapeError
from .io import read_cytobands
from .plotting.render import plot_tracks
from .regions import normalize_regions, normalize_sites, resolve_groups
from .tracks import (
    AnnotationTrack,
    GenomeAxisTrack,
    GroupedLineTrack,
    HeatmapTrack,
    IdeogramTrack,
    Track,
)

logger = logging.getLogger(__name__)

TRACK_SIZES = {
    "ideogram": 2,
    "axis": 2,
    "genes": 5,
    "enhancers": 2,
    "dmrs": 2,
    "heatmap": 10,
    "methylation": 5,
}


@dataclass
class PlotRequest:
    """Everything the composite plot needs: tracks, their sizes and the window."""

    interval: GenomicInterval
    window: GenomicInterval
    tracks: list[Track]
    sizes: list[int]


def build_plot_request(
    genome: str,
    chromosome: str,
    start: int,
    end: int,
    sites,
    regions,
    enhancers=None,
    group=None,
    config: Optional[PlotConfig] = None,
) -> PlotRequest:
    """
    Resolve the genome, normalize inputs and assemble the track list.

    Args:
        genome: "hg19", "hg38" or "mm39"
        chromosome: Chromosome of the region (UCSC name, e.g. "chr11")
        start: First position (inclusive)
        end: Last position (inclusive)
        sites: CpG methylation values (DataFrame or PyRanges)
        regions: DMRs (DataFrame with start/end or PyRanges)
        enhancers: Optional enhancers (DataFrame with start/end)
        group: Optional group labels (sequence aligned with the sample
            columns, or a sample -> label mapping)
        config: Plot configuration

    Returns:
        PlotRequest with len(tracks) == len(sizes)

    Raises:
        ConfigurationError: If the genome is not supported
        InputShapeError: If an input cannot be normalized
    """
    config = config or PlotConfig()

    # Fails before any track is built
    annotation = resolve_genome(genome, config)

    try:
        interval = GenomicInterval(chromosome, int(start), int(end))
    except ValueError as e:
        raise InputShapeError(f"Invalid region {chromosome}:{start}-{end}: {e}") from e
    window = interval.widen(config.extend_left, config.extend_right)

    dmrs = normalize_regions(regions, chromosome, what="DMR")
    enhancer_intervals = None
    if enhancers is not None:
        enhancer_intervals = normalize_regions(
            enhancers, chromosome, allow_ranges=False, what="enhancer"
        )
    values = normalize_sites(sites, chromosome)
    groups = resolve_groups(values.columns, group)

    cytobands = read_cytobands(config.cytoband_file) if config.cytoband_file else None

    layout: list[tuple[Track, int]] = [
        (IdeogramTrack(chromosome, cytobands=cytobands, annotation=annotation), TRACK_SIZES["ideogram"]),
        (GenomeAxisTrack(), TRACK_SIZES["axis"]),
        (build_gene_model_track(annotation, chromosome), TRACK_SIZES["genes"]),
    ]
    if enhancer_intervals is not None:
        layout.append(
            (
                AnnotationTrack(enhancer_intervals, name="enh", fill=config.enhancer_color),
                TRACK_SIZES["enhancers"],
            )
        )
    layout += [
        (AnnotationTrack(dmrs, name="DMRs", fill=config.dmr_color), TRACK_SIZES["dmrs"]),
        (
            HeatmapTrack(
                values,
                colors=config.heatmap_colors,
                steps=config.gradient_steps,
                sample_name_fontsize=config.sample_name_fontsize,
            ),
            TRACK_SIZES["heatmap"],
        ),
        (GroupedLineTrack(values, groups, name="Methylation"), TRACK_SIZES["methylation"]),
    ]

    request = PlotRequest(
        interval=interval,
        window=window,
        tracks=[track for track, _ in layout],
        sizes=[size for _, size in layout],
    )
    logger.info(
        f"Built {len(request.tracks)} tracks for {genome} {interval} "
        f"({len(values)} CpGs, {len(values.columns)} samples, {len(dmrs)} DMRs)"
    )
    return request


def render_methylation_plot(
    genome: str,
    chromosome: str,
    start: int,
    end: int,
    sites,
    regions,
    enhancers=None,
    group=None,
    config: Optional[PlotConfig] = None,
) -> matplotlib.figure.Figure:
    """
    Plot methylation levels and DMRs of a region for a set of samples.

    Arguments are those of ``build_plot_request``. The image is written to
    ``config.output`` when set; the figure is returned either way.

    Example:
        >>> fig = render_methylation_plot(
        ...     "hg19", "chr11", 27015473, 27015991, sites, dmrs,
        ...     group=["control", "cond_A", "cond_A", "cond_B", "control", "cond_A"],
        ...     config=PlotConfig(output=Path("BBOX1.png")),
        ... )
    """
    config = config or PlotConfig()
    request = build_plot_request(
        genome, chromosome, start, end, sites, regions,
        enhancers=enhancers, group=group, config=config,
    )
    return plot_tracks(
        request.tracks,
        request.window,
        request.sizes,
        figsize=(config.figure_width, config.figure_height),
        dpi=config.dpi,
        title=config.title,
        output=config.output,
    )
