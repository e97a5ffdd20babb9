"""
Gene model track.

Transcripts are fetched from the annotation at draw time, packed into rows
so overlapping transcripts never share a row, and drawn as an intron line
with exon blocks, labelled with the gene symbol.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import matplotlib.axes
from matplotlib.patches import Rectangle

from ..core.genome_interval import GenomicInterval
from .base import Track

logger = logging.getLogger(__name__)

GENE_COLOR = "#ffd58a"
GENE_EDGE_COLOR = "#b8860b"


@dataclass(frozen=True)
class TranscriptModel:
    """Transcript structure with its gene symbol resolved."""

    transcript_id: str
    gene_id: str
    symbol: str
    strand: str
    start: int
    end: int
    exons: tuple[tuple[int, int], ...]


def pack_rows(transcripts: list[TranscriptModel], min_gap: int = 0) -> list[int]:
    """
    Assign each transcript a row so that transcripts in a row do not overlap.

    Args:
        transcripts: Transcripts sorted by start
        min_gap: Minimum distance between neighbours in a row

    Returns:
        Row index per transcript, in input order
    """
    row_ends: list[int] = []
    rows = []
    for tx in transcripts:
        for i, row_end in enumerate(row_ends):
            if tx.start > row_end + min_gap:
                row_ends[i] = tx.end
                rows.append(i)
                break
        else:
            row_ends.append(tx.end)
            rows.append(len(row_ends) - 1)
    return rows


class GeneRegionTrack(Track):
    """Gene models for one chromosome, drawn from a GenomeAnnotation."""

    def __init__(self, annotation, chromosome: str, name: str = "Genes") -> None:
        super().__init__(name)
        self.annotation = annotation
        self.chromosome = chromosome

    def transcripts(self, window: GenomicInterval) -> list[TranscriptModel]:
        return self.annotation.transcripts_in(self.chromosome, window.start, window.end)

    def plot_ax(self, ax: matplotlib.axes.Axes, window: GenomicInterval) -> None:
        transcripts = self.transcripts(window)
        ax.set_yticks([])
        self.set_title(ax)

        if not transcripts:
            ax.set_ylim(0, 1)
            ax.text(
                (window.start + window.end) / 2, 0.5, "no annotated transcripts",
                ha="center", va="center", fontsize=7, color="grey",
            )
            return

        # leave room for the labels
        rows = pack_rows(transcripts, min_gap=int(window.width * 0.05))
        n_rows = max(rows) + 1
        ax.set_ylim(n_rows, 0)

        for tx, row in zip(transcripts, rows):
            y = row + 0.5
            ax.hlines(y, tx.start, tx.end, color=GENE_EDGE_COLOR, linewidth=1)
            for exon_start, exon_end in tx.exons:
                ax.add_patch(
                    Rectangle(
                        (exon_start, y - 0.3),
                        exon_end - exon_start + 1,
                        0.6,
                        facecolor=GENE_COLOR,
                        edgecolor=GENE_EDGE_COLOR,
                        linewidth=0.75,
                    )
                )
            label = f"{tx.symbol} >" if tx.strand == "+" else f"< {tx.symbol}"
            ax.text(
                max(tx.start, window.start), y - 0.35, label,
                ha="left", va="bottom", fontsize=6, clip_on=True,
            )

        logger.debug(f"Drew {len(transcripts)} transcript(s) in {n_rows} row(s)")
