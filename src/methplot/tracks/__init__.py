"""Plot tracks drawn with matplotlib."""

from methplot.tracks.annotation import AnnotationTrack
from methplot.tracks.axis import GenomeAxisTrack
from methplot.tracks.base import Track
from methplot.tracks.data import GroupedLineTrack, HeatmapTrack
from methplot.tracks.gene_region import GeneRegionTrack, TranscriptModel
from methplot.tracks.ideogram import IdeogramTrack

__all__ = [
    "Track",
    "IdeogramTrack",
    "GenomeAxisTrack",
    "GeneRegionTrack",
    "TranscriptModel",
    "AnnotationTrack",
    "HeatmapTrack",
    "GroupedLineTrack",
]
