"""Core data structures and utilities."""

from methplot.core.genome_interval import GenomicInterval, GenomeIntervalHandler

__all__ = ["GenomicInterval", "GenomeIntervalHandler"]
