"""
GenomicInterval and GenomeIntervalHandler - interval primitives for plotting.

This module provides the immutable interval type used for the plotted
region, DMRs and enhancers, and a small handler that indexes intervals per
chromosome so tracks only draw what falls inside the display window.

Key Features:
- Immutable, slotted intervals
- Safe access (no KeyError for missing chromosomes)
- Overlap queries using intervaltree
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Iterator

from intervaltree import Interval, IntervalTree

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class GenomicInterval:
    """
    Immutable genomic interval.

    Coordinates are inclusive on both ends, as in genome browser displays,
    so a single CpG site has ``start == end``.
    """

    chromosome: str
    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate interval coordinates."""
        if self.start < 0:
            raise ValueError(f"Start position cannot be negative: {self.start}")
        if self.end < self.start:
            raise ValueError(
                f"End position ({self.end}) must not be smaller than "
                f"start position ({self.start})"
            )

    @property
    def width(self) -> int:
        """Return the number of bases covered, both ends included."""
        return self.end - self.start + 1

    @property
    def span(self) -> int:
        """Return the distance from start to end (``end - start``)."""
        return self.end - self.start

    def overlaps(self, other: GenomicInterval) -> bool:
        """Check if this interval overlaps with another."""
        if self.chromosome != other.chromosome:
            return False
        return self.start <= other.end and other.start <= self.end

    def widen(self, left: float = 0.0, right: float = 0.0) -> GenomicInterval:
        """
        Extend the interval by a fraction of its span on each side.

        Args:
            left: Fraction of the span added before ``start``
            right: Fraction of the span added after ``end``

        Returns:
            A new interval; the start is clamped at 0

        Example:
            >>> GenomicInterval("chr1", 1000, 2000).widen(0.1, 0.1)
            GenomicInterval(chromosome='chr1', start=900, end=2100)
        """
        return GenomicInterval(
            chromosome=self.chromosome,
            start=max(0, self.start - round(self.span * left)),
            end=self.end + round(self.span * right),
        )

    def __str__(self) -> str:
        return f"{self.chromosome}:{self.start}-{self.end}"


class GenomeIntervalHandler:
    """
    Per-chromosome interval index.

    Example:
        >>> handler = GenomeIntervalHandler.from_intervals(dmrs)
        >>> visible = handler.find_overlaps("chr11", 27015400, 27016100)
    """

    def __init__(self) -> None:
        # Use defaultdict to avoid KeyError for missing chromosomes
        self._intervals: defaultdict[str, IntervalTree] = defaultdict(IntervalTree)

    @classmethod
    def from_intervals(cls, intervals: Iterable[GenomicInterval]) -> GenomeIntervalHandler:
        """Build a handler holding every interval in ``intervals``."""
        handler = cls()
        for interval in intervals:
            handler.add(interval)
        return handler

    def add(self, interval: GenomicInterval) -> None:
        """Index an interval."""
        # IntervalTree is half-open, inclusive ends need the +1
        self._intervals[interval.chromosome].add(
            Interval(interval.start, interval.end + 1, interval)
        )

    def find_overlaps(self, chromosome: str, start: int, end: int) -> list[GenomicInterval]:
        """
        Find all intervals overlapping the query region.

        Args:
            chromosome: Chromosome name
            start: Query start position (inclusive)
            end: Query end position (inclusive)

        Returns:
            Overlapping intervals sorted by start.
            Returns empty list if chromosome not found (no KeyError!)
        """
        tree = self._intervals.get(chromosome)
        if not tree:
            logger.debug(f"No intervals indexed for chromosome '{chromosome}'")
            return []

        hits = [iv.data for iv in tree.overlap(start, end + 1)]
        return sorted(hits, key=lambda iv: (iv.start, iv.end))

    def count_intervals(self, chromosome: str | None = None) -> int:
        """
        Count intervals.

        Args:
            chromosome: Optional chromosome. If None, counts all intervals.
        """
        if chromosome is None:
            return sum(len(tree) for tree in self._intervals.values())
        return len(self._intervals.get(chromosome, IntervalTree()))

    def __iter__(self) -> Iterator[GenomicInterval]:
        for chromosome in sorted(self._intervals):
            for iv in sorted(self._intervals[chromosome], key=lambda iv: (iv.begin, iv.end)):
                yield iv.data

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"GenomeIntervalHandler(chromosomes={len(self._intervals)}, "
            f"intervals={self.count_intervals()})"
        )
