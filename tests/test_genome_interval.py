"""Tests for interval primitives."""

import pytest

from methplot.core.genome_interval import GenomeIntervalHandler, GenomicInterval


class TestGenomicInterval:
    """Tests for GenomicInterval."""

    def test_single_base(self):
        """A CpG site has start == end."""
        iv = GenomicInterval("chr11", 100, 100)
        assert iv.width == 1
        assert iv.span == 0

    def test_width_counts_both_ends(self):
        iv = GenomicInterval("chr11", 27015473, 27015991)
        assert iv.width == 519
        assert iv.span == 518

    def test_rejects_inverted(self):
        with pytest.raises(ValueError, match="must not be smaller"):
            GenomicInterval("chr11", 200, 100)

    def test_rejects_negative(self):
        with pytest.raises(ValueError, match="negative"):
            GenomicInterval("chr11", -1, 100)

    def test_widen(self):
        """Ten percent of the width on each side."""
        iv = GenomicInterval("chr11", 27015473, 27015991).widen(0.1, 0.1)
        assert iv == GenomicInterval("chr11", 27015421, 27016043)

    def test_widen_clamps_at_zero(self):
        assert GenomicInterval("chr1", 10, 1010).widen(0.5, 0).start == 0

    def test_overlaps_inclusive(self):
        a = GenomicInterval("chr1", 100, 200)
        assert a.overlaps(GenomicInterval("chr1", 200, 300))
        assert not a.overlaps(GenomicInterval("chr1", 201, 300))
        assert not a.overlaps(GenomicInterval("chr2", 100, 200))

    def test_str(self):
        assert str(GenomicInterval("chr11", 1, 2)) == "chr11:1-2"


class TestGenomeIntervalHandler:
    """Tests for GenomeIntervalHandler."""

    def test_find_overlaps_sorted(self):
        handler = GenomeIntervalHandler.from_intervals(
            [
                GenomicInterval("chr1", 500, 600),
                GenomicInterval("chr1", 100, 200),
                GenomicInterval("chr1", 5000, 6000),
            ]
        )
        hits = handler.find_overlaps("chr1", 150, 550)
        assert [iv.start for iv in hits] == [100, 500]

    def test_inclusive_edges(self):
        handler = GenomeIntervalHandler.from_intervals([GenomicInterval("chr1", 100, 200)])
        assert handler.find_overlaps("chr1", 200, 250)
        assert handler.find_overlaps("chr1", 50, 100)
        assert not handler.find_overlaps("chr1", 201, 250)

    def test_missing_chromosome(self):
        """Unknown chromosome gives an empty list, not a KeyError."""
        handler = GenomeIntervalHandler()
        assert handler.find_overlaps("chrZ", 0, 100) == []
        assert handler.count_intervals("chrZ") == 0

    def test_count_and_iter(self):
        intervals = [GenomicInterval("chr2", 1, 5), GenomicInterval("chr1", 10, 20)]
        handler = GenomeIntervalHandler.from_intervals(intervals)
        assert handler.count_intervals() == 2
        assert list(handler) == [intervals[1], intervals[0]]
