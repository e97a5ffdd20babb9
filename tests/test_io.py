"""Tests for input loaders."""

import pysam
import pytest

from methplot.exceptions import InputShapeError
from methplot.io import (
    fetch_sites_tabix,
    read_cytobands,
    read_groups,
    read_regions_bed,
    read_sites_table,
)
from methplot.regions import normalize_sites


@pytest.fixture
def tabix_sites(tmp_path):
    """Bgzipped, tabix-indexed CpG table on chr11 and chr12."""
    path = tmp_path / "sites.bed"
    lines = [
        "#chrom\tstart\tend\ttumour\tnormal",
        "chr11\t27015519\t27015520\t0.80\t0.10",
        "chr11\t27015579\t27015580\t0.75\tNA",
        "chr11\t27099999\t27100000\t0.50\t0.50",
        "chr12\t100\t101\t0.20\t0.30",
    ]
    path.write_text("\n".join(lines) + "\n")
    return pysam.tabix_index(str(path), preset="bed", force=True)


class TestFetchSitesTabix:
    """Tests for fetch_sites_tabix."""

    def test_region(self, tabix_sites):
        df = fetch_sites_tabix(tabix_sites, "chr11", 27015473, 27015991)
        assert df["position"].tolist() == [27015520, 27015580]
        assert list(df.columns) == ["chrom", "position", "tumour", "normal"]
        assert df["tumour"].tolist() == [0.80, 0.75]
        assert df["normal"].isna().tolist() == [False, True]

    def test_bare_chromosome_name(self, tabix_sites):
        df = fetch_sites_tabix(tabix_sites, "11", 27015473, 27015991)
        assert len(df) == 2

    def test_unknown_chromosome(self, tabix_sites):
        df = fetch_sites_tabix(tabix_sites, "chr2", 1, 1000)
        assert df.empty

    def test_feeds_normalizer(self, tabix_sites):
        values = normalize_sites(fetch_sites_tabix(tabix_sites, "chr11", 27015473, 27015991), "chr11")
        assert list(values.columns) == ["tumour", "normal"]
        assert values.index.tolist() == [27015520, 27015580]

    def test_missing_header(self, tmp_path):
        path = tmp_path / "noheader.bed"
        path.write_text("chr11\t1\t2\t0.5\n")
        indexed = pysam.tabix_index(str(path), preset="bed", force=True)
        with pytest.raises(InputShapeError, match="header"):
            fetch_sites_tabix(indexed, "chr11", 1, 10)


class TestTableLoaders:
    """Tests for the plain-text loaders."""

    def test_read_sites_table(self, tmp_path):
        path = tmp_path / "sites.tsv"
        path.write_text("#chrom\tposition\tS1\tS2\nchr11\t100\t0.1\t0.9\nchr11\t200\t0.2\t0.8\n")
        df = read_sites_table(path)
        assert list(df.columns) == ["chrom", "position", "S1", "S2"]
        assert normalize_sites(df, "chr11").shape == (2, 2)

    def test_read_regions_bed_is_one_based(self, tmp_path):
        path = tmp_path / "dmrs.bed"
        path.write_text("# DMRs\nchr11\t27015499\t27015700\tdmr1\t12.5\n")
        df = read_regions_bed(path)
        assert list(df.columns) == ["chrom", "start", "end"]
        assert df.iloc[0].tolist() == ["chr11", 27015500, 27015700]

    def test_read_groups(self, tmp_path):
        path = tmp_path / "groups.tsv"
        path.write_text("S1\tcontrol\nS2\tcond_A\n")
        assert read_groups(path) == {"S1": "control", "S2": "cond_A"}

    def test_read_groups_needs_two_columns(self, tmp_path):
        path = tmp_path / "groups.tsv"
        path.write_text("S1\nS2\n")
        with pytest.raises(InputShapeError, match="two columns"):
            read_groups(path)

    def test_read_cytobands(self, tmp_path):
        path = tmp_path / "cytoBand.txt"
        path.write_text("chr11\t0\t2800000\tp15.5\tgneg\nchr11\t2800000\t10700000\tp15.4\tgpos50\n")
        df = read_cytobands(path)
        assert df["gie_stain"].tolist() == ["gneg", "gpos50"]
        assert df["end"].max() == 10700000
