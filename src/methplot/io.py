"""
Loaders for plot inputs.

Coordinate conventions:
- CpG tables and region tables read with ``read_sites_table`` are taken as
  they are (1-based positions).
- BED files and tabix-indexed tables are 0-based; starts are shifted by one
  so every loader hands 1-based coordinates to the plot.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import pysam

from .exceptions import InputShapeError

logger = logging.getLogger(__name__)

CYTOBAND_COLUMNS = ["chrom", "start", "end", "name", "gie_stain"]


def read_sites_table(path: Path) -> pd.DataFrame:
    """
    Read a tab-separated CpG table.

    Expected columns: a position column (``position``/``pos``/``start``),
    optionally a chromosome column, then one methylation column per sample.
    A leading ``#`` on the header is ignored.
    """
    df = pd.read_csv(path, sep="\t")
    df.columns = [str(col).lstrip("#") for col in df.columns]
    logger.info(f"Read {len(df):,} CpG sites from {path}")
    return df


def fetch_sites_tabix(path: Path, chromosome: str, start: int, end: int) -> pd.DataFrame:
    """
    Fetch CpG sites of a region from a bgzipped, tabix-indexed table.

    The file is BED-like (chrom, start, end, one column per sample) and its
    last header line names the columns, e.g. ``#chrom start end s1 s2``.

    Args:
        path: Table path (``.gz`` with ``.tbi`` index next to it)
        chromosome: Chromosome, with or without the ``chr`` prefix
        start: First position (1-based, inclusive)
        end: Last position (1-based, inclusive)

    Returns:
        DataFrame with ``chrom``, ``position`` (1-based) and sample columns

    Raises:
        InputShapeError: If the file has no header naming the samples
    """
    tbx = pysam.TabixFile(str(path))
    try:
        header = [line for line in tbx.header if line.startswith("#")]
        if not header:
            raise InputShapeError(f"{path} has no '#' header line naming the samples")
        names = header[-1].lstrip("#").rstrip("\n").split("\t")
        if len(names) < 4:
            raise InputShapeError(
                f"{path} header needs chrom, start, end and at least one sample column"
            )

        # Files may or may not carry the chr prefix
        bare = chromosome[3:] if chromosome.lower().startswith("chr") else chromosome
        contig = next((c for c in (chromosome, bare, f"chr{bare}") if c in tbx.contigs), None)

        rows = []
        if contig is None:
            logger.warning(f"{chromosome} not found in {path}")
        else:
            rows = [line.split("\t") for line in tbx.fetch(contig, max(0, start - 1), end)]
    finally:
        tbx.close()

    df = pd.DataFrame(rows, columns=names)
    samples = names[3:]
    result = pd.DataFrame(
        {
            "chrom": df[names[0]].astype(str),
            "position": pd.to_numeric(df[names[1]]).astype("int64") + 1,
        }
    )
    for sample in samples:
        result[sample] = pd.to_numeric(df[sample], errors="coerce")

    logger.info(f"Fetched {len(result):,} CpG sites from {path} ({chromosome}:{start}-{end})")
    return result


def read_regions_bed(path: Path) -> pd.DataFrame:
    """
    Read a BED file of regions (DMRs, enhancers).

    Returns:
        DataFrame with ``chrom``, ``start`` (1-based) and ``end``
    """
    df = pd.read_csv(path, sep="\t", comment="#", header=None, usecols=[0, 1, 2])
    df.columns = ["chrom", "start", "end"]
    df["chrom"] = df["chrom"].astype(str)
    df["start"] = df["start"].astype("int64") + 1
    logger.info(f"Read {len(df):,} regions from {path}")
    return df


def read_groups(path: Path) -> dict[str, str]:
    """Read a two-column ``sample<TAB>group`` file into a mapping."""
    df = pd.read_csv(path, sep="\t", comment="#", header=None, names=["sample", "group"], dtype=str)
    if df.isna().any().any():
        raise InputShapeError(f"{path} must have exactly two columns: sample and group")
    return dict(zip(df["sample"], df["group"]))


def read_cytobands(path: Path) -> pd.DataFrame:
    """Read a UCSC cytoBand table (plain or gzipped)."""
    df = pd.read_csv(path, sep="\t", header=None, names=CYTOBAND_COLUMNS)
    df["chrom"] = df["chrom"].astype(str)
    return df
