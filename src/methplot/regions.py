"""
Input normalization for sites, regions and sample groups.

Callers hand over whatever they have at hand: a pandas table or a pyranges
object. Everything downstream works on one shape:

- regions and enhancers -> list of GenomicInterval, sorted by position
- CpG sites -> DataFrame indexed by position, one float column per sample
- sample groups -> ordered {sample: label} mapping
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Optional

import numpy as np
import pandas as pd
import pyranges as pr

from .core.genome_interval import GenomicInterval
from .exceptions import InputShapeError

logger = logging.getLogger(__name__)

CHROMOSOME_COLUMNS = ("chromosome", "chrom", "chr", "seqnames", "seqname")
POSITION_COLUMNS = ("position", "pos", "start")
RESERVED_COLUMNS = CHROMOSOME_COLUMNS + POSITION_COLUMNS + ("end", "strand", "width")


def _find_column(table: pd.DataFrame, candidates: Sequence[str]) -> Optional[str]:
    """Return the first column whose lower-cased name is in ``candidates``."""
    lowered = {str(col).lower(): col for col in reversed(list(table.columns))}
    for name in candidates:
        if name in lowered:
            return lowered[name]
    return None


def _bare_chromosome(name: str) -> str:
    name = str(name)
    return name[3:] if name.lower().startswith("chr") else name


def _as_table(obj, what: str, allow_ranges: bool = True) -> pd.DataFrame:
    """Unwrap a PyRanges or DataFrame into a plain DataFrame."""
    if isinstance(obj, pr.PyRanges):
        if not allow_ranges:
            raise InputShapeError(
                f"{what} must be given as a table with 'start' and 'end' columns, "
                f"got a PyRanges object"
            )
        return obj.df
    if isinstance(obj, pd.DataFrame):
        return obj
    raise InputShapeError(
        f"Unsupported {what} representation: {type(obj).__name__}. "
        f"Expected a pandas DataFrame or a pyranges PyRanges"
    )


def _restrict_to_chromosome(table: pd.DataFrame, chromosome: str, what: str) -> pd.DataFrame:
    """Drop rows that name a different chromosome, if the table names one at all."""
    chrom_col = _find_column(table, CHROMOSOME_COLUMNS)
    if chrom_col is None:
        return table

    wanted = _bare_chromosome(chromosome)
    keep = table[chrom_col].astype(str).map(_bare_chromosome) == wanted
    dropped = int((~keep).sum())
    if dropped:
        logger.debug(f"Dropped {dropped} {what} row(s) outside {chromosome}")
    return table.loc[keep]


def _integer_column(table: pd.DataFrame, column: str, what: str) -> pd.Series:
    values = table[column]
    if not pd.api.types.is_numeric_dtype(values) or values.isna().any():
        raise InputShapeError(f"{what} column '{column}' must hold integer coordinates")
    if not np.all(np.mod(values.to_numpy(dtype=float), 1) == 0):
        raise InputShapeError(f"{what} column '{column}' must hold integer coordinates")
    return values.astype("int64")


def normalize_regions(
    regions,
    chromosome: str,
    allow_ranges: bool = True,
    what: str = "region",
) -> list[GenomicInterval]:
    """
    Normalize a region set to a sorted list of intervals on ``chromosome``.

    Coordinates are taken as 1-based and inclusive for both input shapes.
    PyRanges ``Start`` is 0-based by convention, so ranges built from BED
    style data need ``Start + 1`` before they are passed in.

    Args:
        regions: DataFrame with ``start``/``end`` columns or a PyRanges
        chromosome: Chromosome of the plotted region
        allow_ranges: Accept PyRanges input (False for enhancers)
        what: Name used in log and error messages

    Returns:
        List of GenomicInterval sorted by (start, end)

    Raises:
        InputShapeError: If the input shape or its coordinates are unusable
    """
    table = _as_table(regions, what, allow_ranges=allow_ranges)
    table = _restrict_to_chromosome(table, chromosome, what)
    if len(table) == 0:
        # An empty PyRanges has no columns at all
        logger.debug(f"No {what}s on {chromosome}")
        return []

    start_col = _find_column(table, ("start",))
    end_col = _find_column(table, ("end",))
    if start_col is None or end_col is None:
        raise InputShapeError(
            f"{what} table needs 'start' and 'end' columns, got {list(table.columns)}"
        )

    starts = _integer_column(table, start_col, what)
    ends = _integer_column(table, end_col, what)

    intervals = []
    for start, end in zip(starts, ends):
        try:
            intervals.append(GenomicInterval(chromosome, int(start), int(end)))
        except ValueError as e:
            raise InputShapeError(f"Invalid {what} {start}-{end}: {e}") from e

    intervals.sort(key=lambda iv: (iv.start, iv.end))
    logger.debug(f"Normalized {len(intervals)} {what}(s) on {chromosome}")
    return intervals


def normalize_sites(sites, chromosome: str) -> pd.DataFrame:
    """
    Normalize CpG methylation values to a position-indexed sample matrix.

    Positions are taken as 1-based. For a PyRanges the ``Start`` column is
    used as the position without shifting, so 0-based ranges must be
    shifted by one first.

    Args:
        sites: DataFrame with a position column and one numeric column per
            sample, or a PyRanges whose metadata columns are the samples
        chromosome: Chromosome of the plotted region

    Returns:
        DataFrame indexed by position (ascending), one float column per sample

    Raises:
        InputShapeError: If no position column, no sample column or no site
            on ``chromosome`` is found
    """
    table = _as_table(sites, "CpG site")
    table = _restrict_to_chromosome(table, chromosome, "CpG site")

    position_col = _find_column(table, POSITION_COLUMNS)
    if position_col is None:
        raise InputShapeError(
            f"CpG site table needs a position column (one of {POSITION_COLUMNS}), "
            f"got {list(table.columns)}"
        )
    positions = _integer_column(table, position_col, "CpG site")

    sample_cols = [
        col
        for col in table.columns
        if str(col).lower() not in RESERVED_COLUMNS
        and pd.api.types.is_numeric_dtype(table[col])
    ]
    if not sample_cols:
        raise InputShapeError("CpG site table has no numeric sample columns")

    values = table[sample_cols].astype(float)
    values.columns = [str(col) for col in sample_cols]
    values.index = pd.Index(positions.to_numpy(), name="position")
    values = values.sort_index()

    if values.empty:
        raise InputShapeError(f"No CpG sites found on {chromosome}")

    logger.debug(f"Normalized {len(values)} CpG sites x {len(sample_cols)} samples")
    return values


def resolve_groups(samples: Sequence[str], group=None) -> dict[str, str]:
    """
    Align a group assignment with the sample columns.

    Args:
        samples: Sample names, in column order
        group: None (one group per sample), a sequence of labels aligned by
            position, or a mapping/Series keyed by sample name

    Returns:
        Ordered {sample: label} mapping covering every sample

    Raises:
        InputShapeError: If labels cannot be aligned with the samples
    """
    samples = list(samples)
    if group is None:
        return {sample: sample for sample in samples}

    if isinstance(group, (Mapping, pd.Series)):
        missing = [sample for sample in samples if sample not in group]
        if missing:
            raise InputShapeError(f"No group label for sample(s): {', '.join(missing)}")
        return {sample: str(group[sample]) for sample in samples}

    if isinstance(group, str) or not isinstance(group, (Sequence, np.ndarray, pd.Index)):
        raise InputShapeError(
            f"Unsupported group representation: {type(group).__name__}. "
            f"Expected a sequence of labels or a sample -> label mapping"
        )

    labels = list(group)
    if len(labels) != len(samples):
        raise InputShapeError(
            f"Got {len(labels)} group label(s) for {len(samples)} sample column(s)"
        )
    return {sample: str(label) for sample, label in zip(samples, labels)}
