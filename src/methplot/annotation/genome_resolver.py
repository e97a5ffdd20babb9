"""
Genome Resolver - map a genome identifier to its gene-model database.

Supported genomes:
- hg19 -> Ensembl GRCh37 (release 75), human symbols
- hg38 -> Ensembl GRCh38, human symbols
- mm39 -> Ensembl GRCm39, mouse symbols

Annotation data is never downloaded here. Install a release beforehand with
``pyensembl install --release <N> --species <species>``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from pyensembl import EnsemblRelease

from ..config import PlotConfig
from ..exceptions import ConfigurationError
from ..tracks.gene_region import GeneRegionTrack, TranscriptModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenomeSpec:
    """Reference genome and the Ensembl release that annotates it."""

    name: str
    assembly: str
    species: str  # Ensembl latin name, selects the symbol database
    release: int


SUPPORTED_GENOMES: dict[str, GenomeSpec] = {
    "hg19": GenomeSpec("hg19", "GRCh37", "homo_sapiens", 75),
    "hg38": GenomeSpec("hg38", "GRCh38", "homo_sapiens", 110),
    "mm39": GenomeSpec("mm39", "GRCm39", "mus_musculus", 110),
}


def to_ensembl_contig(chromosome: str) -> str:
    """
    Translate a UCSC chromosome name to an Ensembl contig name.

    Example:
        >>> to_ensembl_contig("chr11")
        '11'
        >>> to_ensembl_contig("chrM")
        'MT'
    """
    contig = chromosome[3:] if chromosome.lower().startswith("chr") else chromosome
    return "MT" if contig.upper() == "M" else contig


@lru_cache(maxsize=None)
def _load_database(species: str, release: int):
    """Open one Ensembl release per process; reused read-only afterwards."""
    logger.info(f"Opening Ensembl release {release} for {species}")
    return EnsemblRelease(release=release, species=species)


def clear_annotation_cache() -> None:
    """Forget every opened annotation database."""
    _load_database.cache_clear()


class GenomeAnnotation:
    """
    Gene models and gene symbols for one reference genome.

    Wraps a pyensembl database; gene symbols are looked up in the database
    of the genome's own species.
    """

    def __init__(self, spec: GenomeSpec, database) -> None:
        self.spec = spec
        self.database = database
        self._extents: dict[str, int] = {}

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def assembly(self) -> str:
        return self.spec.assembly

    @property
    def species(self) -> str:
        return self.spec.species

    def symbol_of(self, gene_id: str) -> str:
        """Return the gene symbol for ``gene_id``, or the id itself if it has none."""
        try:
            symbol = self.database.gene_name_of_gene_id(gene_id)
        except ValueError:
            logger.debug(f"No {self.species} symbol for gene '{gene_id}'")
            return gene_id
        return symbol or gene_id

    def transcripts_in(self, chromosome: str, start: int, end: int) -> list[TranscriptModel]:
        """
        Get transcripts overlapping a region.

        Args:
            chromosome: UCSC chromosome name
            start: Region start
            end: Region end

        Returns:
            TranscriptModel list, symbols resolved, sorted by start
        """
        contig = to_ensembl_contig(chromosome)
        transcripts = self.database.transcripts_at_locus(contig, start, end)

        models = [
            TranscriptModel(
                transcript_id=tx.transcript_id,
                gene_id=tx.gene_id,
                symbol=self.symbol_of(tx.gene_id),
                strand=tx.strand,
                start=tx.start,
                end=tx.end,
                exons=tuple((exon.start, exon.end) for exon in tx.exons),
            )
            for tx in transcripts
        ]
        models.sort(key=lambda model: (model.start, model.end))
        logger.debug(f"{len(models)} transcript(s) in {chromosome}:{start}-{end}")
        return models

    def chromosome_extent(self, chromosome: str) -> int:
        """Return the last annotated base of ``chromosome`` (0 if nothing is annotated)."""
        if chromosome not in self._extents:
            genes = self.database.genes(contig=to_ensembl_contig(chromosome))
            self._extents[chromosome] = max((gene.end for gene in genes), default=0)
        return self._extents[chromosome]

    def __repr__(self) -> str:
        return (
            f"GenomeAnnotation(name={self.name!r}, assembly={self.assembly!r}, "
            f"species={self.species!r})"
        )


def resolve_genome(genome: str, config: Optional[PlotConfig] = None) -> GenomeAnnotation:
    """
    Resolve a genome identifier to its annotation.

    Args:
        genome: One of "hg19", "hg38", "mm39" (exact match)
        config: Optional configuration carrying Ensembl release overrides

    Returns:
        GenomeAnnotation bound to the matching species database

    Raises:
        ConfigurationError: If the genome is not supported
    """
    spec = SUPPORTED_GENOMES.get(genome)
    if spec is None:
        raise ConfigurationError(
            f"{genome} is not a valid reference genome. "
            f"Supported genomes: {', '.join(SUPPORTED_GENOMES)}"
        )

    if config is not None and genome in config.ensembl_releases:
        spec = GenomeSpec(spec.name, spec.assembly, spec.species, config.ensembl_releases[genome])

    annotation = GenomeAnnotation(spec, _load_database(spec.species, spec.release))
    logger.info(f"Resolved {genome} to {spec.assembly} ({spec.species}, Ensembl {spec.release})")
    return annotation


def build_gene_model_track(annotation: GenomeAnnotation, chromosome: str) -> GeneRegionTrack:
    """Gene-model track bound to ``annotation``, showing gene symbols."""
    return GeneRegionTrack(annotation, chromosome, name="Ensembl")
