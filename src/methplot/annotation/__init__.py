"""Reference genome annotation."""

from methplot.annotation.genome_resolver import (
    SUPPORTED_GENOMES,
    GenomeAnnotation,
    GenomeSpec,
    build_gene_model_track,
    resolve_genome,
)

__all__ = [
    "SUPPORTED_GENOMES",
    "GenomeAnnotation",
    "GenomeSpec",
    "build_gene_model_track",
    "resolve_genome",
]
