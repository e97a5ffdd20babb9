"""Shared fixtures: headless matplotlib, an in-memory Ensembl, example data."""

from dataclasses import dataclass, field
from types import SimpleNamespace

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402

from methplot.annotation import genome_resolver  # noqa: E402

SAMPLES = ["S1", "S2", "S3", "S4", "S5", "S6"]
GROUPS = ["control", "cond_A", "cond_A", "cond_B", "control", "cond_A"]


@dataclass
class FakeTranscript:
    transcript_id: str
    gene_id: str
    contig: str
    strand: str
    start: int
    end: int
    exons: list = field(default_factory=list)


class FakeEnsembl:
    """Stands in for pyensembl.EnsemblRelease with a handful of chr11 models."""

    SYMBOLS = {"ENSG00000129151": "BBOX1", "ENSG00000254645": ""}

    def __init__(self, release, species):
        self.release = release
        self.species = SimpleNamespace(latin_name=species)
        self.transcripts = [
            FakeTranscript(
                "ENST00000263182", "ENSG00000129151", "11", "+", 27015000, 27016400,
                [SimpleNamespace(start=27015000, end=27015200), SimpleNamespace(start=27015800, end=27016400)],
            ),
            FakeTranscript(
                "ENST00000529202", "ENSG00000254645", "11", "-", 27015300, 27015600,
                [SimpleNamespace(start=27015300, end=27015600)],
            ),
            FakeTranscript(
                "ENST00000999999", "ENSG00000999999", "11", "+", 27015700, 27015950,
                [SimpleNamespace(start=27015700, end=27015950)],
            ),
            FakeTranscript(
                "ENST00000111111", "ENSG00000111111", "11", "+", 30000000, 30010000,
                [SimpleNamespace(start=30000000, end=30010000)],
            ),
        ]
        self.locus_queries = []

    def transcripts_at_locus(self, contig, position, end=None):
        self.locus_queries.append((contig, position, end))
        end = position if end is None else end
        return [
            tx for tx in self.transcripts
            if tx.contig == contig and tx.start <= end and position <= tx.end
        ]

    def gene_name_of_gene_id(self, gene_id):
        if gene_id not in self.SYMBOLS:
            raise ValueError(f"Gene ID {gene_id} not found")
        return self.SYMBOLS[gene_id]

    def genes(self, contig=None):
        return [
            SimpleNamespace(end=tx.end)
            for tx in self.transcripts
            if contig is None or tx.contig == contig
        ]


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def fake_ensembl(monkeypatch):
    """Route annotation loading to FakeEnsembl; returns the opened databases."""
    opened = []

    def load(species, release):
        db = FakeEnsembl(release, species)
        opened.append(db)
        return db

    monkeypatch.setattr(genome_resolver, "_load_database", load)
    return opened


@pytest.fixture
def sites():
    """Five CpGs on chr11 with methylation values for six samples."""
    positions = [27015520, 27015580, 27015640, 27015700, 27015900]
    values = {
        "S1": [0.10, 0.15, 0.20, 0.80, 0.85],
        "S2": [0.90, 0.85, 0.70, 0.75, 0.80],
        "S3": [0.95, 0.90, 0.60, 0.70, 0.90],
        "S4": [0.50, 0.55, 0.40, 0.45, 0.60],
        "S5": [0.05, 0.10, 0.25, 0.85, 0.80],
        "S6": [0.85, 0.80, 0.75, 0.65, 0.95],
    }
    return pd.DataFrame({"chrom": "chr11", "position": positions, **values})


@pytest.fixture
def dmrs():
    return pd.DataFrame({"chrom": ["chr11"], "start": [27015500], "end": [27015700]})


@pytest.fixture
def enhancers():
    return pd.DataFrame({"start": [27015450, 27015850], "end": [27015520, 27015980]})
