"""
Worked example: methylation around the BBOX1 promoter (hg19, chr11).

Builds a small synthetic dataset (6 samples in 3 conditions, 5 CpGs, one
DMR) and renders it. Requires the Ensembl 75 human annotation:

    pyensembl install --release 75 --species homo_sapiens
"""

from pathlib import Path
import logging

import numpy as np
import pandas as pd

from methplot import PlotConfig, render_methylation_plot

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def synthetic_sites(positions: list[int], groups: dict[str, str], seed: int = 7) -> pd.DataFrame:
    """CpG table with condition-specific methylation levels plus noise."""
    rng = np.random.default_rng(seed)
    level = {"control": 0.15, "cond_A": 0.85, "cond_B": 0.5}

    table = pd.DataFrame({"chrom": "chr11", "position": positions})
    for sample, group in groups.items():
        noise = rng.normal(0, 0.05, size=len(positions))
        table[sample] = np.clip(level[group] + noise, 0, 1)
    return table


def bbox1_example(output_dir: Path) -> Path:
    """Render the example region and return the image path."""
    output_dir.mkdir(parents=True, exist_ok=True)

    groups = {
        "S1": "control",
        "S2": "cond_A",
        "S3": "cond_A",
        "S4": "cond_B",
        "S5": "control",
        "S6": "cond_A",
    }
    sites = synthetic_sites([27015520, 27015580, 27015640, 27015700, 27015900], groups)
    dmrs = pd.DataFrame({"start": [27015500], "end": [27015700]})
    enhancers = pd.DataFrame({"start": [27015800], "end": [27015950]})

    output = output_dir / "BBOX1_methylation.png"
    render_methylation_plot(
        "hg19",
        "chr11",
        27015473,
        27015991,
        sites,
        dmrs,
        enhancers=enhancers,
        group=groups,
        config=PlotConfig(output=output, title="BBOX1 promoter"),
    )
    logger.info(f"Example plot written to {output}")
    return output


if __name__ == "__main__":
    bbox1_example(Path("results"))
