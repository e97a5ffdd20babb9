"""
CLI for methylation plots.

Usage:
    methplot plot <genome> <chromosome> <start> <end> --sites <sites.tsv> --regions <dmrs.bed>
    methplot genomes
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..annotation.genome_resolver import SUPPORTED_GENOMES
from ..config import PlotConfig
from ..exceptions import MethplotError
from ..io import fetch_sites_tabix, read_groups, read_regions_bed, read_sites_table
from ..methplot import render_methylation_plot

# Set up rich console and logging
console = Console()
app = typer.Typer(help="Methylation and DMR plots")

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    handlers=[RichHandler(console=console, rich_tracebacks=True)],
)
logger = logging.getLogger(__name__)


@app.command()
def plot(
    genome: str = typer.Argument(..., help="Reference genome: hg19, hg38 or mm39"),
    chromosome: str = typer.Argument(..., help="Chromosome, e.g. chr11"),
    start: int = typer.Argument(..., help="First position (included)"),
    end: int = typer.Argument(..., help="Last position (included)"),
    sites: Path = typer.Option(..., help="CpG methylation table (TSV, or bgzip + tabix with --tabix)"),
    regions: Path = typer.Option(..., help="DMR coordinates (BED)"),
    enhancers: Optional[Path] = typer.Option(None, help="Enhancer coordinates (BED)"),
    groups: Optional[Path] = typer.Option(
        None, help="Sample groups: two columns, sample<TAB>group"
    ),
    tabix: bool = typer.Option(False, help="Read --sites as a tabix-indexed table"),
    cytobands: Optional[Path] = typer.Option(None, help="UCSC cytoBand table for the ideogram"),
    release: Optional[int] = typer.Option(None, help="Ensembl release to use instead of the default"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Image file (default: methplot_<chrom>_<start>_<end>.png)"
    ),
    dpi: int = typer.Option(150, help="Image resolution"),
    title: Optional[str] = typer.Option(None, help="Plot title"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """
    Plot methylation levels and DMRs of a region.

    Example:
        methplot plot hg19 chr11 27015473 27015991 \\
            --sites cpg_sites.tsv \\
            --regions dmrs.bed \\
            --groups groups.tsv \\
            --output BBOX1.png
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    console.print("[bold blue]methplot - Methylation Plot[/bold blue]")
    console.print(f"Region: {genome} {chromosome}:{start:,}-{end:,}")

    # Validate input files
    for label, path in [("Sites", sites), ("Regions", regions), ("Enhancers", enhancers), ("Groups", groups)]:
        if path is not None and not path.exists():
            console.print(f"[bold red]Error:[/bold red] {label} file not found: {path}")
            raise typer.Exit(1)

    if output is None:
        output = Path(f"methplot_{chromosome}_{start}_{end}.png")

    try:
        config = PlotConfig(
            output=output,
            dpi=dpi,
            title=title,
            cytoband_file=cytobands,
            ensembl_releases={genome: release} if release is not None else {},
        )
    except MethplotError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print("[yellow]Loading inputs...[/yellow]")
    try:
        if tabix:
            site_table = fetch_sites_tabix(sites, chromosome, start, end)
        else:
            site_table = read_sites_table(sites)
        region_table = read_regions_bed(regions)
        enhancer_table = read_regions_bed(enhancers) if enhancers is not None else None
        group_map = read_groups(groups) if groups is not None else None
    except Exception as e:
        console.print(f"[bold red]Error reading inputs:[/bold red] {e}")
        logger.exception("Input loading failed")
        raise typer.Exit(1)

    console.print("[yellow]Rendering tracks...[/yellow]")
    try:
        render_methylation_plot(
            genome,
            chromosome,
            start,
            end,
            site_table,
            region_table,
            enhancers=enhancer_table,
            group=group_map,
            config=config,
        )
    except MethplotError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[bold red]Error during plotting:[/bold red] {e}")
        logger.exception("Plotting failed")
        raise typer.Exit(1)

    console.print("\n[bold green]Plot complete![/bold green]")
    console.print(f"Output saved to: {output}")


@app.command()
def genomes() -> None:
    """List the supported reference genomes."""
    table = Table(title="Supported genomes")
    table.add_column("Genome")
    table.add_column("Assembly")
    table.add_column("Species")
    table.add_column("Ensembl release", justify="right")

    for spec in SUPPORTED_GENOMES.values():
        table.add_row(spec.name, spec.assembly, spec.species, str(spec.release))

    console.print(table)


if __name__ == "__main__":
    app()
