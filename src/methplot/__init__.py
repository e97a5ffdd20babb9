"""
methplot: Methylation Plot

Methylation levels and differentially methylated regions (DMRs) of a
genomic region, drawn as genome-browser style tracks.
"""

__version__ = "1.0.0"

from methplot.config import PlotConfig
from methplot.core.genome_interval import GenomicInterval
from methplot.exceptions import ConfigurationError, InputShapeError, MethplotError
from methplot.methplot import PlotRequest, build_plot_request, render_methylation_plot

__all__ = [
    "PlotConfig",
    "GenomicInterval",
    "MethplotError",
    "ConfigurationError",
    "InputShapeError",
    "PlotRequest",
    "build_plot_request",
    "render_methylation_plot",
]
