"""
Plot configuration.

Defaults reproduce the classic layout: a 10% margin on each side of the
requested region, green DMR blocks, dark green enhancers and a 500-step
blue-white-red methylation gradient.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class PlotConfig:
    """Configuration for a methylation plot."""

    output: Optional[Path] = None  # Image file; None keeps the figure open
    figure_width: float = 10.0  # inches
    figure_height: float = 9.0  # inches
    dpi: int = 150
    extend_left: float = 0.1  # Fraction of the region span (end - start)
    extend_right: float = 0.1
    dmr_color: str = "green"
    enhancer_color: str = "darkgreen"
    heatmap_colors: tuple[str, ...] = ("blue", "white", "red")
    gradient_steps: int = 500
    sample_name_fontsize: float = 7.0
    ensembl_releases: dict[str, int] = field(default_factory=dict)  # genome -> release
    cytoband_file: Optional[Path] = None  # UCSC cytoBand.txt
    title: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.output is not None:
            self.output = Path(self.output)
        if self.cytoband_file is not None:
            self.cytoband_file = Path(self.cytoband_file)
            if not self.cytoband_file.exists():
                raise ConfigurationError(f"Cytoband file not found: {self.cytoband_file}")

        if self.figure_width <= 0 or self.figure_height <= 0:
            raise ConfigurationError(
                f"Figure size must be positive, got "
                f"{self.figure_width}x{self.figure_height}"
            )
        if self.dpi <= 0:
            raise ConfigurationError(f"dpi must be positive, got {self.dpi}")
        for attr in ["extend_left", "extend_right"]:
            if getattr(self, attr) < 0:
                raise ConfigurationError(f"{attr} cannot be negative: {getattr(self, attr)}")
        if len(self.heatmap_colors) < 2:
            raise ConfigurationError("heatmap_colors needs at least two colours")
        if self.gradient_steps < 2:
            raise ConfigurationError(
                f"gradient_steps must be at least 2, got {self.gradient_steps}"
            )
