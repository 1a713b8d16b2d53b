"""
Visualization module for isoform subsets.

Static matplotlib/seaborn figures wrapped in a Figure object so callers can
show, save, or discard them.

Examples
--------
>>> from isoplotter.viz import IsoformVisualizer
>>> viz = IsoformVisualizer()
>>> fig = viz.plot_fraction_boxplot(long_table, title="SPP1", n_samples=10)
>>> fig.save("figures/spp1.pdf")
"""

from isoplotter.viz.core import Figure
from isoplotter.viz.styles import Palette, PALETTES, configure_style
from isoplotter.viz.isoforms import IsoformVisualizer, isoform_order

__all__ = [
    "Figure",
    "Palette",
    "PALETTES",
    "configure_style",
    "IsoformVisualizer",
    "isoform_order",
]
