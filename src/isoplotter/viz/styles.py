"""
Consistent visual styles for isoform visualizations.

Domain Conventions
------------------
- Isoform boxes = Green (#009E73, Okabe-Ito bluish green, colorblind-safe)
- Medians/outlines = near-black for contrast on white backgrounds
- Transcript IDs on the x axis rotated 90 degrees (they are long)
"""

from __future__ import annotations

from dataclasses import dataclass

import matplotlib.pyplot as plt
import seaborn as sns


@dataclass(frozen=True)
class Palette:
    """
    Color palette for isoform plots.

    Attributes
    ----------
    fill : str
        Box fill color
    edge : str
        Box outline, whisker and median color
    outlier : str
        Color for flier points
    neutral : str
        Color for captions and secondary text
    """
    fill: str = "#009E73"       # Okabe-Ito bluish green
    edge: str = "#1a1a1a"       # Near-black
    outlier: str = "#6b7280"    # Gray-500
    neutral: str = "#6b7280"    # Gray-500


PALETTES = {
    "default": Palette(),
    "print": Palette(
        fill="#bdbdbd",
        edge="#000000",
        outlier="#4d4d4d",
        neutral="#4d4d4d",
    ),
}


def configure_style(palette: str | Palette = "default", font_scale: float = 1.0) -> Palette:
    """
    Apply the isoform plot theme: white background, light horizontal grid,
    no top/right spines.

    Parameters
    ----------
    palette : str or Palette
        Color palette name or Palette instance. Unknown names use "default".
    font_scale : float
        Multiplier for tick and title font sizes.

    Returns
    -------
    Palette
        The resolved color palette.
    """
    if isinstance(palette, str):
        palette = PALETTES.get(palette, PALETTES["default"])

    sns.set_theme(style="whitegrid", context="notebook", font_scale=font_scale)
    plt.rcParams.update({
        "figure.facecolor": "white",
        "axes.edgecolor": "#333333",
        "axes.labelcolor": "#333333",
        "text.color": "#333333",
        "axes.spines.top": False,
        "axes.spines.right": False,
        "axes.titlesize": 12 * font_scale,
        "xtick.labelsize": 9 * font_scale,
        "savefig.dpi": 150,
    })

    return palette
