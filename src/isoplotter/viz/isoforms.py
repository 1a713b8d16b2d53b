"""
Isoform usage visualizations.

The one question these plots answer: across the selected samples, which
isoforms of a gene carry most of its expression, and how consistently?
Each isoform gets one box summarising its per-sample fractions; boxes are
ordered from the dominant isoform to the least used one.
"""

from __future__ import annotations

import logging

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from isoplotter.viz.core import Figure
from isoplotter.viz.styles import Palette, configure_style

logger = logging.getLogger(__name__)

LONG_COLUMNS = ('isoform', 'sample_id', 'frac')


def isoform_order(long_table: pd.DataFrame) -> list[str]:
    """
    Isoforms sorted by descending mean fraction.

    Isoforms with no finite values sort last.
    """
    frac = pd.to_numeric(long_table['frac'], errors='coerce')
    means = frac.groupby(long_table['isoform'], sort=False).mean()
    return means.sort_values(ascending=False, kind='stable', na_position='last').index.tolist()


class IsoformVisualizer:
    """
    Box plots of isoform fractions.

    Examples
    --------
    >>> viz = IsoformVisualizer()
    >>> fig = viz.plot_fraction_boxplot(long_table, title="SPP1",
    ...                                 subtitle="Isoforms Frequency", n_samples=10)
    >>> fig.save("spp1.png")
    """

    def __init__(
        self,
        palette: str | Palette = "default",
        font_scale: float = 1.0,
    ):
        self.palette = configure_style(palette=palette, font_scale=font_scale)

    def plot_fraction_boxplot(
        self,
        long_table: pd.DataFrame,
        title: str = "My Plot",
        subtitle: str = "My subtitle",
        n_samples: int | None = None,
        figsize: tuple[float, float] | None = None,
    ) -> Figure:
        """
        Distribution of per-sample fractions for each isoform.

        Parameters
        ----------
        long_table : pd.DataFrame
            Long-format table with columns isoform, sample_id, frac
        title, subtitle : str
            Plot labels
        n_samples : int, optional
            Sample count for the caption. Defaults to the distinct sample_id
            values in long_table.
        figsize : tuple, optional
            Defaults to a width that grows with the number of isoforms.
        """
        missing = [c for c in LONG_COLUMNS if c not in long_table.columns]
        if missing:
            raise ValueError(f"long_table is missing columns: {missing}")

        if n_samples is None:
            n_samples = long_table['sample_id'].nunique()

        order = isoform_order(long_table)
        if figsize is None:
            figsize = (max(6.0, 0.6 * len(order) + 2.0), 6.0)

        fig, ax = plt.subplots(figsize=figsize)

        if order:
            sns.boxplot(
                data=long_table,
                x='isoform',
                y='frac',
                order=order,
                color=self.palette.fill,
                linecolor=self.palette.edge,
                linewidth=1.0,
                flierprops=dict(
                    marker='o',
                    markersize=3,
                    markerfacecolor=self.palette.outlier,
                    markeredgecolor=self.palette.outlier,
                ),
                ax=ax,
            )
        else:
            logger.warning("No isoform values to plot, producing an empty figure")

        fig.suptitle(title, x=0.02, ha='left', fontweight='bold')
        ax.set_title(subtitle, loc='left', fontsize='medium')
        ax.set_xlabel("Gene Isoform")
        ax.set_ylabel("")
        ax.tick_params(axis='x', labelrotation=90)
        if ax.get_legend() is not None:
            ax.get_legend().remove()

        caption = f"Samples (n): {n_samples}"
        fig.text(0.99, 0.01, caption, ha='right', va='bottom',
                 fontsize='small', color=self.palette.neutral)

        fig.tight_layout(rect=(0, 0.03, 1, 1))

        return Figure(
            fig=fig,
            title=title,
            description=f"{len(order)} isoforms across {n_samples} samples",
            metadata={"n_samples": n_samples, "isoform_order": order, "caption": caption},
        )
