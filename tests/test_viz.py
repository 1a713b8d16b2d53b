"""
Tests for isoform box plots, styles and the Figure wrapper.
"""

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

from isoplotter.viz import PALETTES, Figure, IsoformVisualizer, Palette, configure_style, isoform_order


@pytest.fixture
def long_table():
    return pd.DataFrame({
        'isoform': ['A', 'B', 'C'] * 3,
        'sample_id': ['S1'] * 3 + ['S2'] * 3 + ['S3'] * 3,
        'frac': [0.1, 0.6, 0.3, 0.2, 0.5, 0.3, np.nan, 0.7, 0.4],
    })


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


class TestIsoformOrder:

    def test_descending_mean(self, long_table):
        assert isoform_order(long_table) == ['B', 'C', 'A']

    def test_all_missing_sorts_last(self):
        table = pd.DataFrame({
            'isoform': ['X', 'Y'],
            'sample_id': ['S1', 'S1'],
            'frac': [np.nan, 0.2],
        })
        assert isoform_order(table) == ['Y', 'X']


class TestFractionBoxplot:

    def test_labels_and_metadata(self, long_table):
        figure = IsoformVisualizer().plot_fraction_boxplot(
            long_table, title="SPP1", subtitle="Isoforms Frequency", n_samples=3
        )

        assert isinstance(figure, Figure)
        figure.fig.canvas.draw()
        ax = figure.fig.axes[0]
        assert ax.get_title(loc='left') == "Isoforms Frequency"
        assert ax.get_xlabel() == "Gene Isoform"
        assert ax.get_ylabel() == ""
        assert [t.get_text() for t in ax.get_xticklabels()] == ['B', 'C', 'A']
        assert figure.fig._suptitle.get_text() == "SPP1"
        assert figure.metadata['caption'] == "Samples (n): 3"
        assert figure.metadata['isoform_order'] == ['B', 'C', 'A']

    def test_sample_count_defaults_to_distinct_samples(self, long_table):
        figure = IsoformVisualizer().plot_fraction_boxplot(long_table)
        assert figure.metadata['n_samples'] == 3
        assert figure.title == "My Plot"

    def test_missing_columns(self):
        with pytest.raises(ValueError, match="missing columns"):
            IsoformVisualizer().plot_fraction_boxplot(pd.DataFrame({'isoform': ['A']}))

    def test_empty_table(self, caplog):
        empty = pd.DataFrame({
            'isoform': pd.Series(dtype=str),
            'sample_id': pd.Series(dtype=str),
            'frac': pd.Series(dtype=float),
        })
        with caplog.at_level("WARNING"):
            figure = IsoformVisualizer().plot_fraction_boxplot(empty, n_samples=0)

        assert figure.metadata['isoform_order'] == []
        assert "No isoform values to plot" in caplog.text

    def test_named_and_custom_palettes(self):
        assert IsoformVisualizer(palette="print").palette == PALETTES["print"]
        assert IsoformVisualizer(palette="unknown").palette == PALETTES["default"]
        custom = Palette(fill="#ff0000")
        assert IsoformVisualizer(palette=custom).palette is custom


class TestFigure:

    def test_save_infers_format(self, long_table, tmp_path):
        figure = IsoformVisualizer().plot_fraction_boxplot(long_table)

        path = figure.save(tmp_path / "plots" / "box.svg")

        assert path.exists()
        assert path.read_text().lstrip().startswith("<?xml")

    def test_unknown_extension_falls_back_to_png(self, long_table, tmp_path):
        figure = IsoformVisualizer().plot_fraction_boxplot(long_table)

        path = figure.save(tmp_path / "box.figure", dpi=50)

        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_created_at_recorded(self):
        fig = plt.figure()
        figure = Figure(fig=fig, title="t", description="d")
        assert "created_at" in figure.metadata


class TestConfigureStyle:

    def test_returns_palette(self):
        assert configure_style(palette="print") == PALETTES["print"]

    def test_font_scale_applied(self):
        configure_style(font_scale=2.0)
        assert plt.rcParams["axes.titlesize"] == 24.0
        assert plt.rcParams["axes.spines.top"] is False
