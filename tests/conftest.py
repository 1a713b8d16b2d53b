"""
Pytest configuration and shared fixtures.

This module provides small hand-written tables for exact-value tests and a
synthetic isoform table generator for property-style tests.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from isoplotter.core.annotations import AnnotationTable
from isoplotter.core.matrix import ExpressionMatrix


def generate_synthetic_isoform_tables(
    n_genes: int,
    isoforms_per_gene: int,
    n_samples: int,
    zero_fraction: float = 0.05,
    seed: int = 42,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """
    Generate an expression table and matching annotations.

    Args:
        n_genes: Number of genes
        isoforms_per_gene: Isoforms annotated per gene
        n_samples: Number of sample columns
        zero_fraction: Fraction of values set to zero (unexpressed)
        seed: Random seed for reproducibility

    Returns:
        (expression table with an 'isoform' first column, annotation table)

    Design:
        - Log-normal TPMs (realistic for RNA-seq)
        - One dominant isoform per gene (scaled up 10x)
        - Every row keeps at least one non-zero value
    """
    rng = np.random.RandomState(seed)

    n_isoforms = n_genes * isoforms_per_gene
    data = rng.lognormal(mean=2, sigma=1, size=(n_isoforms, n_samples))
    data[::isoforms_per_gene, :] *= 10

    zero_mask = rng.rand(n_isoforms, n_samples) < zero_fraction
    zero_mask[:, 0] = False
    data[zero_mask] = 0.0

    isoforms = [f"ENST{i:011d}" for i in range(n_isoforms)]
    symbols = [f"GENE{i // isoforms_per_gene}" for i in range(n_isoforms)]
    entrez = [str(1000 + i // isoforms_per_gene) for i in range(n_isoforms)]
    samples = [f"SAMPLE_{j:03d}" for j in range(n_samples)]

    expression = pd.DataFrame(data, columns=samples)
    expression.insert(0, 'isoform', isoforms)

    annotations = pd.DataFrame({
        'isoform': isoforms,
        'entrez_id': entrez,
        'gene_symbol': symbols,
    })

    return expression, annotations


@pytest.fixture
def scenario_frame():
    """Isoforms A, B, C across samples S1, S2."""
    return pd.DataFrame({
        'isoform': ['A', 'B', 'C'],
        'S1': [10.0, 5.0, 0.0],
        'S2': [30.0, 5.0, 10.0],
    })


@pytest.fixture
def scenario_annotations():
    """A and B belong to GENE1, C to GENE2."""
    return pd.DataFrame({
        'isoform': ['A', 'B', 'C'],
        'entrez_id': ['1', '1', '2'],
        'gene_symbol': ['GENE1', 'GENE1', 'GENE2'],
    })


@pytest.fixture
def scenario_matrix(scenario_frame):
    return ExpressionMatrix.from_frame(scenario_frame)


@pytest.fixture
def scenario_annotation_table(scenario_annotations):
    return AnnotationTable(scenario_annotations)


@pytest.fixture
def synthetic_tables():
    """20 genes x 4 isoforms across 12 samples."""
    return generate_synthetic_isoform_tables(n_genes=20, isoforms_per_gene=4, n_samples=12)


@pytest.fixture
def no_show(monkeypatch):
    """Replace plt.show so plotting tests never block; records calls."""
    import matplotlib.pyplot as plt

    calls = []
    monkeypatch.setattr(plt, "show", lambda *a, **k: calls.append(1))
    yield calls
    plt.close("all")
