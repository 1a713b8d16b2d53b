"""
Sample and gene selectors.

A call can name its samples three ways (explicit IDs, a metadata table, or
nothing at all) and its features two ways (gene symbols or isoform IDs).
Each choice is captured once, up front, as a small frozen dataclass so the
pipeline never re-inspects which arguments happened to be None.

    SampleSelection = ExplicitSamples | MetadataSamples | AllSamples
    GeneSelection = GeneSymbols | IsoformIds

Examples:
    >>> selection = build_sample_selection(sample_ids=['S1', 'S2'])
    >>> selection
    ExplicitSamples(ids=('S1', 'S2'))
    >>> build_gene_selection(genes='SPP1')
    GeneSymbols(symbols=('SPP1',))
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

import pandas as pd

from isoplotter.core.errors import AmbiguousSelectorWarning, UsageError

__all__ = [
    'ExplicitSamples',
    'MetadataSamples',
    'AllSamples',
    'SampleSelection',
    'GeneSymbols',
    'IsoformIds',
    'GeneSelection',
    'build_sample_selection',
    'build_gene_selection',
]

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_ID_COLUMN = 'sample_id'


def _as_id_tuple(ids: Union[str, Iterable[str]]) -> tuple[str, ...]:
    """Normalize a single ID or a collection of IDs, dropping repeats."""
    if isinstance(ids, str):
        ids = [ids]
    return tuple(dict.fromkeys(str(i) for i in ids))


@dataclass(frozen=True)
class ExplicitSamples:
    """Samples named directly by the caller, in the order given."""
    ids: tuple[str, ...]

    def requested(self, available: pd.Index) -> list[str]:
        return list(self.ids)


@dataclass(frozen=True)
class MetadataSamples:
    """Samples taken from the sample-id column of a metadata table."""
    metadata: pd.DataFrame = field(repr=False, compare=False)
    column: str = DEFAULT_SAMPLE_ID_COLUMN

    def __post_init__(self):
        if not isinstance(self.metadata, pd.DataFrame):
            raise TypeError(f"samples metadata must be pd.DataFrame, got {type(self.metadata)}")
        if self.column not in self.metadata.columns:
            raise UsageError(
                f"The provided metadata has no column named '{self.column}'"
            )

    def requested(self, available: pd.Index) -> list[str]:
        values = self.metadata[self.column].dropna()
        return list(_as_id_tuple(values))


@dataclass(frozen=True)
class AllSamples:
    """Every sample column present in the expression matrix."""

    def requested(self, available: pd.Index) -> list[str]:
        return [str(s) for s in available]


SampleSelection = Union[ExplicitSamples, MetadataSamples, AllSamples]


@dataclass(frozen=True)
class GeneSymbols:
    """HUGO symbols, expanded to all of their annotated isoforms."""
    symbols: tuple[str, ...]


@dataclass(frozen=True)
class IsoformIds:
    """Transcript identifiers requested directly."""
    ids: tuple[str, ...]


GeneSelection = Union[GeneSymbols, IsoformIds]


def build_sample_selection(
    sample_ids: Optional[Union[str, Iterable[str]]] = None,
    samples_metadata: Optional[pd.DataFrame] = None,
    return_all: bool = False,
    sample_id_column: str = DEFAULT_SAMPLE_ID_COLUMN,
) -> SampleSelection:
    """
    Decide how samples are chosen for this call.

    Args:
        sample_ids: Explicit sample IDs (a single string is accepted)
        samples_metadata: Table with a sample-id column
        return_all: Use every matrix sample, ignoring the other two arguments
        sample_id_column: Name of the sample-id column in samples_metadata

    Returns:
        ExplicitSamples, MetadataSamples or AllSamples

    Raises:
        UsageError: If metadata is used and lacks the sample-id column
    """
    if return_all:
        if sample_ids is not None or samples_metadata is not None:
            warnings.warn(
                "return_all is set, the provided sample IDs/metadata are ignored "
                "and every sample in the dataset is returned",
                AmbiguousSelectorWarning,
                stacklevel=2,
            )
        return AllSamples()

    if sample_ids is None and samples_metadata is None:
        logger.warning(
            "No sample IDs or metadata provided to subset the return to, "
            "all samples available in the dataset will be used"
        )
        return AllSamples()

    if sample_ids is None:
        return MetadataSamples(metadata=samples_metadata, column=sample_id_column)

    if samples_metadata is None:
        return ExplicitSamples(ids=_as_id_tuple(sample_ids))

    warnings.warn(
        "Both sample_ids and samples_metadata are provided, the sample IDs "
        f"in the metadata '{sample_id_column}' column will be used",
        AmbiguousSelectorWarning,
        stacklevel=2,
    )
    return MetadataSamples(metadata=samples_metadata, column=sample_id_column)


def build_gene_selection(
    genes: Optional[Union[str, Iterable[str]]] = None,
    isoforms: Optional[Union[str, Iterable[str]]] = None,
) -> GeneSelection:
    """
    Decide how isoforms are chosen for this call.

    Isoform IDs win when both are given: gene symbols are only expanded when
    no isoforms were requested.

    Raises:
        UsageError: If neither genes nor isoforms are given
    """
    if genes is None and isoforms is None:
        raise UsageError("Either genes or isoforms must be provided")

    if isoforms is not None:
        if genes is not None:
            warnings.warn(
                "Both genes and isoforms are provided, only the isoforms will be used",
                AmbiguousSelectorWarning,
                stacklevel=2,
            )
        return IsoformIds(ids=_as_id_tuple(isoforms))

    return GeneSymbols(symbols=_as_id_tuple(genes))
