"""
Core data structures for isoform subsetting.

1. ExpressionMatrix: isoform x sample values with validated identifiers
2. AnnotationTable: read-only isoform -> gene lookup
3. Selectors: how samples and isoforms are chosen for a call
4. Transform / FractionTransform: immutable matrix transformations
"""

from isoplotter.core.annotations import AnnotationTable, ANNOTATION_COLUMNS
from isoplotter.core.errors import (
    AmbiguousSelectorWarning,
    UnmatchedIdentifierWarning,
    UsageError,
)
from isoplotter.core.matrix import ExpressionMatrix
from isoplotter.core.selection import (
    AllSamples,
    ExplicitSamples,
    GeneSelection,
    GeneSymbols,
    IsoformIds,
    MetadataSamples,
    SampleSelection,
    build_gene_selection,
    build_sample_selection,
)
from isoplotter.core.transform import FractionTransform, Transform

__all__ = [
    'ExpressionMatrix',
    'AnnotationTable',
    'ANNOTATION_COLUMNS',
    'UsageError',
    'UnmatchedIdentifierWarning',
    'AmbiguousSelectorWarning',
    'ExplicitSamples',
    'MetadataSamples',
    'AllSamples',
    'SampleSelection',
    'GeneSymbols',
    'IsoformIds',
    'GeneSelection',
    'build_sample_selection',
    'build_gene_selection',
    'Transform',
    'FractionTransform',
]
