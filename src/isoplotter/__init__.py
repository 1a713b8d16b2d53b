"""
isoplotter - Isoform-level subsetting of expression matrices

Takes an expression matrix and subsets it to sample IDs of interest for the
selected genes/isoforms, optionally converting values to per-isoform
fractions and drawing a box plot of the result.
"""

__version__ = "0.1.0"

from isoplotter.core.annotations import AnnotationTable
from isoplotter.core.errors import (
    AmbiguousSelectorWarning,
    UnmatchedIdentifierWarning,
    UsageError,
)
from isoplotter.core.matrix import ExpressionMatrix
from isoplotter.subset import (
    IsoformOptions,
    IsoformSubsetter,
    SubsetResult,
    get_isoforms,
    to_long_format,
)

__all__ = [
    "get_isoforms",
    "IsoformOptions",
    "IsoformSubsetter",
    "SubsetResult",
    "to_long_format",
    "ExpressionMatrix",
    "AnnotationTable",
    "UsageError",
    "UnmatchedIdentifierWarning",
    "AmbiguousSelectorWarning",
]
