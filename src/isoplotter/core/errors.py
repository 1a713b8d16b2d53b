"""
Exception and warning types raised while subsetting expression matrices.

Warning convention:
    warnings.warn() -- user-facing (unmatched identifiers, ambiguous selectors)
    logger.warning() -- operator-facing (fallback to all samples, bundled data)

Only UsageError aborts a call. Unmatched identifiers are dropped from the
working set and reported through UnmatchedIdentifierWarning so callers can
escalate them with ``warnings.simplefilter("error", ...)`` if they want.
"""

from __future__ import annotations

from typing import Iterable

__all__ = [
    'UsageError',
    'UnmatchedIdentifierWarning',
    'AmbiguousSelectorWarning',
    'format_identifiers',
]


class UsageError(ValueError):
    """
    A required structural expectation on the inputs was violated.

    Examples: sample metadata without a sample-id column, annotation table
    missing required columns, or no gene/isoform selection at all.
    """


class UnmatchedIdentifierWarning(UserWarning):
    """Requested sample, isoform or gene symbol not found in its source table."""


class AmbiguousSelectorWarning(UserWarning):
    """Two mutually exclusive selection modes were supplied in the same call."""


def format_identifiers(ids: Iterable[str], limit: int = 20) -> str:
    """
    Render identifiers for a diagnostic message, truncating long lists.

    Examples:
        >>> format_identifiers(["S3", "S4"])
        'S3, S4'
        >>> format_identifiers([f"S{i}" for i in range(30)], limit=2)
        'S0, S1 ... (+28 more)'
    """
    ids = [str(i) for i in ids]
    shown = ", ".join(ids[:limit])
    if len(ids) > limit:
        shown += f" ... (+{len(ids) - limit} more)"
    return shown
