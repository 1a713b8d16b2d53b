"""Utility modules for isoform table processing."""

from isoplotter.utils.fileio import atomic_write_text

__all__ = [
    'atomic_write_text',
]
