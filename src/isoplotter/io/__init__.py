"""
I/O module for loading inputs and writing subset results.

Key Functions:
    - load_expression_matrix: CSV/TSV matrix -> ExpressionMatrix
    - load_annotations: CSV/TSV annotations -> AnnotationTable
    - load_sample_metadata: CSV/TSV sample metadata -> DataFrame
    - write_result_table: wide result table -> CSV
    - write_long_table: long-format table -> CSV
"""

from isoplotter.io.loaders import (
    load_annotations,
    load_expression_matrix,
    load_sample_metadata,
    sniff_delimiter,
)
from isoplotter.io.writers import write_long_table, write_result_table

__all__ = [
    'load_expression_matrix',
    'load_annotations',
    'load_sample_metadata',
    'sniff_delimiter',
    'write_result_table',
    'write_long_table',
]
