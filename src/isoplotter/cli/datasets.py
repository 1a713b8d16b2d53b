"""
isoplotter datasets command - List or export the bundled example datasets.

Usage:
    isoplotter datasets
    isoplotter datasets --export data/
"""

import argparse
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def register_parser(subparsers):
    """Register the datasets subcommand."""
    parser = subparsers.add_parser(
        "datasets",
        help="List or export the bundled example datasets",
    )
    parser.add_argument(
        "--export", "-e", type=Path, default=None,
        help="Directory to write the bundled datasets to as CSV"
    )
    parser.set_defaults(func=run_datasets)


def run_datasets(args: argparse.Namespace) -> int:
    """Execute the datasets command."""
    from isoplotter import datasets
    from isoplotter.utils.fileio import atomic_write_text

    loaders = {
        'gene_annotations': datasets.load_gene_annotations,
        'expression_sub': datasets.load_expression_sub,
    }

    for name in datasets.list_datasets():
        df = loaders[name]()
        print(f"{name}: {df.shape[0]} rows x {df.shape[1]} columns ({', '.join(map(str, df.columns[:4]))}, ...)")

        if args.export is not None:
            args.export.mkdir(parents=True, exist_ok=True)
            path = args.export / f"{name}.csv"
            atomic_write_text(path, df.to_csv(index=False))
            print(f"  Wrote {path}")

    return 0
