"""
isoplotter CLI - Command-line interface for isoform subsetting.

Commands:
    isoplotter subset    - Subset an expression matrix to samples and genes/isoforms
    isoplotter datasets  - List or export the bundled example datasets
"""

import argparse
import sys
from typing import Optional, List


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI dispatcher for isoplotter."""
    parser = argparse.ArgumentParser(
        prog="isoplotter",
        description="Subset expression matrices to isoforms of interest",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  subset     Subset an expression matrix to samples and genes/isoforms
  datasets   List or export the bundled example datasets

Examples:
  isoplotter subset --genes SPP1 --plot spp1.png --output spp1.csv
  isoplotter datasets --export data/
        """
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version="%(prog)s 0.1.0"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    from isoplotter.cli import datasets, subset
    subset.register_parser(subparsers)
    datasets.register_parser(subparsers)

    parsed_args = parser.parse_args(args)
    parsed_args.cli_args = list(args) if args is not None else sys.argv[1:]

    if parsed_args.command is None:
        parser.print_help()
        return 0

    return parsed_args.func(parsed_args)


if __name__ == "__main__":
    sys.exit(main())
