"""
isoplotter subset command - Subset an expression matrix to samples and isoforms.

Usage:
    isoplotter subset --data expression.csv --annotations annotations.csv \\
        --genes SPP1 --output results/spp1.csv --plot results/spp1.png
"""

import argparse
import logging
import sys
from pathlib import Path

from isoplotter.core.errors import UsageError
from isoplotter.core.selection import build_gene_selection, build_sample_selection
from isoplotter.subset import IsoformOptions, IsoformSubsetter, to_long_format

logger = logging.getLogger(__name__)


def register_parser(subparsers):
    """Register the subset subcommand."""
    parser = subparsers.add_parser(
        "subset",
        help="Subset an expression matrix to selected samples and genes/isoforms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Subset an isoform x sample expression matrix.

Samples come from --samples, from the 'sample_id' column of --metadata, or
default to every sample. Isoforms come from --isoforms or from all isoforms
of the --genes symbols. Values are reported as per-isoform fractions of the
retained samples unless --raw is given.

Without --data/--annotations the bundled example datasets are used.

Examples:
  isoplotter subset --genes SPP1 --output spp1.csv --plot spp1.png
  isoplotter subset --data tpm.csv --annotations ann.csv --metadata samples.csv \\
      --isoforms ENST00000395080 ENST00000237623 --raw --output subset.csv
  isoplotter subset --config subset.yaml
        """
    )

    inputs = parser.add_argument_group("inputs")
    inputs.add_argument(
        "--data", "-d", type=Path, default=None,
        help="Expression matrix CSV/TSV (first column isoform IDs). Default: bundled expression_sub"
    )
    inputs.add_argument(
        "--annotations", "-a", type=Path, default=None,
        help="Annotation CSV/TSV with isoform, entrez_id, gene_symbol. Default: bundled gene_annotations"
    )
    inputs.add_argument(
        "--config", type=Path, default=None,
        help="YAML/JSON config file; explicit CLI arguments override it"
    )

    selection = parser.add_argument_group("selection")
    selection.add_argument(
        "--samples", "-s", nargs="+", default=None,
        help="Sample IDs to keep"
    )
    selection.add_argument(
        "--metadata", "-m", type=Path, default=None,
        help="Sample metadata CSV/TSV; its sample-id column selects samples (wins over --samples)"
    )
    selection.add_argument(
        "--sample-id-column", default="sample_id",
        help="Sample-id column in --metadata (default: sample_id)"
    )
    selection.add_argument(
        "--all-samples", action="store_true",
        help="Keep every sample in the matrix, ignoring --samples/--metadata"
    )
    selection.add_argument(
        "--genes", "-g", nargs="+", default=None,
        help="Gene symbols; all of their annotated isoforms are kept"
    )
    selection.add_argument(
        "--isoforms", "-i", nargs="+", default=None,
        help="Isoform IDs to keep (wins over --genes)"
    )

    outputs = parser.add_argument_group("outputs")
    outputs.add_argument(
        "--output", "-o", type=Path, default=None,
        help="Output CSV for the wide result table (default: print to stdout)"
    )
    outputs.add_argument(
        "--long-output", type=Path, default=None,
        help="Output CSV for the long-format table (isoform, sample_id, frac)"
    )
    outputs.add_argument(
        "--plot", "-p", type=Path, default=None,
        help="Save a box plot of isoform fractions (png/pdf/svg); implies fractions"
    )
    outputs.add_argument(
        "--raw", action="store_true",
        help="Report raw values instead of fractions (ignored with --plot)"
    )
    outputs.add_argument(
        "--title", default="My Plot",
        help="Plot title (default: 'My Plot')"
    )
    outputs.add_argument(
        "--subtitle", default="My subtitle",
        help="Plot subtitle (default: 'My subtitle')"
    )
    outputs.add_argument(
        "--dpi", type=int, default=300,
        help="DPI for raster plot formats (default: 300)"
    )
    outputs.add_argument(
        "--quiet", "-q", action="store_true",
        help="Only log warnings and errors"
    )

    parser.set_defaults(func=run_subset)


def run_subset(args: argparse.Namespace) -> int:
    """Execute the subset command."""
    from isoplotter import datasets
    from isoplotter.io.loaders import load_annotations, load_expression_matrix, load_sample_metadata
    from isoplotter.io.writers import write_long_table, write_result_table

    if args.config:
        from isoplotter.cli.config import load_config, merge_config_with_args, validate_config

        try:
            config = load_config(args.config)
            validate_config(config)
            # cli_args starts with the subcommand name
            args = merge_config_with_args(config, args, getattr(args, "cli_args", [])[1:])
        except (FileNotFoundError, ValueError) as e:
            print(f"ERROR: Config file error: {e}", file=sys.stderr)
            return 1

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    logging.captureWarnings(True)

    if args.raw and args.plot is not None:
        logger.warning("--raw is ignored because --plot requires fractions")

    options = IsoformOptions(
        verbose=not args.quiet,
        to_fraction=not args.raw,
        return_all=args.all_samples,
        return_plot=args.plot is not None,
        plot_title=args.title,
        plot_subtitle=args.subtitle,
        sample_id_column=args.sample_id_column,
    )

    try:
        matrix = load_expression_matrix(args.data) if args.data else datasets.load_expression_sub()
        annotations = load_annotations(args.annotations) if args.annotations else datasets.load_gene_annotations()
        metadata = load_sample_metadata(args.metadata) if args.metadata else None

        sample_selection = build_sample_selection(
            sample_ids=args.samples,
            samples_metadata=metadata,
            return_all=options.return_all,
            sample_id_column=options.sample_id_column,
        )
        gene_selection = build_gene_selection(genes=args.genes, isoforms=args.isoforms)

        result = IsoformSubsetter(options).run(matrix, annotations, sample_selection, gene_selection)
    except (UsageError, FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    if args.output:
        write_result_table(result.table, args.output)
    else:
        result.table.to_csv(sys.stdout)

    if args.long_output:
        long_table = result.long_table if result.long_table is not None else to_long_format(result.table)
        write_long_table(long_table, args.long_output)

    if result.figure is not None:
        path = result.figure.save(args.plot, dpi=args.dpi)
        result.figure.close()
        logger.info(f"Saved box plot to {path}")

    return 0
