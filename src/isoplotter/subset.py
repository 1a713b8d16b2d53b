"""
Subset an expression matrix to selected samples and isoforms.

This is the whole pipeline behind get_isoforms():

1. Resolve the requested samples (explicit IDs, metadata table, or all)
2. Drop and report samples that are not columns of the matrix
3. Resolve the requested isoforms (gene symbols expanded through the
   annotation table, or isoform IDs checked against it)
4. Keep matching rows, then the resolved sample columns in resolved order
5. Optionally convert each row to fractions of its total over those columns
6. Optionally reshape to long form and draw a box plot per isoform

Unknown identifiers never abort a call: they are removed from the working
set and named in an UnmatchedIdentifierWarning. Structural problems (no
sample-id column in the metadata, nothing to select) raise UsageError.

Examples:
    >>> from isoplotter import get_isoforms
    >>> from isoplotter.datasets import load_expression_sub, load_gene_annotations
    >>>
    >>> data = load_expression_sub()
    >>> table = get_isoforms(
    ...     sample_ids=list(data.columns[1:]),
    ...     data=data,
    ...     annotations=load_gene_annotations(),
    ...     isoforms=["ENST00000395080", "ENST00000237623", "ENST00000360804",
    ...               "ENST00000508233", "ENST00000681973"],
    ...     plot_title="SPP1",
    ...     plot_subtitle="Isoforms Frequency",
    ... )
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

import pandas as pd

from isoplotter.core.annotations import AnnotationTable
from isoplotter.core.errors import UnmatchedIdentifierWarning, UsageError, format_identifiers
from isoplotter.core.matrix import ExpressionMatrix
from isoplotter.core.selection import (
    AllSamples,
    GeneSelection,
    GeneSymbols,
    IsoformIds,
    SampleSelection,
    build_gene_selection,
    build_sample_selection,
)
from isoplotter.core.transform import FractionTransform
from isoplotter.viz.core import Figure
from isoplotter.viz.isoforms import IsoformVisualizer

__all__ = [
    'IsoformOptions',
    'IsoformSubsetter',
    'SubsetResult',
    'get_isoforms',
    'to_long_format',
]

logger = logging.getLogger(__name__)


@dataclass
class IsoformOptions:
    """
    Behavior switches for a subsetting call.

    Attributes:
        verbose: Log progress messages (warnings are emitted regardless)
        to_fraction: Convert each isoform's values to fractions of its row total
        return_all: Use every sample in the matrix, ignoring sample selectors
        return_plot: Draw a box plot of the fractions; forces to_fraction
        plot_title: Plot title
        plot_subtitle: Plot subtitle
        sample_id_column: Column of the samples metadata holding sample IDs
    """
    verbose: bool = True
    to_fraction: bool = True
    return_all: bool = False
    return_plot: bool = True
    plot_title: str = "My Plot"
    plot_subtitle: str = "My subtitle"
    sample_id_column: str = "sample_id"

    def __post_init__(self):
        # The plot shows fractions, so raw values are only available without it
        if self.return_plot:
            self.to_fraction = True


@dataclass
class SubsetResult:
    """
    Everything produced by one IsoformSubsetter.run() call.

    Attributes:
        table: Wide table, index = isoforms, columns = samples
        samples: Resolved sample IDs (after dropping unknown ones)
        isoforms: Resolved isoform IDs (after dropping unannotated ones)
        long_table: Long-format table (isoform, sample_id, frac) if plotted
        figure: Box plot if requested
    """
    table: pd.DataFrame
    samples: list[str]
    isoforms: list[str]
    long_table: Optional[pd.DataFrame] = None
    figure: Optional[Figure] = field(default=None, repr=False)


def to_long_format(table: pd.DataFrame) -> pd.DataFrame:
    """
    Reshape a wide isoform x sample table into one row per value.

    Returns:
        DataFrame with columns isoform, sample_id, frac

    Examples:
        >>> wide = pd.DataFrame({'S1': [0.25, 0.5], 'S2': [0.75, 0.5]},
        ...                     index=pd.Index(['A', 'B'], name='isoform'))
        >>> to_long_format(wide)
          isoform sample_id  frac
        0       A        S1  0.25
        1       B        S1  0.50
        2       A        S2  0.75
        3       B        S2  0.50
    """
    wide = table.rename_axis(index='isoform', columns=None).reset_index()
    return wide.melt(id_vars='isoform', var_name='sample_id', value_name='frac')


def _as_matrix(data: Union[ExpressionMatrix, pd.DataFrame]) -> ExpressionMatrix:
    if isinstance(data, ExpressionMatrix):
        return data
    if isinstance(data, pd.DataFrame):
        return ExpressionMatrix.from_frame(data)
    raise TypeError(f"data must be ExpressionMatrix or pd.DataFrame, got {type(data)}")


def _as_annotations(annotations: Union[AnnotationTable, pd.DataFrame]) -> AnnotationTable:
    if isinstance(annotations, AnnotationTable):
        return annotations
    return AnnotationTable(annotations)


def _missing_from(requested: Iterable[str], available: Iterable[str]) -> list[str]:
    available = set(available)
    return [i for i in requested if i not in available]


class IsoformSubsetter:
    """
    Resolve selectors against a matrix and its annotations, then subset.

    Attributes:
        options: IsoformOptions controlling normalization, plotting and logging
        visualizer: Plotter used when options.return_plot is set

    Examples:
        >>> subsetter = IsoformSubsetter(IsoformOptions(return_plot=False))
        >>> result = subsetter.run(
        ...     matrix, annotations,
        ...     sample_selection=ExplicitSamples(ids=('S1', 'S2')),
        ...     gene_selection=IsoformIds(ids=('A', 'B')),
        ... )
        >>> result.table
    """

    def __init__(
        self,
        options: Optional[IsoformOptions] = None,
        visualizer: Optional[IsoformVisualizer] = None,
    ):
        self.options = options or IsoformOptions()
        self._visualizer = visualizer

    @property
    def visualizer(self) -> IsoformVisualizer:
        if self._visualizer is None:
            self._visualizer = IsoformVisualizer()
        return self._visualizer

    def _report(self, message: str) -> None:
        if self.options.verbose:
            logger.info(message)

    def resolve_samples(
        self,
        matrix: ExpressionMatrix,
        selection: SampleSelection,
    ) -> list[str]:
        """Requested sample IDs that are columns of the matrix, in requested order."""
        requested = selection.requested(matrix.sample_ids)

        if isinstance(selection, AllSamples):
            self._report(f"{len(requested)} samples found in the provided dataset")

        not_in_data = _missing_from(requested, matrix.sample_ids)
        if not_in_data:
            warnings.warn(
                f"The following {len(not_in_data)} sample(s) were not found in the provided "
                f"dataset and will not be included in the return: {format_identifiers(not_in_data)}",
                UnmatchedIdentifierWarning,
                stacklevel=3,
            )
            requested = [s for s in requested if s not in set(not_in_data)]

        return requested

    def resolve_isoforms(
        self,
        matrix: ExpressionMatrix,
        annotations: AnnotationTable,
        selection: GeneSelection,
    ) -> list[str]:
        """
        Isoform IDs to keep.

        Raises:
            UsageError: If nothing resolves
        """
        if isinstance(selection, GeneSymbols):
            self._report("Retrieving isoforms for the selected gene(s)")

            unknown = _missing_from(selection.symbols, annotations.known_symbols())
            if unknown:
                warnings.warn(
                    f"The following gene symbol(s) were not found in the annotations data: "
                    f"{format_identifiers(unknown)}",
                    UnmatchedIdentifierWarning,
                    stacklevel=3,
                )

            isoforms = annotations.isoforms_for_genes(selection.symbols)
            self._report(
                f"{len(isoforms)} isoforms found for {format_identifiers(selection.symbols)}"
            )
        elif isinstance(selection, IsoformIds):
            no_iso = _missing_from(selection.ids, annotations.known_isoforms())
            isoforms = list(selection.ids)

            if no_iso:
                warnings.warn(
                    f"The following {len(no_iso)} isoform(s) were not found in the annotations "
                    f"data and will not be included in the return: {format_identifiers(no_iso)}",
                    UnmatchedIdentifierWarning,
                    stacklevel=3,
                )
                isoforms = [i for i in isoforms if i not in set(no_iso)]

            if isoforms and self.options.verbose:
                genes = annotations.genes_for_isoforms(isoforms)['gene_symbol'].unique()
                logger.info(f"{len(isoforms)} isoforms requested across gene(s) {format_identifiers(genes)}")
        else:
            raise TypeError(f"Unknown gene selection: {selection!r}")

        if not isoforms:
            raise UsageError("None of the requested genes/isoforms resolved to any annotated isoform")

        unquantified = _missing_from(isoforms, matrix.isoform_ids)
        if unquantified:
            warnings.warn(
                f"The following {len(unquantified)} annotated isoform(s) have no row in the "
                f"expression data and will be absent from the return: "
                f"{format_identifiers(unquantified)}",
                UnmatchedIdentifierWarning,
                stacklevel=3,
            )

        return isoforms

    def run(
        self,
        matrix: Union[ExpressionMatrix, pd.DataFrame],
        annotations: Union[AnnotationTable, pd.DataFrame],
        sample_selection: SampleSelection,
        gene_selection: GeneSelection,
    ) -> SubsetResult:
        """
        Subset, optionally normalize, and optionally plot.

        Args:
            matrix: Expression values (ExpressionMatrix, or a DataFrame whose
                first column holds isoform IDs)
            annotations: Isoform annotations (AnnotationTable or DataFrame)
            sample_selection: How samples are chosen
            gene_selection: How isoforms are chosen

        Returns:
            SubsetResult; its table never contains rows or columns outside the
            resolved sets

        Raises:
            UsageError: If no isoform resolves or values cannot become fractions
        """
        matrix = _as_matrix(matrix)
        annotations = _as_annotations(annotations)

        samples = self.resolve_samples(matrix, sample_selection)
        isoforms = self.resolve_isoforms(matrix, annotations, gene_selection)

        subset = matrix.select_isoforms(isoforms).select_samples(samples)
        self._report(f"Subset to {subset.n_isoforms} isoforms x {subset.n_samples} samples")

        if self.options.to_fraction or self.options.return_plot:
            if subset.data.size == 0:
                logger.warning("No values left after subsetting, skipping conversion to fractions")
            else:
                transform = FractionTransform()
                errors = transform.validate(subset)
                if errors:
                    raise UsageError("; ".join(errors))
                subset = transform.apply(subset)

        result = SubsetResult(table=subset.to_frame(), samples=samples, isoforms=isoforms)

        if self.options.return_plot:
            result.long_table = to_long_format(result.table)
            result.figure = self.visualizer.plot_fraction_boxplot(
                result.long_table,
                title=self.options.plot_title,
                subtitle=self.options.plot_subtitle,
                n_samples=len(samples),
            )

        return result


def get_isoforms(
    sample_ids: Optional[Union[str, Iterable[str]]] = None,
    samples_metadata: Optional[pd.DataFrame] = None,
    data: Optional[Union[ExpressionMatrix, pd.DataFrame]] = None,
    annotations: Optional[Union[AnnotationTable, pd.DataFrame]] = None,
    genes: Optional[Union[str, Iterable[str]]] = None,
    isoforms: Optional[Union[str, Iterable[str]]] = None,
    verbose: bool = True,
    to_fraction: bool = True,
    return_all: bool = False,
    return_plot: bool = True,
    plot_title: str = "My Plot",
    plot_subtitle: str = "My subtitle",
) -> pd.DataFrame:
    """
    Subset an expression matrix to selected samples and genes/isoforms.

    Args:
        sample_ids: Sample IDs to keep (a single ID may be given as a string)
        samples_metadata: Metadata table with a 'sample_id' column; takes
            precedence over sample_ids when both are given
        data: Expression matrix; first column holds isoform IDs. Defaults to
            the bundled expression_sub dataset.
        annotations: Table with isoform, entrez_id and gene_symbol columns.
            Defaults to the bundled gene_annotations dataset.
        genes: Gene symbols; all of their annotated isoforms are kept
        isoforms: Isoform IDs to keep; used instead of genes when both are given
        verbose: Log progress messages
        to_fraction: Report each isoform's values as fractions of its total
            over the returned samples. Forced on when return_plot is set;
            pass return_plot=False to get raw values back.
        return_all: Return every sample in data, ignoring sample_ids and
            samples_metadata
        return_plot: Display a box plot of the returned fractions
        plot_title: Plot title
        plot_subtitle: Plot subtitle

    Returns:
        DataFrame with isoforms as rows (index 'isoform') and samples as columns

    Raises:
        UsageError: If samples_metadata lacks 'sample_id', if neither genes nor
            isoforms are given, or if nothing resolves
    """
    options = IsoformOptions(
        verbose=verbose,
        to_fraction=to_fraction,
        return_all=return_all,
        return_plot=return_plot,
        plot_title=plot_title,
        plot_subtitle=plot_subtitle,
    )

    sample_selection = build_sample_selection(
        sample_ids=sample_ids,
        samples_metadata=samples_metadata,
        return_all=options.return_all,
        sample_id_column=options.sample_id_column,
    )
    gene_selection = build_gene_selection(genes=genes, isoforms=isoforms)

    if data is None or annotations is None:
        from isoplotter import datasets

        if data is None:
            if verbose:
                logger.info("No expression data provided, using the bundled expression_sub dataset")
            data = datasets.load_expression_sub()
        if annotations is None:
            if verbose:
                logger.info("No annotations provided, using the bundled gene_annotations dataset")
            annotations = datasets.load_gene_annotations()

    result = IsoformSubsetter(options).run(data, annotations, sample_selection, gene_selection)

    if result.figure is not None:
        result.figure.show()
        result.figure.close()
        if verbose:
            logger.info("Box plot successfully printed!")

    return result.table
