import logging
from collections.abc import Callable

from rich.console import Console
from rich.table import Table

from .annotations.acceptance import AcceptedSpanRegistry, Classifier, CompatibilityPolicy, filter_acceptable
from .annotations.base import ResolvedAnnotation, TextSpan
from .annotations.reconcile import reconcile
from .annotators.base import Annotator
from .config import Config
from .errors import EmptyResult, NoSelection
from .markup.offsets import remap
from .markup.stripper import strip

logger = logging.getLogger(__name__)

SelectionProvider = Callable[[], TextSpan | None]


def display_annotations(annotations: list[ResolvedAnnotation], console: Console) -> None:
    """Display accepted annotations in a rich table."""
    if not annotations:
        console.print("  [dim]no names recognized[/dim]")
        return

    table = Table(title="Recognized names", show_lines=False, padding=(0, 1))
    table.add_column("Name", style="cyan")
    table.add_column("Offset", style="green", justify="right", width=8)
    table.add_column("Text", style="yellow")
    table.add_column("Description", style="dim")

    for annotation in annotations:
        table.add_row(
            annotation.display_name,
            str(annotation.document_offset),
            annotation.original_surface_form,
            annotation.description,
        )

    console.print(table)


def resolve_annotations(selection: TextSpan, annotator: Annotator, config: Config) -> list[ResolvedAnnotation]:
    """Annotate a selection and position every result in document coordinates.

    Raises EmptyResult when the annotator recognizes nothing. ServiceError
    from the annotator is propagated.
    """
    stripped, table = strip(selection.text)
    raw_annotations = annotator.annotate(stripped, config.confidence, config.support, config.endpoint)
    if not raw_annotations:
        raise EmptyResult("No resources were recognized in the selected text")

    resolved = []
    for raw in raw_annotations:
        if not 0 <= raw.offset <= len(stripped):
            logger.warning("Ignoring %r: offset %d is outside the submitted text", raw.surface_form, raw.offset)
            continue
        # Reconcile against the text the annotator saw, with its own offset,
        # before moving the offset into document coordinates.
        original_surface_form = reconcile(stripped, raw.offset, raw.surface_form)
        document_offset = remap(raw.offset, table, selection.start_offset)
        resolved.append(
            ResolvedAnnotation(
                raw=raw,
                original_surface_form=original_surface_form,
                document_offset=document_offset,
            )
        )

    resolved.sort(key=lambda a: a.document_offset)
    return resolved


def annotate_selection(
    provider: SelectionProvider,
    annotator: Annotator,
    config: Config,
    registry: AcceptedSpanRegistry | None = None,
    *,
    classify: Classifier | None = None,
    compatible: CompatibilityPolicy | None = None,
    console: Console | None = None,
) -> list[ResolvedAnnotation]:
    """Run the full annotate-and-reconcile pipeline on the current selection.

    Returns the accepted annotations in document order. Unless
    ``config.dry_run`` is set, their spans are committed to ``registry``;
    nothing is committed if any step fails.
    """
    if console is None:
        console = Console()

    # 1. Select
    try:
        selection = provider()
    except NoSelection as e:
        logger.info("Nothing to annotate: %s", e)
        return []
    if selection is None or not selection.text.strip():
        logger.info("No text selected, nothing to annotate.")
        return []

    logger.info("Annotating %d character(s) at offset %d", len(selection.text), selection.start_offset)

    # 2. Annotate, reconcile and remap
    candidates = resolve_annotations(selection, annotator, config)

    # 3. Filter against already tagged regions
    if registry is None:
        accepted = [c for c, _ in filter_acceptable(candidates, (), classify, compatible)]
    elif config.dry_run:
        accepted = [c for c, _ in filter_acceptable(candidates, registry.spans, classify, compatible)]
    else:
        accepted = registry.filter_and_commit(candidates, classify, compatible)

    if len(accepted) < len(candidates):
        logger.info("  %d of %d candidate(s) overlap tagged regions", len(candidates) - len(accepted), len(candidates))

    # 4. Display
    display_annotations(accepted, console)

    return accepted
