import logging
from importlib.metadata import version
from pathlib import Path

import click
from rich.console import Console

from .annotations.acceptance import AcceptedSpanRegistry
from .annotators.spotlight import RecordedAnnotator
from .config import DEFAULT_ENDPOINT, Config
from .document import FileSelection
from .errors import EmptyResult, ServiceError
from .pipeline import annotate_selection

logger = logging.getLogger(__name__)

console = Console()


@click.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-a",
    "--annotations",
    "annotations_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Saved DBpedia Spotlight JSON response for the selected text.",
)
@click.option("--start", type=click.IntRange(min=0), default=0, show_default=True, help="Selection start offset.")
@click.option("--end", type=click.IntRange(min=0), default=None, help="Selection end offset [default: end of document].")
@click.option(
    "-c",
    "--confidence",
    type=click.FloatRange(0.0, 1.0),
    default=0.5,
    show_default=True,
    help="Minimum annotation confidence (0.0–1.0).",
)
@click.option(
    "-s",
    "--support",
    type=click.IntRange(min=0),
    default=20,
    show_default=True,
    help="Minimum resource support.",
)
@click.option("--endpoint", default=DEFAULT_ENDPOINT, show_default=True, help="Annotation service endpoint.")
@click.option("--dry-run", is_flag=True, default=False, help="Show annotations without committing them.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
@click.version_option(version=version("namedropper"))
def main(
    document: Path,
    annotations_path: Path,
    start: int,
    end: int | None,
    confidence: float,
    support: int,
    endpoint: str,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Recognize names in a selection of DOCUMENT.

    Markup in the selection is stripped before annotation, and every result is
    positioned back onto the original document text.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
    )

    config = Config(
        confidence=confidence,
        support=support,
        endpoint=endpoint,
        dry_run=dry_run,
    )
    registry = AcceptedSpanRegistry()

    if dry_run:
        console.print("[yellow]Dry run: no annotations will be committed.[/yellow]")

    try:
        accepted = annotate_selection(
            FileSelection(document, start, end),
            RecordedAnnotator(annotations_path),
            config,
            registry,
            console=console,
        )
    except EmptyResult as e:
        console.print(f"[dim]{e}.[/dim]")
        return
    except ServiceError as e:
        console.print(f"[red]Annotation failed: {e}[/red]")
        logger.debug("Annotation service error", exc_info=True)
        raise SystemExit(1) from e

    console.print()
    console.print(f"[bold green]Done.[/bold green] {len(accepted)} name(s) accepted in {document.name}.")
    if not dry_run and accepted:
        console.print(f"{len(registry)} span(s) committed.")
