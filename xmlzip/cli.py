"""Command-line interface for xmlzip."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from xmlzip import __version__
from xmlzip.config import DEFAULT_BATCH_SIZE, DEFAULT_NAME_WIDTH, DEFAULT_STEM, load_job_config
from xmlzip.logging_config import setup_logging
from xmlzip.models import MismatchPolicy, SplitConfig, UnclosedPolicy
from xmlzip.pipeline import split_to_zip
from xmlzip.storage.manifest import save_manifest

app = typer.Typer(
    name="xmlzip",
    help="Split a large XML document into a zip of standalone fragments.",
)
console = Console()


@app.command()
def split(
    source: str = typer.Argument(
        ...,
        help="XML file path or http(s) URL",
    ),
    output: Path = typer.Argument(
        ...,
        help="Zip file to create",
    ),
    element: str | None = typer.Option(
        None,
        "--element",
        "-e",
        help="Local name of the element to split on (e.g., record)",
    ),
    batch_size: int | None = typer.Option(
        None,
        "--batch-size",
        "-n",
        help=f"Maximum split elements per fragment (default: {DEFAULT_BATCH_SIZE})",
    ),
    stem: str | None = typer.Option(
        None,
        "--stem",
        "-s",
        help=f"Leading part of fragment names (default: {DEFAULT_STEM})",
    ),
    width: int | None = typer.Option(
        None,
        "--width",
        "-w",
        help=f"Digits in fragment numbers (default: {DEFAULT_NAME_WIDTH})",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML job file; command-line options override its values",
    ),
    lenient_nesting: bool = typer.Option(
        False,
        "--lenient-nesting",
        help="Skip mismatched end tags with a warning instead of failing",
    ),
    strict_unclosed: bool = typer.Option(
        False,
        "--strict-unclosed",
        help="Fail when the document ends with unclosed elements",
    ),
    manifest: Path | None = typer.Option(
        None,
        "--manifest",
        "-m",
        help="Write a YAML manifest of the fragments to this path",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every fragment boundary",
    ),
) -> None:
    """Split SOURCE into fragments written to the OUTPUT zip."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    try:
        config = _build_config(
            element=element,
            batch_size=batch_size,
            stem=stem,
            width=width,
            config_file=config_file,
            lenient_nesting=lenient_nesting,
            strict_unclosed=strict_unclosed,
        )

        console.print(
            f"[bold]Splitting {source}[/bold] on <{config.split_element}>, "
            f"{config.batch_size} per fragment"
        )
        report = split_to_zip(source, output, config)

        table = Table(title=str(output))
        table.add_column("Fragment")
        table.add_column(f"<{config.split_element}>", justify="right")
        for fragment in report.fragments:
            table.add_row(fragment.name, str(fragment.split_count))
        console.print(table)

        if manifest is not None:
            save_manifest(report, output.name, manifest)
            console.print(f"[dim]Manifest written to {manifest}[/dim]")

        console.print(
            f"[bold green]Wrote {len(report.fragments)} fragments[/bold green] "
            f"with {report.total_split_elements} elements to {output}"
        )

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e


def _build_config(
    element: str | None,
    batch_size: int | None,
    stem: str | None,
    width: int | None,
    config_file: Path | None,
    lenient_nesting: bool,
    strict_unclosed: bool,
) -> SplitConfig:
    """Merge command-line options with an optional job file."""
    overrides = {
        "split_element": element,
        "batch_size": batch_size,
        "stem": stem,
        "name_width": width,
        "on_mismatch": MismatchPolicy.SKIP if lenient_nesting else None,
        "on_unclosed": UnclosedPolicy.ERROR if strict_unclosed else None,
    }

    if config_file is not None:
        return load_job_config(config_file, **overrides)

    if element is None:
        raise ValueError("No split element given; use --element or --config")

    return SplitConfig(
        **{key: value for key, value in overrides.items() if value is not None}
    )


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"xmlzip {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
