"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from recreate.config import DOMINANT_METHODS, MosaicConfig
from recreate.errors import MosaicError
from recreate.pipeline import run as run_pipeline
from recreate.scheduler import WorkScheduler

app = typer.Typer(
    name="recreate",
    help="Recreate a reference image as a photomosaic of other images.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
        force=True,
    )


# Defaults come from MosaicConfig - single source of truth
_DEFAULTS = MosaicConfig()


@app.command()
def recreate(
    directory: Path = typer.Option(
        ..., "--dir", "-d", help="Folder containing the images for the collage",
    ),
    reference: Path = typer.Option(
        ..., "--ref", "-p", help="Path to the image to be recreated",
    ),
    cols: int = typer.Option(
        _DEFAULTS.cols, "--cols", "-c",
        help="Grid columns (snapped to the nearest divisor of the width)",
    ),
    rows: int = typer.Option(
        _DEFAULTS.rows, "--rows", "-r",
        help="Grid rows (snapped to the nearest divisor of the height)",
    ),
    alpha: float = typer.Option(
        _DEFAULTS.alpha, "--alpha", "-a",
        help="How strongly each cell is tinted toward its dominant colour (0-1)",
    ),
    resize: bool = typer.Option(
        _DEFAULTS.resize_to_square, "--resize/--no-resize",
        help="Square the reference using its width before gridding",
    ),
    scale: float = typer.Option(
        _DEFAULTS.scale, "--scale", "-s",
        help="Multiply the output width and height by this factor (0 = off)",
    ),
    workers: int = typer.Option(
        _DEFAULTS.workers, "--workers", "-w", help="Worker threads",
    ),
    dominant: str = typer.Option(
        _DEFAULTS.dominant, "--dominant",
        help=f"Dominant colour method: {' | '.join(DOMINANT_METHODS)}",
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output file (default: <ref dir>/output.png)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Build a photomosaic of REF from the images in DIR."""
    _setup_logging(verbose)
    t0 = time.perf_counter()

    try:
        cfg = MosaicConfig(
            directory=directory,
            reference=reference,
            rows=rows,
            cols=cols,
            alpha=alpha,
            resize_to_square=resize,
            scale=scale,
            workers=workers,
            dominant=dominant,
            output=output,
            verbose=verbose,
        )

        console.print(Panel.fit(
            f"[bold]RECREATE[/bold]\n"
            f"Reference: {cfg.reference}  |  Images: {cfg.directory}\n"
            f"Grid: {cfg.cols}x{cfg.rows}  |  Alpha: {cfg.alpha}  |  "
            f"Square: {cfg.resize_to_square}\n"
            f"Scale: {cfg.scale or 'off'}  |  Dominant: {cfg.dominant}  |  "
            f"Workers: {cfg.workers}",
            border_style="cyan",
        ))

        out = run_pipeline(cfg, WorkScheduler(cfg.workers))
    except MosaicError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    elapsed = time.perf_counter() - t0
    console.print(Panel.fit(
        f"[bold green]DONE[/bold green] - check output at [bold]{out}[/bold]\n"
        f"[dim]Time taken: {elapsed:.2f}s[/dim]",
        border_style="green",
    ))


if __name__ == "__main__":
    app()
