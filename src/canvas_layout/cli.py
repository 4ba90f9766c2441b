"""CLI for canvas-layout."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from canvas_layout import __version__
from canvas_layout.errors import DocumentError
from canvas_layout.layout import compute_layout, describe, list_algorithms
from canvas_layout.parser import Document, LayoutOptions, LayoutResult, Position, read_document
from canvas_layout.render import render_svg
from canvas_layout.themes import THEMES
from canvas_layout.worker import LayoutWorker

ALGORITHM_CHOICES = [a.value for a in list_algorithms()]


def _load(input_file: Path) -> Document:
    try:
        return read_document(input_file)
    except DocumentError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)


def _options(
    seed: int | None,
    scale: float | None,
    center_x: float | None,
    center_y: float | None,
) -> LayoutOptions:
    center = None
    if center_x is not None or center_y is not None:
        center = Position(center_x or 0.0, center_y or 0.0)
    return LayoutOptions(center=center, scale=scale, seed=seed)


def _run(
    algorithm: str,
    doc: Document,
    options: LayoutOptions,
    offload: bool,
) -> LayoutResult:
    if not offload:
        return compute_layout(algorithm, doc.nodes, doc.edges, options)
    with LayoutWorker() as worker:
        return worker.compute(algorithm, doc.nodes, doc.edges, options)


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v, -vv).")
def cli(verbose: int) -> None:
    """canvas-layout: Compute 2D layouts for investigation diagrams."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output JSON file path. Defaults to <input>_layout.json")
@click.option("-a", "--algorithm", type=click.Choice(ALGORITHM_CHOICES), default="force",
              help="Layout algorithm (default: force)")
@click.option("--seed", type=int, default=None, help="Random seed for reproducible layouts")
@click.option("--scale", type=float, default=None,
              help="Algorithm scale: circle radius, grid cell or scatter side")
@click.option("--center-x", type=float, default=None, help="Layout center X (default: centroid)")
@click.option("--center-y", type=float, default=None, help="Layout center Y (default: centroid)")
@click.option("--offload/--in-process", default=True,
              help="Compute in a worker process (default) or in this process")
def layout(
    input_file: Path,
    output: Path | None,
    algorithm: str,
    seed: int | None,
    scale: float | None,
    center_x: float | None,
    center_y: float | None,
    offload: bool,
) -> None:
    """Compute element positions for an investigation document."""
    doc = _load(input_file)
    options = _options(seed, scale, center_x, center_y)
    result = _run(algorithm, doc, options, offload)

    if output is None:
        output = input_file.with_name(input_file.stem + "_layout.json")

    payload = {"algorithm": algorithm, "positions": result.as_dict()}
    output.write_text(json.dumps(payload, indent=2) + "\n")
    click.echo(f"Laid out {len(result)} elements with {algorithm} -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <input>.svg")
@click.option("-a", "--algorithm", type=click.Choice(ALGORITHM_CHOICES), default="force",
              help="Layout algorithm (default: force)")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="dark",
              help="Visual theme (default: dark)")
@click.option("--title", type=str, default="", help="Title drawn above the diagram")
@click.option("--seed", type=int, default=None, help="Random seed for reproducible layouts")
@click.option("--offload/--in-process", default=False,
              help="Compute in a worker process or in this process (default)")
def render(
    input_file: Path,
    output: Path | None,
    algorithm: str,
    theme: str,
    title: str,
    seed: int | None,
    offload: bool,
) -> None:
    """Lay out a document and render an SVG preview."""
    doc = _load(input_file)
    result = _run(algorithm, doc, LayoutOptions(seed=seed), offload)
    svg = render_svg(result, doc.edges, THEMES[theme], title=title)

    if output is None:
        output = input_file.with_suffix(".svg")

    output.write_text(svg)
    click.echo(f"Rendered {len(result)} elements, {len(doc.edges)} links -> {output}")


@cli.command()
def algorithms() -> None:
    """List the available layout algorithms."""
    for algo in list_algorithms():
        name, description = describe(algo)
        click.echo(f"{algo.value:<10} {name}: {description}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Print a summary of an investigation document."""
    doc = _load(input_file)
    ids = {n.id for n in doc.nodes}
    dangling = sum(1 for e in doc.edges if e.source not in ids or e.target not in ids)
    unplaced = sum(1 for n in doc.nodes if n.position is None)

    click.echo(f"Elements: {len(doc.nodes)}")
    click.echo(f"Links: {len(doc.edges)}")
    click.echo(f"Groups skipped: {doc.skipped_groups}")
    click.echo(f"Unplaced elements: {unplaced}")
    click.echo(f"Dangling links: {dangling}")
