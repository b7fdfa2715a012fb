"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from slidemark.config import Settings, load_config
from slidemark.core.classify import get_slide_type_description
from slidemark.core.mapper import get_mapping_statistics, map_tokens_to_slides
from slidemark.core.models import SlideType
from slidemark.core.parse import parse_markdown
from slidemark.core.pipeline import build_payload, dump_payload, map_file, run_map
from slidemark.core.samples import get_sample_by_type, get_sample_names
from slidemark.core.source import load_source


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _file(path: str) -> Path:
    p = Path(path)
    if not p.is_file():
        _fail(f"Not a file: {path}")
    return p


def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")] = False,
    ):
    """Configure logging for every command."""
    level = "DEBUG" if verbose else _settings().log_level
    if not logging.getLogger().handlers:
        logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("slidemark").setLevel(level)


def parse_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to tokenize")],
    ):
    """Print the token stream and link/image inventories as JSON."""
    try:
        _, body = load_source(_file(path))
    except ValueError as e:
        _fail(str(e))
    typer.echo(parse_markdown(body).model_dump_json(indent=2))


def show_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to map")],
    fmt: Annotated[Optional[str], typer.Option("--format", help="json or yaml")] = None,
    max_level: Annotated[Optional[int], typer.Option("--max-level", help="Deepest heading level that starts a slide")] = None,
    ):
    """Print the slide records and statistics for one file."""
    settings = _settings(overrides={"output_format": fmt, "max_level": max_level})
    try:
        doc = map_file(_file(path), settings)
    except ValueError as e:
        _fail(str(e))
    typer.echo(dump_payload(build_payload(doc), settings.output_format))


def map_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to map")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="json or yaml")] = None,
    max_level: Annotated[Optional[int], typer.Option("--max-level", help="Deepest heading level that starts a slide")] = None,
    ):
    """Map every markdown file under path and write one slide file per document."""
    settings = _settings(overrides={"output_dir": out, "output_format": fmt, "max_level": max_level})
    output_dir = Path(settings.output_dir)
    try:
        results = run_map(path, settings, output_dir)
    except RuntimeError as e:
        _fail(str(e))
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Mapped {len(results)} document(s) to {output_dir}/")


def stats_cmd(
    path: Annotated[str, typer.Argument(help="Markdown file to map")],
    ):
    """Print how many slides of each type a file maps to."""
    settings = _settings()
    try:
        doc = map_file(_file(path), settings)
    except ValueError as e:
        _fail(str(e))
    stats = get_mapping_statistics(doc.results)
    for slide_type, count in stats.counts_by_type.items():
        typer.echo(f"  {slide_type.value}: {count}")
    typer.echo(
        f"Total {stats.total} slide(s) - "
        f"{stats.fallback_count} fallback, "
        f"average confidence {stats.average_confidence:.2f}"
    )


def samples_cmd(
    name: Annotated[Optional[str], typer.Argument(help="Sample to map; omit to list sample names")] = None,
    ):
    """List the sample catalog, or show how one sample maps to slides."""
    if name is None:
        for sample in get_sample_names():
            typer.echo(sample)
        return
    text = get_sample_by_type(name)
    if text is None:
        _fail(f"Unknown sample '{name}'. Choose from: {', '.join(get_sample_names())}")
    for n, result in enumerate(map_tokens_to_slides(parse_markdown(text), _settings())):
        cols = result.content.get("cols")
        label = f"{result.type.value} cols={cols}" if result.type is SlideType.card_grid else result.type.value
        typer.echo(f"  {n}: {label} ({result.confidence:.2f}) {result.rationale}")


def describe_cmd(
    slide_type: Annotated[Optional[str], typer.Argument(help="Slide type; omit to describe all")] = None,
    ):
    """Describe one slide type, or all of them."""
    if slide_type is not None:
        typer.echo(get_slide_type_description(slide_type))
        return
    for t in SlideType:
        typer.echo(f"  {t.value}: {get_slide_type_description(t)}")
