"""gocobertura CLI — top-level command group."""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path
from typing import BinaryIO, TextIO

import click
from rich.console import Console
from rich.logging import RichHandler

from gocobertura import __version__
from gocobertura.config import ConvertConfig, load_config, validate_config
from gocobertura.converter import convert
from gocobertura.errors import ConversionError
from gocobertura.reporters.cobertura_xml import CoberturaXMLReporter

logger = logging.getLogger(__name__)

# stdout carries the XML report, so everything for humans goes to stderr
console = Console(stderr=True)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config_or_abort(path: str | None) -> ConvertConfig:
    try:
        config = load_config(path)
    except Exception as e:
        console.print(f"[red]Error:[/red] Failed to load configuration: {e}")
        raise click.Abort from e

    errors = validate_config(config)
    if errors:
        console.print(f"[red]Error:[/red] Found {len(errors)} configuration error(s):")
        for idx, error in enumerate(errors, start=1):
            console.print(f"  {idx}. [red]{error}[/red]")
        raise click.Abort
    return config


def _apply_overrides(
    config: ConvertConfig,
    *,
    ignore_files: str | None,
    ignore_dirs: str | None,
    ignore_gen_files: bool,
) -> None:
    if ignore_files is not None:
        config.ignore.files = ignore_files
    if ignore_dirs is not None:
        config.ignore.dirs = ignore_dirs
    if ignore_gen_files:
        config.ignore.generated_files = True


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log per-file decisions to stderr.")
@click.version_option(version=__version__, prog_name="gocobertura")
def cli(*, verbose: bool) -> None:
    """gocobertura — convert Go coverage profiles to Cobertura XML."""
    _configure_logging(verbose=verbose)


@cli.command("convert")
@click.option(
    "-i",
    "--input",
    "source",
    type=click.File("r", encoding="utf-8"),
    default="-",
    show_default=True,
    help="Cover profile written by `go test -coverprofile`.",
)
@click.option(
    "-o",
    "--output",
    "sink",
    type=click.File("wb"),
    default="-",
    show_default=True,
    help="Where to write the Cobertura XML report.",
)
@click.option("--ignore-files", default=None, help="Regex of file paths to leave out.")
@click.option("--ignore-dirs", default=None, help="Regex of package directories to leave out.")
@click.option(
    "--ignore-gen-files",
    is_flag=True,
    help="Leave out files marked with a 'Code generated ... DO NOT EDIT.' comment.",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, resolve_path=True),
    help="Config file, or directory holding .gocobertura.yml.",
)
def convert_command(
    source: TextIO,
    sink: BinaryIO,
    ignore_files: str | None,
    ignore_dirs: str | None,
    config_path: str | None,
    *,
    ignore_gen_files: bool,
) -> None:
    """Convert a Go cover profile into a Cobertura XML report.

    Example:
      go test -coverprofile=coverage.txt ./...
      gocobertura convert < coverage.txt > coverage.xml
    """
    config = _load_config_or_abort(config_path)
    _apply_overrides(
        config,
        ignore_files=ignore_files,
        ignore_dirs=ignore_dirs,
        ignore_gen_files=ignore_gen_files,
    )
    try:
        ignore = config.build_ignore()
    except re.error as e:
        raise click.UsageError(f"Invalid ignore pattern: {e}") from e

    try:
        coverage = convert(source, sink, ignore, timestamp=int(time.time() * 1000))
    except ConversionError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise click.Abort from e

    if config.output.save_intermediate:
        CoberturaXMLReporter().generate(coverage, Path(config.output.intermediate_path))


@cli.group("config")
def config_group() -> None:
    """Inspect `.gocobertura.yml` configuration."""


@config_group.command("validate")
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, resolve_path=True),
    help="Config file, or directory holding .gocobertura.yml.",
)
def config_validate(path: str) -> None:
    """Validate `.gocobertura.yml` and report every problem found."""
    _load_config_or_abort(path)
    console.print("[green]Configuration is valid![/green]")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
