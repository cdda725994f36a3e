"""Command line entry point: ``step-mappings`` / ``python -m step_mappings``."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from . import __version__
from .collector import find_step_files
from .config import GeneratorConfig, load_config
from .errors import StepMappingsError
from .generator import generate, render_mapping_file

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="step-mappings",
    help="Generate the sentence-to-function module for BDD step definitions.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"step-mappings {__version__}")
        raise typer.Exit()


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _step_files(config: GeneratorConfig, explicit: list[Path] | None) -> list[Path]:
    if explicit:
        return list(explicit)
    return find_step_files(
        config.steps_root,
        config.step_patterns,
        exclude=(config.steps_barrel_file, config.mapping_file),
    )


def _is_up_to_date(config: GeneratorConfig, files: list[Path]) -> bool:
    expected = render_mapping_file(files, config)
    try:
        with config.mapping_file.open(encoding="utf-8", newline="") as handle:
            current = handle.read()
    except FileNotFoundError:
        return False
    return current == expected


@app.command()
def main(
    step_files: list[Path] | None = typer.Argument(
        None,
        help="Step modules to scan. Defaults to the configured patterns.",
    ),
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="pyproject.toml holding [tool.step-mappings]"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Generated module to write"
    ),
    barrel: Path | None = typer.Option(
        None, "--barrel", help="Module re-exporting every step function"
    ),
    barrel_module: str | None = typer.Option(
        None, "--barrel-module", help="Import the barrel by dotted name instead"
    ),
    steps_root: Path | None = typer.Option(
        None, "--steps-root", help="Directory the step patterns are expanded in"
    ),
    patterns: list[str] | None = typer.Option(
        None, "--pattern", "-p", help="Glob selecting step modules (repeatable)"
    ),
    check: bool = typer.Option(
        False, "--check", help="Exit with status 1 if the module is out of date"
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Increase verbosity (-v, -vv)"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Scan step modules and write the step mappings module."""
    _configure_logging(verbose)
    try:
        config = load_config(
            config_file,
            mapping_file=output,
            steps_barrel_file=barrel,
            barrel_module=barrel_module,
            steps_root=steps_root,
            step_patterns=tuple(patterns) if patterns else None,
        )
        files = _step_files(config, step_files)
        logger.debug("Scanning %d step files", len(files))
        if check:
            if _is_up_to_date(config, files):
                typer.echo(f"{config.mapping_file} is up to date")
                return
            typer.secho(
                f"{config.mapping_file} is out of date", err=True, fg=typer.colors.RED
            )
            raise typer.Exit(1)
        generate(config=config).from_files(files)
    except (StepMappingsError, OSError) as exc:
        typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(1) from exc

    typer.echo(f"Wrote {config.mapping_file} from {len(files)} step files")
