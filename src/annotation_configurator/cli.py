from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from annotation_configurator.binder import FieldBinder, is_secret
from annotation_configurator.errors import ConfiguratorError
from annotation_configurator.merger import ConfigMerger
from annotation_configurator.models import SettingsSnapshot
from annotation_configurator.sources.loader import ResourceLoader

app = typer.Typer(help="annotation-configurator CLI")
LOGGER = logging.getLogger(__name__)

MASK = "******"


def main() -> None:
    """Allow `python -m annotation_configurator` execution."""
    app()


@app.command("show")
def show(
    sources: list[str] = typer.Argument(..., help="Property sources, lowest precedence first."),
    root: Optional[list[Path]] = typer.Option(
        None,
        "--root",
        "-r",
        help="Directory to search for sources (repeatable, defaults to the working directory).",
    ),
    package: Optional[list[str]] = typer.Option(
        None,
        "--package",
        "-p",
        help="Python package whose bundled resources are searched after --root directories.",
    ),
    with_env: bool = typer.Option(False, "--with-env", help="Apply environment variable overrides."),
    as_json: bool = typer.Option(False, "--json", help="Print the merged settings as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """Merge property sources and print the resulting settings."""
    _configure_logging(verbose)
    load_dotenv(dotenv_path=".env")
    try:
        loader = ResourceLoader.from_locations(root or (), package or ())
        LOGGER.debug("Searching sources in %s", loader.roots)
        settings = ConfigMerger(loader).build(sources)
    except ConfiguratorError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    values = dict(settings)
    if with_env:
        binder = FieldBinder()
        values = {key: binder.effective_value(key, settings) or "" for key in values}
    masked = sorted(key for key in values if is_secret(key))
    for key in masked:
        values[key] = MASK

    if as_json:
        snapshot = SettingsSnapshot(
            sources=sources,
            settings=dict(sorted(values.items())),
            masked=masked,
            environment_applied=with_env,
        )
        typer.echo(snapshot.model_dump_json(indent=2))
        return

    if not values:
        typer.secho("No settings found.", fg=typer.colors.YELLOW)
        return
    for key in sorted(values):
        typer.echo(f"{key} = {values[key]}")


@app.command("ls")
def list_files(
    directory: str = typer.Argument(..., help="Resource directory to list."),
    root: Optional[list[Path]] = typer.Option(None, "--root", "-r", help="Directory to search (repeatable)."),
    package: Optional[list[str]] = typer.Option(None, "--package", "-p", help="Package to search (repeatable)."),
) -> None:
    """List the files directly inside a resource directory."""
    try:
        loader = ResourceLoader.from_locations(root or (), package or ())
        names = loader.list_file_names(directory)
    except ConfiguratorError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    for name in names:
        typer.echo(name)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
