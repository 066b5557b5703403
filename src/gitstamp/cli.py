"""Command-line entry points for gitstamp."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from gitstamp.config import dump_example_config, load_config, resolve_settings
from gitstamp.errors import GitStampError
from gitstamp.services.manifest_builder import ManifestBuilder
from gitstamp.util.logging import configure_logging

app = typer.Typer(add_completion=False, help="Stamp a Git checkout with a provenance manifest")


@app.command()
def stamp(
    path: Optional[str] = typer.Option(None, "--path", help="Path to the Git repository"),
    ext: Optional[str] = typer.Option(None, "--ext", help="Artifact extension (profile default when omitted)"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="Profile name: standard, release, archive"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML/TOML/JSON config file"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Directory for the manifest file"),
    remote_fallback: Optional[str] = typer.Option(
        None, "--remote-fallback", help="When no 'origin' remote exists: 'first' or 'error'"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the manifest instead of writing it"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also log to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Write manifest_<epoch>.json describing the repository's HEAD commit."""

    try:
        cfg = load_config(config, overrides={"profile": profile} if profile else None)
        logger = configure_logging(
            level="DEBUG" if verbose else cfg.logging.level,
            log_path=log_file or cfg.logging.file,
        )
        settings = resolve_settings(
            cfg,
            repo_path=path,
            extension=ext,
            output_dir=output_dir,
            remote_fallback=remote_fallback,
        )
        builder = ManifestBuilder(settings)
        if dry_run:
            typer.echo(builder.render(builder.collect()), nl=False)
            return
        manifest, dest = builder.run()
    except GitStampError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    logger.info("Stamped %s at %s", manifest.file_name, manifest.short_sha)
    if settings.profile.echo_path:
        typer.echo(str(dest.resolve()))


@app.command("dump-config")
def dump_config(dest: Path = typer.Argument(..., help="Destination .yaml or .json file")) -> None:
    """Write the default configuration as a starting point."""

    try:
        dump_example_config(dest)
    except GitStampError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Wrote {dest}")


def main() -> None:
    app()


__all__ = ["main", "app"]
