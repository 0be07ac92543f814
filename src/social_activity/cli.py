"""Typer CLI for building the social activity feed."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError
import typer

from . import __version__
from .config import Settings
from .errors import ConfigError, StoreError
from .feed import build_feed, render_feed_json
from .logging import configure_logging

app = typer.Typer(help="Aggregate Twitter, GitHub and Dribbble activity into activities.json.")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show social-activity version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command("build")
def build(
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        help="Directory for activities.json and cached responses (defaults to SOCIAL_ACTIVITY_PATH).",
    ),
    limit: int | None = typer.Option(None, "--limit", min=0, help="Maximum feed entries (default 12)."),
    parallel: bool = typer.Option(False, "--parallel", help="Fetch providers concurrently."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the feed JSON instead of writing it."),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """Fetch every provider once and write the merged feed."""
    configure_logging(debug)

    try:
        settings = Settings()
    except ValidationError as exc:
        typer.secho(f"Build failed: invalid configuration: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(2) from exc
    if output_dir is not None:
        settings = settings.model_copy(update={"activity_path": output_dir})

    try:
        result = build_feed(
            settings,
            limit=limit,
            max_workers=3 if parallel else 1,
            dry_run=dry_run,
        )
    except (ConfigError, StoreError) as exc:
        typer.secho(f"Build failed: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(2) from exc

    for outcome in result.outcomes:
        if outcome.ok:
            typer.echo(f"{outcome.provider}: {outcome.item_count} item(s), {outcome.dropped_count} dropped")
        else:
            typer.secho(f"{outcome.provider}: failed ({outcome.error})", err=True, fg=typer.colors.YELLOW)

    if dry_run:
        typer.echo(render_feed_json(result.items))
    else:
        typer.echo(f"Wrote {len(result.items)} item(s) to {result.output_path}")
