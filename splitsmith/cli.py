"""Typer CLI for Splitsmith administration and reporting."""

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer

from splitsmith.ab.metrics import snapshots
from splitsmith.dx.errors import AdministrativeRenameConflict, StoreUnavailable
from splitsmith.operations import admin
from splitsmith.runtime.config import ConfigResolver
from splitsmith.utils.logging import configure_logging

app = typer.Typer(help="Splitsmith CLI - split test administration and reporting")

_state = {"config": None, "url": None}


def _resolver() -> ConfigResolver:
    config_file = _state["config"]
    resolver = ConfigResolver.from_yaml(config_file) if config_file else ConfigResolver()
    if _state["url"]:
        resolver.set_connection(resolver.connection.model_copy(update={"url": _state["url"]}))
    return resolver


@app.callback()
def main(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to YAML config file"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Redis URL (overrides config)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log store operations to stderr"),
):
    """Select the store to operate on."""
    if verbose:
        configure_logging(logging.DEBUG)
    _state["config"] = config
    _state["url"] = url


@app.command()
def keys(test_id: str = typer.Argument(..., help="Test id")):
    """List all stored keys of a test."""
    try:
        found = admin.list_keys(_resolver().resolve(test_id), test_id)
    except StoreUnavailable as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    for key in sorted(found):
        typer.echo(key)


@app.command()
def delete(
    test_id: str = typer.Argument(..., help="Test id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete all stored state of a test."""
    if not yes:
        typer.confirm(f"Delete all data of test '{test_id}'?", abort=True)
    try:
        deleted = admin.delete(_resolver().resolve(test_id), test_id)
    except StoreUnavailable as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    typer.echo(f"Deleted {deleted} key(s)")


@app.command()
def rename(
    old_test_id: str = typer.Argument(..., help="Current test id"),
    new_test_id: str = typer.Argument(..., help="New test id"),
):
    """Move all stored state of a test to a new test id."""
    try:
        renamed = admin.rename(_resolver().resolve(old_test_id), old_test_id, new_test_id)
    except AdministrativeRenameConflict as e:
        typer.echo(f"Renamed {len(e.renamed_keys)} key(s); destination exists for:", err=True)
        for key in e.failed_keys:
            typer.echo(f"  {key}", err=True)
        raise typer.Exit(code=1)
    except StoreUnavailable as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    typer.echo(f"Renamed {len(renamed)} key(s)")


@app.command()
def report(
    test_ids: List[str] = typer.Argument(..., help="Test ids"),
    to_mlflow: bool = typer.Option(False, "--mlflow", help="Also log snapshots to the active MLflow run"),
):
    """Print JSON snapshots of one or more tests."""
    try:
        reports = snapshots(_resolver(), *test_ids)
    except StoreUnavailable as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    if to_mlflow:
        from splitsmith.io.mlflow_ab import log_report_to_mlflow

        for test_report in reports:
            log_report_to_mlflow(test_report)

    typer.echo(json.dumps([r.model_dump() for r in reports], indent=2))


if __name__ == "__main__":
    app()
