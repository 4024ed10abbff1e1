"""Main Typer application — imports and registers all CLI commands.

Entry point: ``omniresolve`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer

from omniresolve.cli.commands.query import query_cmd
from omniresolve.cli.commands.resolve import resolve_cmd
from omniresolve.config import ResolverSettings

app = typer.Typer(
    name="omniresolve",
    help="omniresolve: locate omnibus build artifacts in Artifactory.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(name="resolve", help="Resolve artifacts for a product and channel.")(resolve_cmd)
app.command(name="query", help="Print the AQL query for a product version.")(query_cmd)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to ARTIFACTORY_LOG_LEVEL or WARNING).",
    ),
) -> None:
    """Configure logging before any command runs."""
    level = (log_level or ResolverSettings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
