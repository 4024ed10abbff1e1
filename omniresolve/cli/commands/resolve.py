"""``omniresolve resolve PRODUCT`` — resolve artifacts and print them.

Maps command-line flags onto ``ResolverOptions`` and ``ResolverSettings``,
runs the resolver, and renders the artifacts as a Rich table or JSON.
"""

from __future__ import annotations

import json

import requests
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from omniresolve.config import ResolverSettings
from omniresolve.core.resolver import ArtifactoryError, ArtifactResolver
from omniresolve.models.artifacts import ArtifactInfo
from omniresolve.models.options import LATEST, ResolverOptions

console = Console()


def _render_table(artifacts: list[ArtifactInfo], title: str) -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("Platform", style="cyan")
    table.add_column("Version")
    table.add_column("Arch")
    table.add_column("Product Version", style="green")
    table.add_column("SHA256", overflow="fold")
    table.add_column("URL", overflow="fold")
    for a in artifacts:
        table.add_row(
            a.platform or "-",
            a.platform_version or "-",
            a.architecture or "-",
            a.version or "-",
            a.sha256 or "-",
            a.url,
        )
    return table


def resolve_cmd(
    product: str = typer.Argument(..., help="Product name, e.g. chef."),
    channel: str = typer.Option("stable", "--channel", "-c", help="Release channel."),
    version: str = typer.Option(
        LATEST, "--version", "-v", help="Product version, or 'latest'."
    ),
    platform: str = typer.Option(None, help="Filter: platform name, e.g. ubuntu."),
    platform_version: str = typer.Option(None, help="Filter: platform version."),
    architecture: str = typer.Option(None, help="Filter: architecture, e.g. x86_64."),
    endpoint: str = typer.Option(
        None, help="Artifactory endpoint (overrides ARTIFACTORY_ENDPOINT)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
) -> None:
    """Resolve artifacts for PRODUCT in the given channel."""
    try:
        options = ResolverOptions(
            product_name=product,
            channel=channel,
            product_version=version,
            platform=platform,
            platform_version=platform_version,
            architecture=architecture,
        )
    except ValidationError as exc:
        console.print(f"[bold red]Invalid options:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2)

    settings = ResolverSettings(endpoint=endpoint) if endpoint else ResolverSettings()
    try:
        with ArtifactResolver(options, settings=settings) as resolver:
            artifacts = resolver.resolve_all()
    except (ArtifactoryError, requests.RequestException) as exc:
        console.print(f"[bold red]{type(exc).__name__}:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps([a.to_dict() for a in artifacts], indent=2))
        return

    if not artifacts:
        console.print(
            f"[yellow]No artifacts found for {escape(product)} {escape(version)} "
            f"in {escape(channel)}.[/yellow]"
        )
        return

    console.print(_render_table(artifacts, f"{product} ({channel})"))
