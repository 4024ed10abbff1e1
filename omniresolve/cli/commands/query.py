"""``omniresolve query PRODUCT VERSION`` — show the AQL without sending it."""

from __future__ import annotations

import typer
from rich.console import Console

from omniresolve.core.aql import encode_items_query
from omniresolve.models.options import ResolverOptions
from omniresolve.models.query import ItemsQuery

console = Console()


def query_cmd(
    product: str = typer.Argument(..., help="Product name, e.g. chef."),
    version: str = typer.Argument(..., help="Concrete product version."),
    channel: str = typer.Option("stable", "--channel", "-c", help="Release channel."),
) -> None:
    """Print the search query used for a direct version lookup."""
    options = ResolverOptions(product_name=product, channel=channel, product_version=version)
    query = ItemsQuery.for_artifacts(
        repo=options.repository,
        project=options.product_name,
        version=options.product_version,
    )
    # AQL is full of brackets; keep Rich from reading them as markup.
    console.print(encode_items_query(query), markup=False, highlight=False, soft_wrap=True)
