"""Commands for resource names and chart schemas."""

from __future__ import annotations

import typer

from chartbroker.cli.common.context import BrokerAppContext
from chartbroker.cli.common.exits import die, exit_from_exc
from chartbroker.cli.common.options import KindOpt, UrlOnlyOpt
from chartbroker.cli.common.output import out
from chartbroker.core.errors import BrokerError
from chartbroker.core.naming import ResourceKind, resource_name
from chartbroker.core.schemas import fetch_schema, schema_url


def name(
    resource_id: str = typer.Argument(..., help="Broker instance or binding id"),
    kind: str = KindOpt,
):
    """Print the cluster resource name derived from a broker id."""
    try:
        resource_kind = ResourceKind(kind.strip().lower())
    except ValueError:
        valid = ", ".join(k.value for k in ResourceKind)
        die(f"Unknown kind {kind!r} (expected one of: {valid})", code=2)

    out.print(resource_name(resource_id, resource_kind))


def schema(
    ctx: typer.Context,
    locator: str = typer.Argument(..., help="Chart locator (gs://bucket/chart)"),
    url_only: bool = UrlOnlyOpt,
):
    """Fetch and print the input schema of a chart."""
    appctx: BrokerAppContext = ctx.obj

    try:
        url = schema_url(locator)
        if url_only:
            out.print(url)
            return
        with out.status(f"Fetching {url}..."):
            result = fetch_schema(locator, appctx.fetcher)
    except BrokerError as exc:
        exit_from_exc(exc)

    out.print(result.inputs)
