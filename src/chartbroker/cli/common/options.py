"""Common CLI options for the CLI."""

import typer

HostOpt = typer.Option(
    None,
    "--host",
    "-H",
    help="Service registry host (env: CHARTBROKER_REGISTRY_HOST)",
)

PortOpt = typer.Option(
    None,
    "--port",
    "-P",
    help="Service registry port (env: CHARTBROKER_REGISTRY_PORT)",
)

VerboseOpt = typer.Option(
    0,
    "--verbose",
    "-v",
    count=True,
    help="Increase log verbosity (-v info, -vv debug)",
)

JsonOpt = typer.Option(
    False,
    "--json",
    help="Print raw JSON instead of a table",
)

KindOpt = typer.Option(
    "instance",
    "--kind",
    "-k",
    help="Resource kind: instance or binding",
)

UrlOnlyOpt = typer.Option(
    False,
    "--url-only",
    help="Only print the schema URL, don't fetch it",
)
