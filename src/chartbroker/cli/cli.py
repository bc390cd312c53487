"""CLI application for the chart service broker."""

import typer

from chartbroker.cli.commands.catalog import catalog_app
from chartbroker.cli.commands.resources import name, schema
from chartbroker.cli.common.context import build_context
from chartbroker.cli.common.logging_setup import configure_logging
from chartbroker.cli.common.options import HostOpt, PortOpt, VerboseOpt

app = typer.Typer(
    help="chartbroker - Open Service Broker backed by chart deployments",
    no_args_is_help=True,
)


@app.callback()
def _init(
    ctx: typer.Context,
    host: str | None = HostOpt,
    port: int | None = PortOpt,
    verbose: int = VerboseOpt,
):
    """Configure logging and build the shared context once per invocation."""
    configure_logging(verbose)
    ctx.obj = build_context(host, port)


app.add_typer(catalog_app, name="catalog")
app.command("schema")(schema)
app.command("name")(name)


if __name__ == "__main__":
    app()
