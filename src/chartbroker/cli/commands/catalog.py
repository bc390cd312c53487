"""Commands for inspecting the broker catalog."""

from __future__ import annotations

import typer

from chartbroker.cli.common.context import BrokerAppContext
from chartbroker.cli.common.exits import exit_from_exc, warn_exit
from chartbroker.cli.common.options import JsonOpt
from chartbroker.cli.common.output import out
from chartbroker.cli.tui import select_plan
from chartbroker.core.brokerapi import Catalog
from chartbroker.core.catalog import get_catalog
from chartbroker.core.errors import BrokerError, NotFoundError
from chartbroker.core.types import resolve_types

catalog_app = typer.Typer(
    help="Inspect the service catalog served by the registry.",
    no_args_is_help=True,
)

RawOpt = typer.Option(
    False,
    "--raw",
    help="Show registry services as-is, without resolving plan schemas",
)


@catalog_app.command("list")
def catalog_list(ctx: typer.Context, as_json: bool = JsonOpt, raw: bool = RawOpt):
    """List services and plans, with schemas resolved for every plan."""
    appctx: BrokerAppContext = ctx.obj

    try:
        with out.status("Loading catalog..."):
            if raw:
                catalog = Catalog(services=appctx.registry.list_services())
            else:
                catalog = get_catalog(appctx.registry, appctx.fetcher)
    except BrokerError as exc:
        exit_from_exc(exc, message=f"Failed to load catalog: {exc}")

    if as_json:
        out.json(catalog.to_dict())
        return

    if not catalog.services:
        warn_exit("Registry has no services", code=0)

    out.catalog_table(catalog.services)


@catalog_app.command("types")
def catalog_types(
    ctx: typer.Context,
    service_id: str | None = typer.Argument(None, help="Service id"),
    plan_id: str | None = typer.Argument(None, help="Plan id"),
):
    """
    Show the chart types of one plan (pick interactively when no ids are given).
    """
    appctx: BrokerAppContext = ctx.obj

    try:
        if service_id and plan_id:
            with out.status("Loading service..."):
                service = appctx.registry.get_service(service_id)
            plan = service.find_plan(plan_id)
            if plan is None:
                raise NotFoundError(f"Did not find plan: {plan_id}")
        elif service_id or plan_id:
            out.error("Provide both SERVICE_ID and PLAN_ID, or neither.")
            raise typer.Exit(2)
        else:
            with out.status("Loading catalog..."):
                services = appctx.registry.list_services()
            picked = select_plan(services)
            if picked is None:
                warn_exit("No plan selected", code=0)
            service, plan = picked

        types = resolve_types(plan)
    except BrokerError as exc:
        exit_from_exc(exc)

    out.header(f"{service.name or service.id} / {plan.name or plan.id}")
    out.kv(
        {
            "instance": types.instance,
            "binding": types.binding or "(not bindable)",
        }
    )
