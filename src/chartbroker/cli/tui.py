"""Terminal UI utilities for chartbroker."""

from __future__ import annotations

import questionary

from chartbroker.cli.common.output import out
from chartbroker.core.brokerapi import Service, ServicePlan

_MAX_LABEL_WIDTH = 72


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _plan_label(service: Service, plan: ServicePlan) -> str:
    return _truncate(f"{service.name or service.id} / {plan.name or plan.id}", _MAX_LABEL_WIDTH)


def _plan_choice_title(service: Service, plan: ServicePlan, *, label_width: int) -> str:
    """Format one plan choice as `<service> / <plan>  (id: <plan_id>)` with aligned id column."""
    return f"{_plan_label(service, plan).ljust(label_width)}  (id: {plan.id})"


def select_plan(services: list[Service]) -> tuple[Service, ServicePlan] | None:
    """Display a select prompt over every plan of every service.

    Args:
        services: Services to choose from, in registry order.

    Returns:
        The chosen (service, plan) pair, or None if nothing was chosen.
    """
    pairs = [(s, p) for s in services for p in s.plans]
    label_width = max((len(_plan_label(s, p)) for s, p in pairs), default=0)

    choices = [
        questionary.Choice(
            title=_plan_choice_title(s, p, label_width=label_width),
            value=(s, p),
        )
        for s, p in pairs
    ]
    return out.select_one("Select a plan:", choices)
