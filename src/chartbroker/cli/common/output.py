"""Output formatting utilities for the CLI."""

from __future__ import annotations

import json
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import questionary
from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from chartbroker.cli.common.tui_style import QUESTIONARY_STYLE_SELECT
from chartbroker.core.brokerapi import BINDING_TYPE, INSTANCE_TYPE
from chartbroker.core.types import metadata_str

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME)
err_console = Console(theme=_THEME, stderr=True)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def _q_try(self, fn, *args, **kwargs):
        """Call questionary prompts and drop unsupported kwargs on older versions."""
        try:
            return fn(*args, **kwargs)
        except TypeError:
            for k in ("pointer", "instruction"):
                kwargs.pop(k, None)
            return fn(*args, **kwargs)

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with err_console.status(msg, spinner="dots"):
            yield

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        err_console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        err_console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def print(self, msg: str) -> None:
        """Print a message without Rich markup processing."""
        console.print(msg, markup=False, highlight=False, soft_wrap=True)

    def json(self, data: Any) -> None:
        """Print data as indented JSON."""
        console.print_json(json.dumps(data))

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {v}")

    def select_one(self, message: str, choices: list[questionary.Choice]) -> Any:
        """
        Prompt the user to select a single item from a list (radio list).

        Returns:
            The selected value, or None if cancelled.
        """
        if not choices:
            return None

        prompt = self._q_try(
            questionary.select,
            message,
            choices=choices,
            style=QUESTIONARY_STYLE_SELECT,
            qmark="✦",
            instruction="Use ↑/↓ then Enter",
            pointer="❯",
        )
        return prompt.ask()

    def catalog_table(self, services: Iterable[Any], title: str = "Catalog") -> None:
        """
        Expects objects with .id .name .plans (like chartbroker.core.brokerapi.Service)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Service", style="ok", no_wrap=True)
        t.add_column("Plan", no_wrap=True)
        t.add_column("Instance type")
        t.add_column("Binding type", style="meta")
        t.add_column("Schemas", style="meta")

        for s in services:
            for p in s.plans:
                schemas = getattr(p, "schemas", None)
                if schemas is None:
                    schema_note = "-"
                elif schemas.binding is not None:
                    schema_note = "instance, binding"
                else:
                    schema_note = "instance"
                t.add_row(
                    f"{s.name} ({s.id})",
                    f"{p.name or p.id} ({p.id})",
                    metadata_str(p.metadata, INSTANCE_TYPE) or "",
                    metadata_str(p.metadata, BINDING_TYPE) or "",
                    schema_note,
                )

        console.print(t)


out = Out()
