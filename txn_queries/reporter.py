from __future__ import annotations

from typing import Any, List, Mapping, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from txn_queries.domain.models import Transaction
from txn_queries.queries import QueryResult


def _format_transaction(transaction: Transaction) -> str:
    return (
        f"{transaction.id}: {transaction.sender_name} -> {transaction.beneficiary_name} "
        f"{transaction.amount:,.2f}"
    )


def format_value(value: Any) -> str:
    """
    Render a query value as compact, human-readable text.

    Transactions become one-line summaries, mappings one `key: value` line per
    entry, and other collections one line per item.
    """
    if value is None:
        return "-"
    if isinstance(value, Transaction):
        return _format_transaction(value)
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        return f"{value:,.2f}"
    if isinstance(value, Mapping):
        if not value:
            return "(empty)"
        return "\n".join(f"{k}: {format_value(v)}" for k, v in value.items())
    if isinstance(value, (set, frozenset)):
        value = sorted(value, key=str)
    if isinstance(value, (list, tuple)):
        if not value:
            return "(empty)"
        return "\n".join(format_value(v) for v in value)
    return str(value)


def print_results(
    results: List[QueryResult],
    client_name: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Render query results as a rich table.

    Failed queries show their error message in place of a value.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No results to display.[/yellow]")
        return

    title = "Transaction Query Results"
    if client_name:
        title = f"{title}\n[dim]Client: {escape(client_name)}[/dim]"

    table = Table(title=title, box=box.ROUNDED, show_lines=True)
    table.add_column("Query", style="cyan", no_wrap=True)
    table.add_column("Result", style="green")
    table.add_column("Duration (ms)", justify="right", style="magenta")

    for res in results:
        if res.get("error"):
            result_str = f"[red]error: {escape(res['error'])}[/red]"
        else:
            result_str = escape(format_value(res.get("value")))
        duration_ms = res.get("duration_seconds", 0.0) * 1000
        table.add_row(res.get("query", "Unknown"), result_str, f"{duration_ms:.3f}")

    console.print(table)


__all__ = ["format_value", "print_results"]
