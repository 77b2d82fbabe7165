from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import List, Optional

import typer

from txn_queries.config import get_settings
from txn_queries.engine import TransactionQueryEngine
from txn_queries.loader import TransactionLoadError
from txn_queries.queries import describe_queries, results_to_jsonable, run_queries
from txn_queries.reporter import print_results
from txn_queries.utils.logging import configure_logging

app = typer.Typer(help="Transaction query engine CLI.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"transactions={settings.transactions_path} | client={settings.client_name or '-'} | "
        f"results={settings.results_dir} | env={settings.app_env} log={settings.log_level}"
    )


@app.command()
def queries() -> None:
    """
    List the available queries.
    """
    for name, description in describe_queries().items():
        typer.echo(f"{name:<28} {description}")


@app.command()
def report(
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        "-p",
        help="Transactions JSON file (default from settings).",
    ),
    client: Optional[str] = typer.Option(
        None,
        "--client",
        "-c",
        help="Client name for by-name queries (default from settings).",
    ),
    query: Optional[List[str]] = typer.Option(
        None,
        "--query",
        "-q",
        help="Query to run; repeat for several. Defaults to all queries.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print results as JSON instead of a table.",
    ),
    persist: bool = typer.Option(
        False,
        "--persist",
        help="Write results to the results directory.",
    ),
) -> None:
    """
    Load transactions, run queries and print the results.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    source = path or settings.transactions_path
    client_name = client or settings.client_name

    try:
        engine = TransactionQueryEngine.from_json(source)
    except TransactionLoadError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    try:
        results = run_queries(
            engine,
            query_names=query or None,
            client_name=client_name,
            results_dir=settings.results_dir,
            persist=persist,
        )
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2)

    if json_output:
        typer.echo(json.dumps(results_to_jsonable(results), indent=2))
    else:
        print_results(results, client_name=client_name)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
