from __future__ import annotations

from rich.console import Console

from txn_queries.queries import run_queries
from txn_queries.reporter import format_value, print_results


def test_format_value_scalars():
    assert format_value(None) == "-"
    assert format_value(True) == "yes"
    assert format_value(1234.5) == "1,234.50"
    assert format_value(14) == "14"
    assert format_value([]) == "(empty)"
    assert format_value({3, 1}) == "1\n3"


def test_format_value_transaction(make_transaction):
    transaction = make_transaction("9", 10.0, sender_name="A", beneficiary_name="B")
    assert format_value(transaction) == "9: A -> B 10.00"
    assert format_value({"B": transaction}) == "B: 9: A -> B 10.00"


def test_print_results_renders_values_and_errors(engine):
    console = Console(record=True, width=200)
    results = run_queries(engine, ["top_sender", "has_open_compliance_issue"])

    print_results(results, client_name="Nobody", console=console)

    text = console.export_text()
    assert "Grace Burgess" in text
    assert "error:" in text
    assert "Client: Nobody" in text


def test_print_results_empty():
    console = Console(record=True)
    print_results([], console=console)
    assert "No results" in console.export_text()
