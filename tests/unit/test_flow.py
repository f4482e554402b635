"""Unit tests for the flow summarizer"""

import pytest
from datetime import date
from decimal import Decimal
from moneyflow.domain.models import Category, FlowEdge, FlowNode, Transaction
from moneyflow.domain.flow import (
    FlowLabels,
    canonical_category_id,
    category_names_from,
    outgoing_weight,
    summarize,
)
from moneyflow.domain.exceptions import InvalidAmountError
from factories import make_transaction


CATEGORY_NAMES = {"food": "Comida", "rent": "Renta"}


def test_summarize_empty_input():
    """No transactions yields zero totals and an empty graph"""
    summary = summarize([], {})

    assert summary.total_income == 0
    assert summary.total_expenses == 0
    assert summary.total_savings == 0
    assert summary.flow_graph.nodes == []
    assert summary.flow_graph.edges == []


def test_summarize_concrete_scenario(scenario_transactions):
    """Income 1000 with food 300 and rent 200 leaves 500 savings"""
    summary = summarize(scenario_transactions, CATEGORY_NAMES)

    assert summary.total_income == Decimal("1000")
    assert summary.total_expenses == Decimal("500")
    assert summary.total_savings == Decimal("500")

    assert summary.flow_graph.nodes == [
        FlowNode(id="income", display_name="Income", kind="income"),
        FlowNode(id="food", display_name="Comida", kind="expense"),
        FlowNode(id="rent", display_name="Renta", kind="expense"),
        FlowNode(id="savings", display_name="Savings", kind="savings"),
    ]
    assert summary.flow_graph.edges == [
        FlowEdge(source="income", target="food", weight=Decimal("300")),
        FlowEdge(source="income", target="rent", weight=Decimal("200")),
        FlowEdge(source="income", target="savings", weight=Decimal("500")),
    ]


def test_summarize_groups_and_sorts_categories_descending():
    """Amounts are summed per category and largest category comes first"""
    transactions = [
        make_transaction("1", 2000, "income"),
        make_transaction("2", 50, "expense", "fun"),
        make_transaction("3", 400, "expense", "rent"),
        make_transaction("4", 100, "expense", "fun"),
        make_transaction("5", 120, "expense", "food"),
    ]

    summary = summarize(transactions, {})
    edges = summary.flow_graph.edges

    assert [e.target for e in edges] == ["rent", "fun", "food", "savings"]
    assert edges[1].weight == Decimal("150")


def test_summarize_ties_keep_input_order():
    """Equal category totals stay in first-encountered order"""
    transactions = [
        make_transaction("1", 100, "expense", "b"),
        make_transaction("2", 100, "expense", "a"),
        make_transaction("3", 100, "expense", "c"),
    ]

    summary = summarize(transactions, {})

    assert [n.id for n in summary.flow_graph.nodes] == ["income", "b", "a", "c"]


def test_summarize_conservation():
    """Savings always equal income minus expenses, exactly"""
    transactions = [
        make_transaction("1", "1234.56", "income"),
        make_transaction("2", "0.10", "expense", "x"),
        make_transaction("3", "0.20", "expense", "y"),
        make_transaction("4", "999.99", "expense", "z"),
    ]

    summary = summarize(transactions, {})

    assert summary.total_savings == summary.total_income - summary.total_expenses
    assert summary.total_savings == Decimal("234.27")


def test_summarize_outgoing_weight_matches_totals(scenario_transactions):
    """Weights leaving income equal expenses plus positive savings"""
    summary = summarize(scenario_transactions, CATEGORY_NAMES)

    expected = summary.total_expenses + max(Decimal("0"), summary.total_savings)
    assert outgoing_weight(summary.flow_graph, "income") == expected
    assert outgoing_weight(summary.flow_graph, "income") == summary.total_income


def test_summarize_deficit_omits_savings():
    """Spending more than earned leaves savings negative and no savings node"""
    transactions = [
        make_transaction("1", 100, "income"),
        make_transaction("2", 250, "expense", "rent"),
    ]

    summary = summarize(transactions, {"rent": "Rent"})

    assert summary.total_savings == Decimal("-150")
    assert [n.id for n in summary.flow_graph.nodes] == ["income", "rent"]
    assert outgoing_weight(summary.flow_graph, "income") == Decimal("250")


def test_summarize_break_even_omits_savings():
    transactions = [
        make_transaction("1", 100, "income"),
        make_transaction("2", 100, "expense", "rent"),
    ]

    summary = summarize(transactions, {})

    assert summary.total_savings == 0
    assert "savings" not in [n.id for n in summary.flow_graph.nodes]


def test_summarize_income_only():
    summary = summarize([make_transaction("1", 500, "income")], {})

    assert [n.id for n in summary.flow_graph.nodes] == ["income", "savings"]
    assert summary.flow_graph.edges == [FlowEdge(source="income", target="savings", weight=Decimal("500"))]


def test_summarize_category_fallback_name():
    """Missing category names fall back instead of failing"""
    summary = summarize([make_transaction("1", 40, "expense", "X")], {})

    node = summary.flow_graph.nodes[1]
    assert node.id == "X"
    assert node.display_name == "Uncategorized"


def test_summarize_custom_labels():
    labels = FlowLabels(income="Ingresos", savings="Ahorros", fallback_category="Otra Categoría")
    transactions = [
        make_transaction("1", 100, "income"),
        make_transaction("2", 30, "expense", "99"),
    ]

    summary = summarize(transactions, {}, labels)

    assert [n.display_name for n in summary.flow_graph.nodes] == ["Ingresos", "Otra Categoría", "Ahorros"]


def test_summarize_ignores_other_transaction_types():
    """Transfers and other types count toward neither total"""
    transactions = [
        make_transaction("1", 100, "income"),
        make_transaction("2", 40, "transfer", "internal"),
        make_transaction("3", 10, "expense", "food"),
    ]

    summary = summarize(transactions, {})

    assert summary.total_income == Decimal("100")
    assert summary.total_expenses == Decimal("10")
    assert "internal" not in [n.id for n in summary.flow_graph.nodes]


def test_summarize_only_unknown_types_yields_empty_graph():
    summary = summarize([make_transaction("1", 40, "transfer")], {})

    assert summary.flow_graph.nodes == []
    assert summary.flow_graph.edges == []
    assert summary.total_savings == 0


def test_summarize_zero_expense_category_has_no_node():
    transactions = [
        make_transaction("1", 100, "income"),
        make_transaction("2", 0, "expense", "free"),
        make_transaction("3", 20, "expense", "food"),
    ]

    summary = summarize(transactions, {})

    assert [n.id for n in summary.flow_graph.nodes] == ["income", "food", "savings"]
    assert all(e.weight > 0 for e in summary.flow_graph.edges)


def test_summarize_missing_and_numeric_category_ids():
    """None groups as uncategorized; numeric ids are coerced to strings"""
    transactions = [
        make_transaction("1", 10, "expense", None),
        make_transaction("2", 30, "expense", 7),
        make_transaction("3", 5, "expense", "7"),
    ]

    summary = summarize(transactions, {"7": "Groceries"})

    nodes = summary.flow_graph.nodes
    assert [n.id for n in nodes] == ["income", "7", "uncategorized"]
    assert nodes[1].display_name == "Groceries"
    assert summary.flow_graph.edges[0].weight == Decimal("35")


def test_summarize_reserved_category_ids_stay_unique():
    """A category literally named 'savings' does not collide with the savings node"""
    transactions = [
        make_transaction("1", 100, "income"),
        make_transaction("2", 20, "expense", "savings"),
        make_transaction("3", 10, "expense", "income"),
    ]

    summary = summarize(transactions, {"savings": "Piggy bank"})
    node_ids = [n.id for n in summary.flow_graph.nodes]

    assert len(node_ids) == len(set(node_ids))
    assert node_ids == ["income", "category:savings", "category:income", "savings"]
    for edge in summary.flow_graph.edges:
        assert edge.source in node_ids
        assert edge.target in node_ids


def test_summarize_is_deterministic(scenario_transactions):
    first = summarize(scenario_transactions, CATEGORY_NAMES)
    second = summarize(scenario_transactions, CATEGORY_NAMES)

    assert first.flow_graph.nodes == second.flow_graph.nodes
    assert first.flow_graph.edges == second.flow_graph.edges


def test_summarize_accepts_numeric_amount_types():
    """int, float and numeric strings are converted to Decimal"""
    transactions = [
        Transaction(id="1", amount=100, transaction_type="income", category_id=None, transaction_date=date(2024, 1, 1)),
        Transaction(id="2", amount="12.5", transaction_type="expense", category_id="a", transaction_date=date(2024, 1, 1)),
        Transaction(id="3", amount=2.5, transaction_type="expense", category_id="a", transaction_date=date(2024, 1, 1)),
    ]

    summary = summarize(transactions, {})

    assert summary.total_expenses == Decimal("15.0")
    assert summary.total_savings == Decimal("85.0")


@pytest.mark.parametrize("amount", [Decimal("-1"), Decimal("NaN"), Decimal("Infinity"), float("inf"), "abc", True])
def test_summarize_rejects_invalid_amounts(amount):
    transactions = [
        make_transaction("ok", 10, "income"),
        Transaction(id="bad", amount=amount, transaction_type="expense", category_id="a", transaction_date=date(2024, 1, 1)),
    ]

    with pytest.raises(InvalidAmountError) as exc_info:
        summarize(transactions, {})

    assert exc_info.value.transaction_id == "bad"


def test_summarize_validates_ignored_types_too():
    bad = Transaction(id="t", amount=Decimal("-5"), transaction_type="transfer", category_id=None, transaction_date=date(2024, 1, 1))

    with pytest.raises(InvalidAmountError):
        summarize([bad], {})


def test_canonical_category_id():
    assert canonical_category_id(None) == "uncategorized"
    assert canonical_category_id(12) == "12"
    assert canonical_category_id("food") == "food"


def test_category_names_from_records():
    categories = [Category(id="1", name="Food"), Category(id=2, name="Rent")]

    assert category_names_from(categories) == {"1": "Food", "2": "Rent"}
