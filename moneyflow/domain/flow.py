"""Flow summarizer - income, expenses, savings and the money-flow graph"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from moneyflow.domain.exceptions import InvalidAmountError
from moneyflow.domain.models import (
    FlowEdge,
    FlowGraph,
    FlowNode,
    NodeKind,
    Summary,
    Transaction,
    TransactionType,
)

INCOME_NODE_ID = "income"
SAVINGS_NODE_ID = "savings"
UNCATEGORIZED_KEY = "uncategorized"

_RESERVED_NODE_IDS = {INCOME_NODE_ID, SAVINGS_NODE_ID}


@dataclass(frozen=True)
class FlowLabels:
    """Display names for the fixed nodes and for unknown categories"""

    income: str = "Income"
    savings: str = "Savings"
    fallback_category: str = "Uncategorized"


def canonical_category_id(category_id: object) -> str:
    """Coerce a category identifier to its canonical string form."""
    if category_id is None:
        return UNCATEGORIZED_KEY
    return str(category_id)


def validated_amount(transaction: Transaction) -> Decimal:
    """
    Return the transaction amount as a Decimal.

    Raises:
        InvalidAmountError: amount is not numeric, not finite, or negative
    """
    amount = transaction.amount
    if isinstance(amount, bool):
        raise InvalidAmountError(transaction.id, amount)
    if not isinstance(amount, Decimal):
        try:
            amount = Decimal(str(amount))
        except (InvalidOperation, ValueError, TypeError) as e:
            raise InvalidAmountError(transaction.id, transaction.amount) from e

    if not amount.is_finite() or amount < 0:
        raise InvalidAmountError(transaction.id, transaction.amount)
    return amount


def _category_node_id(key: str) -> str:
    # Keep category nodes from colliding with the fixed income/savings nodes
    if key in _RESERVED_NODE_IDS:
        return f"category:{key}"
    return key


def summarize(
    transactions: Sequence[Transaction],
    category_names: Mapping[str, str],
    labels: Optional[FlowLabels] = None,
) -> Summary:
    """
    Derive income/expense/savings totals and the money-flow graph.

    Requirements:
    - Totals sum amounts by transaction type; other types count toward nothing
    - Expenses grouped by category, largest first, ties keep input order
    - One income -> category edge per group with a positive sum
    - income -> savings edge only when savings are positive
    - No date filtering: callers pass the reporting window already selected

    Raises:
        InvalidAmountError: any transaction carries a malformed amount
    """
    labels = labels or FlowLabels()

    total_income = Decimal("0")
    total_expenses = Decimal("0")
    has_flow = False

    # dict keeps first-seen order, which the stable sort below relies on
    expenses_by_category: Dict[str, Decimal] = {}

    for txn in transactions:
        amount = validated_amount(txn)

        if txn.transaction_type == TransactionType.INCOME:
            total_income += amount
            has_flow = True
        elif txn.transaction_type == TransactionType.EXPENSE:
            total_expenses += amount
            has_flow = True
            key = canonical_category_id(txn.category_id)
            expenses_by_category[key] = expenses_by_category.get(key, Decimal("0")) + amount

    total_savings = total_income - total_expenses

    graph = FlowGraph()
    if has_flow:
        graph = _build_graph(expenses_by_category, total_savings, category_names, labels)

    return Summary(
        total_income=total_income,
        total_expenses=total_expenses,
        total_savings=total_savings,
        flow_graph=graph,
    )


def _build_graph(
    expenses_by_category: Dict[str, Decimal],
    total_savings: Decimal,
    category_names: Mapping[str, str],
    labels: FlowLabels,
) -> FlowGraph:
    nodes: List[FlowNode] = [FlowNode(id=INCOME_NODE_ID, display_name=labels.income, kind=NodeKind.INCOME)]
    edges: List[FlowEdge] = []

    sorted_groups = sorted(expenses_by_category.items(), key=lambda item: item[1], reverse=True)

    for key, amount in sorted_groups:
        if amount <= 0:
            continue
        node_id = _category_node_id(key)
        display_name = category_names.get(key, labels.fallback_category)
        nodes.append(FlowNode(id=node_id, display_name=display_name, kind=NodeKind.EXPENSE))
        edges.append(FlowEdge(source=INCOME_NODE_ID, target=node_id, weight=amount))

    if total_savings > 0:
        nodes.append(FlowNode(id=SAVINGS_NODE_ID, display_name=labels.savings, kind=NodeKind.SAVINGS))
        edges.append(FlowEdge(source=INCOME_NODE_ID, target=SAVINGS_NODE_ID, weight=total_savings))

    return FlowGraph(nodes=nodes, edges=edges)


def outgoing_weight(graph: FlowGraph, node_id: str) -> Decimal:
    """Sum of edge weights leaving a node"""
    return sum((edge.weight for edge in graph.edges if edge.source == node_id), Decimal("0"))


def category_names_from(categories: Iterable) -> Dict[str, str]:
    """Build the id -> name lookup from Category records"""
    return {canonical_category_id(category.id): category.name for category in categories}
