"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional


class TransactionType:
    INCOME = "income"
    EXPENSE = "expense"

    ALL = (INCOME, EXPENSE)


class PaymentMethod:
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    TRANSFER = "transfer"

    ALL = (CASH, CREDIT_CARD, DEBIT_CARD, TRANSFER)


class NodeKind:
    INCOME = "income"
    EXPENSE = "expense"
    SAVINGS = "savings"


@dataclass
class Transaction:
    """Money movement owned by the finance backend"""

    id: str
    amount: Decimal
    transaction_type: str  # "income", "expense"; anything else is ignored by aggregations
    category_id: Optional[str]
    transaction_date: date
    description: str = ""
    payment_method: str = ""
    account_id: Optional[str] = None
    is_recurring: bool = False


@dataclass
class Category:
    id: str
    name: str
    type: str = TransactionType.EXPENSE


@dataclass
class Account:
    id: str
    name: str
    type: str  # checking | savings | credit | investment
    balance: Decimal
    institution: str
    opened_date: Optional[date] = None


@dataclass
class TransactionFilter:
    """Criteria for fetching transactions from the backend"""

    start_date: date
    end_date: date
    payment_methods: List[str] = field(default_factory=list)
    category_ids: List[str] = field(default_factory=list)


@dataclass
class ReportingPeriod:
    start_date: date
    end_date: date
    label: str


@dataclass(frozen=True)
class FlowNode:
    id: str
    display_name: str
    kind: str


@dataclass(frozen=True)
class FlowEdge:
    source: str
    target: str
    weight: Decimal


@dataclass
class FlowGraph:
    """Money movement from income to expense categories and savings"""

    nodes: List[FlowNode] = field(default_factory=list)
    edges: List[FlowEdge] = field(default_factory=list)


@dataclass
class Summary:
    """Output of the flow summarizer"""

    total_income: Decimal
    total_expenses: Decimal
    total_savings: Decimal
    flow_graph: FlowGraph


@dataclass
class DailyBreakdown:
    """Per-day expense totals split by payment method"""

    days: List[date]
    series: Dict[str, List[Decimal]]


@dataclass
class NewTransaction:
    """Transaction to be written to the backend; the backend assigns the id"""

    amount: Decimal
    transaction_type: str
    transaction_date: date
    category_id: Optional[str] = None
    description: str = ""
    payment_method: str = ""
    account_id: Optional[str] = None
    is_recurring: bool = False
