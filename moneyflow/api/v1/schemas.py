"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import Dict, List, Literal, Optional


class TransactionSchema(BaseModel):
    """Single transaction row"""

    id: str
    amount: float
    signed_amount: float
    transaction_type: str
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    transaction_date: date
    description: str
    payment_method: str
    account_id: Optional[str] = None
    is_recurring: bool = False
    icon: str


class TransactionListResponse(BaseModel):
    """Response for GET /v1/transactions"""

    start_date: date
    end_date: date
    count: int
    transactions: List[TransactionSchema]


class TransactionCreateRequest(BaseModel):
    """Request body for POST /v1/transactions"""

    amount: Decimal = Field(..., ge=0, allow_inf_nan=False, description="Non-negative amount")
    transaction_type: Literal["income", "expense"]
    transaction_date: date
    category_id: Optional[str] = Field(None, description="Category identifier (opaque string)")
    description: str = ""
    payment_method: str = ""
    account_id: Optional[str] = None
    is_recurring: bool = False


class FlowNodeSchema(BaseModel):
    id: str
    display_name: str
    kind: str


class FlowEdgeSchema(BaseModel):
    source: str
    target: str
    weight: float


class FlowGraphSchema(BaseModel):
    nodes: List[FlowNodeSchema]
    edges: List[FlowEdgeSchema]


class PeriodSchema(BaseModel):
    label: str
    start_date: date
    end_date: date
    previous: str
    next: str


class DashboardSummaryResponse(BaseModel):
    """Response for GET /v1/dashboard/summary"""

    period: PeriodSchema
    total_income: float
    total_expenses: float
    total_savings: float
    transaction_count: int
    flow_graph: FlowGraphSchema
    recent_transactions: List[TransactionSchema]


class DailyChartResponse(BaseModel):
    """Response for GET /v1/transactions/chart"""

    start_date: date
    end_date: date
    days: List[date]
    series: Dict[str, List[float]]


class CategorySchema(BaseModel):
    id: str
    name: str
    type: str


class CategoryListResponse(BaseModel):
    categories: List[CategorySchema]


class AccountSchema(BaseModel):
    id: str
    name: str
    type: str
    balance: float
    institution: str
    opened_date: Optional[date] = None


class AccountListResponse(BaseModel):
    accounts: List[AccountSchema]
