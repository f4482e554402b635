"""GET /v1/dashboard/summary - Monthly totals and money-flow graph"""

import time
import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from moneyflow.api.v1.schemas import (
    DashboardSummaryResponse,
    FlowEdgeSchema,
    FlowGraphSchema,
    FlowNodeSchema,
    PeriodSchema,
)
from moneyflow.api.v1.transactions import load_category_names, to_transaction_schema
from moneyflow.api.dependencies import get_backend, get_flow_labels, get_request_id
from moneyflow.config import settings
from moneyflow.infrastructure.backend import FinanceBackend
from moneyflow.domain.activity import recent_transactions
from moneyflow.domain.flow import FlowLabels, summarize
from moneyflow.domain.models import TransactionFilter
from moneyflow.domain.periods import adjacent_period, current_month_period, month_period
from moneyflow.domain.exceptions import BackendError, InvalidAmountError, InvalidPeriodError
from moneyflow.infrastructure.observability.metrics import record_summary, backend_failures_counter
from moneyflow.infrastructure.observability.logging import log_summary

router = APIRouter()

logger = logging.getLogger(__name__)


def _neighbour_label(period, delta: int) -> str:
    try:
        return adjacent_period(period, delta).label
    except InvalidPeriodError:
        return ""


@router.get("/dashboard/summary", response_model=DashboardSummaryResponse)
async def get_dashboard_summary(
    request: Request,
    year: Optional[int] = Query(None, description="Reporting year (default: current)"),
    month: Optional[int] = Query(None, description="Reporting month 1-12 (default: current)"),
    backend: FinanceBackend = Depends(get_backend),
    labels: FlowLabels = Depends(get_flow_labels),
):
    """
    Summarize one calendar month.

    Flow:
    1. Resolve the reporting period (month window)
    2. Fetch the period's transactions and the category names
    3. Run the flow summarizer for totals and the flow graph
    4. Return totals, graph, and the most recent transactions
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        # 1. Reporting period; only missing values default to the current month
        if year is None and month is None:
            period = current_month_period()
        else:
            today = date.today()
            period = month_period(
                today.year if year is None else year,
                today.month if month is None else month,
            )

        # 2. Transactions for the window; category names are optional decoration
        transactions = await backend.list_transactions(
            TransactionFilter(start_date=period.start_date, end_date=period.end_date)
        )
        category_names = await load_category_names(backend, request_id)

        # 3. Totals and flow graph
        summary = summarize(transactions, category_names, labels)

    except InvalidPeriodError as e:
        raise HTTPException(status_code=400, detail=str(e))

    except BackendError as e:
        backend_failures_counter.inc()
        logger.error(f"Backend error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Finance backend unavailable")

    except InvalidAmountError as e:
        logger.error(f"Malformed transaction: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    # 4. Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_summary(summary.total_savings)
    log_summary(
        request_id,
        period.label,
        float(summary.total_income),
        float(summary.total_expenses),
        len(summary.flow_graph.nodes),
        duration_ms,
    )

    recent = recent_transactions(transactions, settings.recent_transactions_limit)

    return DashboardSummaryResponse(
        period=PeriodSchema(
            label=period.label,
            start_date=period.start_date,
            end_date=period.end_date,
            previous=_neighbour_label(period, -1),
            next=_neighbour_label(period, 1),
        ),
        total_income=float(summary.total_income),
        total_expenses=float(summary.total_expenses),
        total_savings=float(summary.total_savings),
        transaction_count=len(transactions),
        flow_graph=FlowGraphSchema(
            nodes=[
                FlowNodeSchema(id=n.id, display_name=n.display_name, kind=n.kind)
                for n in summary.flow_graph.nodes
            ],
            edges=[
                FlowEdgeSchema(source=e.source, target=e.target, weight=float(e.weight))
                for e in summary.flow_graph.edges
            ],
        ),
        recent_transactions=[to_transaction_schema(t, category_names) for t in recent],
    )
