"""Transactions list, chart data and creation endpoints"""

import logging
from datetime import date
from typing import Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from moneyflow.api.v1.schemas import (
    DailyChartResponse,
    TransactionCreateRequest,
    TransactionListResponse,
    TransactionSchema,
)
from moneyflow.api.dependencies import get_backend, get_request_id
from moneyflow.infrastructure.backend import FinanceBackend
from moneyflow.domain.activity import signed_amount, transaction_icon
from moneyflow.domain.breakdown import daily_payment_breakdown
from moneyflow.domain.exceptions import BackendError, InvalidAmountError, InvalidPeriodError, UnknownCategoryError
from moneyflow.domain.models import NewTransaction, Transaction, TransactionFilter
from moneyflow.domain.periods import month_to_date_range, validate_range
from moneyflow.infrastructure.observability.metrics import backend_failures_counter, transactions_created_counter

router = APIRouter()

logger = logging.getLogger(__name__)


def to_transaction_schema(txn: Transaction, category_names: Dict[str, str]) -> TransactionSchema:
    return TransactionSchema(
        id=txn.id,
        amount=float(txn.amount),
        signed_amount=float(signed_amount(txn)),
        transaction_type=txn.transaction_type,
        category_id=txn.category_id,
        category_name=category_names.get(txn.category_id) if txn.category_id is not None else None,
        transaction_date=txn.transaction_date,
        description=txn.description,
        payment_method=txn.payment_method,
        account_id=txn.account_id,
        is_recurring=txn.is_recurring,
        icon=transaction_icon(txn.transaction_type, txn.description),
    )


async def load_category_names(backend: FinanceBackend, request_id: str) -> Dict[str, str]:
    """Category names are decoration; an outage here falls back to an empty lookup"""
    try:
        return await backend.category_names()
    except BackendError as e:
        backend_failures_counter.inc()
        logger.warning(f"Category lookup failed: {e}", extra={"request_id": request_id})
        return {}


def build_filter(
    start_date: Optional[date],
    end_date: Optional[date],
    payment_methods: List[str],
    category_ids: List[str],
) -> TransactionFilter:
    default_start, default_end = month_to_date_range()
    criteria = TransactionFilter(
        start_date=start_date or default_start,
        end_date=end_date or default_end,
        payment_methods=[m.lower() for m in payment_methods],
        category_ids=category_ids,
    )
    validate_range(criteria.start_date, criteria.end_date)
    return criteria


@router.get("/transactions", response_model=TransactionListResponse)
async def list_transactions(
    request: Request,
    start_date: Optional[date] = Query(None, description="First day (default: first of current month)"),
    end_date: Optional[date] = Query(None, description="Last day (default: today)"),
    payment_method: List[str] = Query([], description="Restrict to payment methods"),
    category_id: List[str] = Query([], description="Restrict to category ids"),
    backend: FinanceBackend = Depends(get_backend),
):
    """
    List transactions in a date range, newest first.

    Payment method and category filters are applied by the backend;
    an empty filter means all values.
    """
    request_id = get_request_id(request)

    try:
        criteria = build_filter(start_date, end_date, payment_method, category_id)
        transactions = await backend.list_transactions(criteria)
        category_names = await load_category_names(backend, request_id)

        return TransactionListResponse(
            start_date=criteria.start_date,
            end_date=criteria.end_date,
            count=len(transactions),
            transactions=[to_transaction_schema(t, category_names) for t in transactions],
        )

    except InvalidPeriodError as e:
        raise HTTPException(status_code=400, detail=str(e))

    except InvalidAmountError as e:
        logger.error(f"Malformed transaction: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except BackendError as e:
        backend_failures_counter.inc()
        logger.error(f"Backend error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Finance backend unavailable")


@router.get("/transactions/chart", response_model=DailyChartResponse)
async def get_transactions_chart(
    request: Request,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    payment_method: List[str] = Query([]),
    category_id: List[str] = Query([]),
    backend: FinanceBackend = Depends(get_backend),
):
    """Daily expense totals per payment method for a stacked bar chart"""
    request_id = get_request_id(request)

    try:
        criteria = build_filter(start_date, end_date, payment_method, category_id)
        transactions = await backend.list_transactions(criteria)
        breakdown = daily_payment_breakdown(transactions, criteria.start_date, criteria.end_date)

    except InvalidPeriodError as e:
        raise HTTPException(status_code=400, detail=str(e))

    except InvalidAmountError as e:
        logger.error(f"Malformed transaction: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except BackendError as e:
        backend_failures_counter.inc()
        logger.error(f"Backend error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Finance backend unavailable")

    return DailyChartResponse(
        start_date=criteria.start_date,
        end_date=criteria.end_date,
        days=breakdown.days,
        series={method: [float(v) for v in values] for method, values in breakdown.series.items()},
    )


@router.post("/transactions", response_model=TransactionSchema, status_code=201)
async def create_transaction(
    request_body: TransactionCreateRequest,
    request: Request,
    backend: FinanceBackend = Depends(get_backend),
):
    """Record a new income or expense"""
    request_id = get_request_id(request)

    try:
        created = await backend.create_transaction(
            NewTransaction(
                amount=request_body.amount,
                transaction_type=request_body.transaction_type,
                transaction_date=request_body.transaction_date,
                category_id=request_body.category_id,
                description=request_body.description,
                payment_method=request_body.payment_method.lower(),
                account_id=request_body.account_id,
                is_recurring=request_body.is_recurring,
            )
        )

    except UnknownCategoryError as e:
        raise HTTPException(status_code=422, detail=str(e))

    except BackendError as e:
        backend_failures_counter.inc()
        logger.error(f"Backend error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Finance backend unavailable")

    transactions_created_counter.labels(transaction_type=created.transaction_type).inc()
    logger.info(
        "Transaction created",
        extra={"request_id": request_id, "transaction_id": created.id, "step": "transaction_created"},
    )

    category_names = await load_category_names(backend, request_id)
    return to_transaction_schema(created, category_names)
