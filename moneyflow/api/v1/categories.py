"""GET /v1/categories and GET /v1/accounts - reference data for filters"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from moneyflow.api.v1.schemas import AccountListResponse, AccountSchema, CategoryListResponse, CategorySchema
from moneyflow.api.dependencies import get_backend, get_request_id
from moneyflow.infrastructure.backend import FinanceBackend
from moneyflow.domain.exceptions import BackendError
from moneyflow.infrastructure.observability.metrics import backend_failures_counter

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories(request: Request, backend: FinanceBackend = Depends(get_backend)):
    """Categories for the filter picker, ordered by name"""
    try:
        categories = await backend.list_categories()
    except BackendError as e:
        backend_failures_counter.inc()
        logger.error(f"Backend error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail="Finance backend unavailable")

    return CategoryListResponse(
        categories=[CategorySchema(id=c.id, name=c.name, type=c.type) for c in categories]
    )


@router.get("/accounts", response_model=AccountListResponse)
async def list_accounts(request: Request, backend: FinanceBackend = Depends(get_backend)):
    try:
        accounts = await backend.list_accounts()
    except BackendError as e:
        backend_failures_counter.inc()
        logger.error(f"Backend error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail="Finance backend unavailable")

    return AccountListResponse(
        accounts=[
            AccountSchema(
                id=a.id,
                name=a.name,
                type=a.type,
                balance=float(a.balance),
                institution=a.institution,
                opened_date=a.opened_date,
            )
            for a in accounts
        ]
    )
