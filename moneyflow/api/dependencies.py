"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from moneyflow.config import settings
from moneyflow.domain.flow import FlowLabels
from moneyflow.infrastructure.backend import DatabaseBackend, FinanceBackend
from moneyflow.infrastructure.clients.supabase import SupabaseClient
from moneyflow.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_backend(db: Session = Depends(get_db)) -> FinanceBackend:
    """Provide the configured finance backend"""
    if settings.backend_mode == "rest":
        return SupabaseClient()
    return DatabaseBackend(db)


def get_flow_labels() -> FlowLabels:
    """Display labels for the money-flow graph"""
    return FlowLabels(
        income=settings.income_label,
        savings=settings.savings_label,
        fallback_category=settings.fallback_category_label,
    )
