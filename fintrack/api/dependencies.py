"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session
from fintrack.config import settings
from fintrack.infrastructure.store import FinanceStore
from fintrack.infrastructure.clients.supabase import SupabaseClient
from fintrack.infrastructure.database.repositories import SqlFinanceStore
from fintrack.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_user_id(user_id: str = Query(..., min_length=1, description="Owning user identifier")) -> str:
    """Owning user for the request"""
    return user_id


def get_store(db: Session = Depends(get_db)) -> FinanceStore:
    """Provide the configured store backend"""
    if settings.store_backend == "supabase":
        return SupabaseClient()
    return SqlFinanceStore(db)
