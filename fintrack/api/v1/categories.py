"""/v1/categories - Income and expense categories with optional budgets"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response

from fintrack.api.v1.schemas import CategoryCreate, CategorySchema
from fintrack.api.dependencies import get_store, get_user_id
from fintrack.domain.defaults import DEFAULT_CATEGORIES
from fintrack.infrastructure.store import FinanceStore

router = APIRouter()


@router.get("/categories", response_model=List[CategorySchema])
async def list_categories(
    type: Optional[str] = Query(None, pattern="^(income|expense)$"),
    user_id: str = Depends(get_user_id),
    store: FinanceStore = Depends(get_store),
):
    """Categories ordered by name, optionally of one type"""
    categories = await store.list_categories(user_id, type=type)
    return [CategorySchema.model_validate(c) for c in categories]


@router.post("/categories", response_model=CategorySchema, status_code=201)
async def create_category(
    body: CategoryCreate,
    user_id: str = Depends(get_user_id),
    store: FinanceStore = Depends(get_store),
):
    """Create a category; budget limits apply to expense categories only"""
    if body.budget_limit is not None and body.type != "expense":
        raise HTTPException(status_code=422, detail="Budget limits are only available for expense categories")

    category = await store.create_category(
        user_id=user_id,
        name=body.name,
        type=body.type,
        icon=body.icon,
        color=body.color,
        budget_limit=body.budget_limit,
    )
    return CategorySchema.model_validate(category)


@router.post("/categories/defaults", response_model=List[CategorySchema], status_code=201)
async def seed_default_categories(
    user_id: str = Depends(get_user_id),
    store: FinanceStore = Depends(get_store),
):
    """Add the starter set of income and expense categories"""
    categories = await store.create_categories(user_id, DEFAULT_CATEGORIES)
    logging.info("Default categories added", extra={"user_id": user_id, "count": len(categories)})
    return [CategorySchema.model_validate(c) for c in categories]


@router.delete("/categories/{category_id}", status_code=204)
async def delete_category(
    category_id: str,
    user_id: str = Depends(get_user_id),
    store: FinanceStore = Depends(get_store),
):
    """Delete a category; its transactions become uncategorized"""
    await store.delete_category(user_id, category_id)
    return Response(status_code=204)
