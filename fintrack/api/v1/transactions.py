"""/v1/transactions - Transaction history and entry"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Response

from fintrack.api.v1.schemas import (
    TransactionCreate,
    TransactionGroup,
    TransactionSchema,
    TransactionsResponse,
)
from fintrack.api.dependencies import get_store, get_user_id
from fintrack.domain.aggregation import group_by_date
from fintrack.domain.exceptions import NotFoundError
from fintrack.infrastructure.store import FinanceStore

router = APIRouter()


@router.get("/transactions", response_model=TransactionsResponse)
async def list_transactions(
    type: str = Query("all", pattern="^(all|income|expense)$"),
    user_id: str = Depends(get_user_id),
    store: FinanceStore = Depends(get_store),
):
    """
    Transaction history grouped by day.

    Returns:
        Groups ordered newest day first, optionally limited to one type
    """
    transactions = await store.list_transactions(user_id, type=None if type == "all" else type)

    groups = [
        TransactionGroup(date=day, transactions=[TransactionSchema.model_validate(t) for t in txns])
        for day, txns in group_by_date(transactions).items()
    ]
    return TransactionsResponse(groups=groups)


@router.post("/transactions", response_model=TransactionSchema, status_code=201)
async def create_transaction(
    body: TransactionCreate,
    user_id: str = Depends(get_user_id),
    store: FinanceStore = Depends(get_store),
):
    """
    Record a transaction.

    The account must belong to the user. A category, when given, must belong
    to the user and have the same type as the transaction.
    """
    try:
        await store.get_account(user_id, body.account_id)
    except NotFoundError:
        raise HTTPException(status_code=422, detail="Please select an account")

    if body.category_id is not None:
        try:
            category = await store.get_category(user_id, body.category_id)
        except NotFoundError:
            raise HTTPException(status_code=422, detail="Unknown category")
        if category.type != body.type:
            raise HTTPException(
                status_code=422,
                detail=f"Category '{category.name}' is for {category.type}, not {body.type}",
            )

    transaction = await store.create_transaction(
        user_id=user_id,
        date=body.date,
        type=body.type,
        amount=body.amount,
        account_id=body.account_id,
        category_id=body.category_id,
        description=body.description,
    )
    logging.info(
        "Transaction recorded",
        extra={"user_id": user_id, "transaction_id": transaction.id, "type": transaction.type},
    )
    return TransactionSchema.model_validate(transaction)


@router.delete("/transactions/{transaction_id}", status_code=204)
async def delete_transaction(
    transaction_id: str,
    user_id: str = Depends(get_user_id),
    store: FinanceStore = Depends(get_store),
):
    await store.delete_transaction(user_id, transaction_id)
    return Response(status_code=204)
