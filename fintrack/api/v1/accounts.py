"""/v1/accounts - Accounts with recomputed balances"""

import asyncio
import logging
from fastapi import APIRouter, Depends, Response

from fintrack.api.v1.schemas import AccountBalanceSchema, AccountCreate, AccountSchema, AccountsResponse
from fintrack.api.dependencies import get_store, get_user_id
from fintrack.domain.balances import compute_account_balances, total_balance
from fintrack.domain.defaults import ACCOUNT_TYPE_ICONS
from fintrack.infrastructure.store import FinanceStore

router = APIRouter()


@router.get("/accounts", response_model=AccountsResponse)
async def list_accounts(
    user_id: str = Depends(get_user_id),
    store: FinanceStore = Depends(get_store),
):
    """List accounts, oldest first, each with its current balance"""
    accounts, history = await asyncio.gather(
        store.list_accounts(user_id),
        store.list_transactions(user_id),
    )
    balances = compute_account_balances(accounts, history)

    return AccountsResponse(
        accounts=[AccountBalanceSchema.model_validate(b) for b in balances],
        total_balance=total_balance(balances),
    )


@router.post("/accounts", response_model=AccountSchema, status_code=201)
async def create_account(
    body: AccountCreate,
    user_id: str = Depends(get_user_id),
    store: FinanceStore = Depends(get_store),
):
    account = await store.create_account(
        user_id=user_id,
        name=body.name,
        type=body.type,
        initial_balance=body.initial_balance,
        icon=body.icon or ACCOUNT_TYPE_ICONS[body.type],
    )
    logging.info("Account created", extra={"user_id": user_id, "account_id": account.id})
    return AccountSchema.model_validate(account)


@router.delete("/accounts/{account_id}", status_code=204)
async def delete_account(
    account_id: str,
    user_id: str = Depends(get_user_id),
    store: FinanceStore = Depends(get_store),
):
    """Delete an account and every transaction recorded against it"""
    await store.delete_account(user_id, account_id)
    logging.info("Account deleted", extra={"user_id": user_id, "account_id": account_id})
    return Response(status_code=204)
