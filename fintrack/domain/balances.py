"""Account balance calculation from transaction history"""

from collections import defaultdict
from typing import Dict, Iterable, List
from fintrack.domain.models import Account, AccountBalance, Transaction


def calculate_balance(account: Account, transactions: Iterable[Transaction]) -> int:
    """
    Compute the current balance of an account.

    Balance = initial_balance + income amounts - expense amounts.
    Only `type` and `amount` are read, so any row shape carrying those works.
    Traversal order does not matter.
    """
    balance = account.initial_balance
    for txn in transactions:
        if txn.type == "income":
            balance += txn.amount
        else:
            balance -= txn.amount
    return balance


def compute_account_balances(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
) -> List[AccountBalance]:
    """
    Pair every account with its balance, keeping account order.

    Transactions referencing an account not in `accounts` are ignored.
    """
    by_account: Dict[str, List[Transaction]] = defaultdict(list)
    for txn in transactions:
        by_account[txn.account_id].append(txn)

    return [
        AccountBalance(account=account, balance=calculate_balance(account, by_account.get(account.id, [])))
        for account in accounts
    ]


def total_balance(balances: Iterable[AccountBalance]) -> int:
    """Sum of balances across accounts"""
    return sum(b.balance for b in balances)
