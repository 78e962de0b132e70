"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Generator, Optional
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from fintrack.api.main import create_app
from fintrack.infrastructure.database.models import Base
from fintrack.infrastructure.database.repositories import SqlFinanceStore
from fintrack.infrastructure.database.session import get_db
from fintrack.domain.models import Account, Category, Transaction


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db: Session) -> SqlFinanceStore:
    """SQL-backed store on the test database"""
    return SqlFinanceStore(db)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def make_account(id: str = "acc_1", initial_balance: int = 0, type: str = "bank") -> Account:
    return Account(id=id, name=f"Account {id}", type=type, initial_balance=initial_balance, icon="🏦", user_id="user_1")


def make_category(
    id: str = "cat_food",
    name: str = "Food",
    type: str = "expense",
    budget_limit: Optional[int] = None,
    color: str = "#ef4444",
    icon: str = "🍔",
) -> Category:
    return Category(id=id, name=name, type=type, icon=icon, color=color, user_id="user_1", budget_limit=budget_limit)


def make_transaction(
    type: str,
    amount: int,
    day: date = date(2026, 10, 1),
    account_id: str = "acc_1",
    category: Optional[Category] = None,
    id: str = "txn",
) -> Transaction:
    return Transaction(
        id=id,
        date=day,
        type=type,
        amount=amount,
        account_id=account_id,
        user_id="user_1",
        category_id=category.id if category else None,
        category=category,
    )
