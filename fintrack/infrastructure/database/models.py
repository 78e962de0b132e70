"""SQLAlchemy ORM models for accounts, categories and transactions"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, BigInteger, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccountRow(Base):
    """Money container owned by a user"""

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    type = Column(String(16), nullable=False)
    initial_balance = Column(BigInteger, nullable=False, default=0)
    icon = Column(Text, nullable=False, default="🏦")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    # Deleting an account removes its transactions
    transactions = relationship("TransactionRow", back_populates="account", cascade="all, delete-orphan")


class CategoryRow(Base):
    """Income or expense category, optionally with a monthly budget"""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    type = Column(String(16), nullable=False)
    icon = Column(Text, nullable=False, default="📦")
    color = Column(String(16), nullable=False, default="#6b7280")
    budget_limit = Column(BigInteger, nullable=True)

    # No delete cascade: the ORM nulls category_id on orphaned transactions
    transactions = relationship("TransactionRow", back_populates="category")


class TransactionRow(Base):
    """Dated income or expense against one account"""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Text, nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    type = Column(String(16), nullable=False)
    amount = Column(BigInteger, nullable=False)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    account_id = Column(String(36), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    account = relationship("AccountRow", back_populates="transactions")
    category = relationship("CategoryRow", back_populates="transactions")
