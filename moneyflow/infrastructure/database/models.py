"""SQLAlchemy ORM models for the finance schema (accounts, categories, transactions)"""

import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Date, Integer, ForeignKey, Numeric, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class AccountRecord(Base):
    """Bank, card or investment account"""

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(Text, nullable=False)
    type = Column(Text, nullable=False)  # checking | savings | credit | investment
    balance = Column(Numeric(14, 2), nullable=False, default=0)
    institution = Column(Text, nullable=False, default="")
    opened_date = Column(Date, nullable=True)

    transactions = relationship("TransactionRecord", back_populates="account")


class CategoryRecord(Base):
    """Income/expense category; ids are integers in the database"""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)
    type = Column(Text, nullable=False, default="expense")  # expense | income | investment
    parent_id = Column(Integer, ForeignKey("categories.id"), nullable=True)

    transactions = relationship("TransactionRecord", back_populates="category")


class TransactionRecord(Base):
    """Single income or expense movement"""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=_new_id)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=True, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    amount = Column(Numeric(14, 2), nullable=False)
    transaction_date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    is_recurring = Column(Boolean, nullable=False, default=False)
    payment_method = Column(Text, nullable=False, default="")
    transaction_type = Column(Text, nullable=False)

    account = relationship("AccountRecord", back_populates="transactions")
    category = relationship("CategoryRecord", back_populates="transactions")
