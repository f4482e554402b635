"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from moneyflow.api.main import create_app
from moneyflow.infrastructure.database.models import AccountRecord, Base, CategoryRecord, TransactionRecord
from moneyflow.infrastructure.database.session import get_db
from moneyflow.domain.models import Transaction
from factories import make_transaction


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


@pytest.fixture
def seeded_db(db: Session) -> Session:
    """March 2024: salary, food, rent; one February expense outside the month"""
    db.add_all(
        [
            CategoryRecord(id=1, name="Food", type="expense"),
            CategoryRecord(id=2, name="Rent", type="expense"),
            CategoryRecord(id=3, name="Salary", type="income"),
            AccountRecord(id="acct-1", name="Checking", type="checking", balance=Decimal("2500.00"), institution="Bank"),
        ]
    )
    db.flush()
    db.add_all(
        [
            TransactionRecord(
                id="t1", amount=Decimal("1000.00"), transaction_type="income", category_id=3,
                transaction_date=date(2024, 3, 1), description="Salary", payment_method="transfer",
                account_id="acct-1",
            ),
            TransactionRecord(
                id="t2", amount=Decimal("300.00"), transaction_type="expense", category_id=1,
                transaction_date=date(2024, 3, 5), description="Comida del mes", payment_method="cash",
                account_id="acct-1",
            ),
            TransactionRecord(
                id="t3", amount=Decimal("200.00"), transaction_type="expense", category_id=2,
                transaction_date=date(2024, 3, 10), description="Rent", payment_method="credit_card",
                account_id="acct-1",
            ),
            TransactionRecord(
                id="t4", amount=Decimal("75.00"), transaction_type="expense", category_id=1,
                transaction_date=date(2024, 2, 20), description="Groceries", payment_method="debit_card",
                account_id="acct-1",
            ),
        ]
    )
    db.commit()
    return db


@pytest.fixture
def scenario_transactions() -> list[Transaction]:
    """Income 1000, food 300, rent 200"""
    return [
        make_transaction("1", 1000, "income"),
        make_transaction("2", 300, "expense", "food"),
        make_transaction("3", 200, "expense", "rent"),
    ]
