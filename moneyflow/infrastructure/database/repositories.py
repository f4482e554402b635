"""Data access layer for finance entities"""

from typing import List, Optional
from sqlalchemy.orm import Session
from moneyflow.infrastructure.database.models import AccountRecord, CategoryRecord, TransactionRecord
from moneyflow.domain.models import NewTransaction, TransactionFilter


def is_numeric_id(value) -> bool:
    """True for ASCII digit strings; Unicode digits like "²" are rejected by int()"""
    text = str(value)
    return text.isascii() and text.isdigit()


def _numeric_ids(category_ids: List[str]) -> List[int]:
    """Category ids arrive as strings; only numeric ones can match database keys"""
    return [int(cid) for cid in category_ids if is_numeric_id(cid)]


class TransactionRepository:
    """Repository for transactions"""

    def __init__(self, db: Session):
        self.db = db

    def list_transactions(self, criteria: TransactionFilter) -> List[TransactionRecord]:
        """Fetch transactions in the date range, newest first"""
        query = self.db.query(TransactionRecord).filter(
            TransactionRecord.transaction_date >= criteria.start_date,
            TransactionRecord.transaction_date <= criteria.end_date,
        )

        if criteria.payment_methods:
            query = query.filter(TransactionRecord.payment_method.in_(criteria.payment_methods))

        if criteria.category_ids:
            query = query.filter(TransactionRecord.category_id.in_(_numeric_ids(criteria.category_ids)))

        return (
            query.order_by(TransactionRecord.transaction_date.desc(), TransactionRecord.created_at.desc())
            .all()
        )

    def create_transaction(self, data: NewTransaction, category_id: Optional[int]) -> TransactionRecord:
        """Persist a new transaction"""
        record = TransactionRecord(
            account_id=data.account_id,
            category_id=category_id,
            amount=data.amount,
            transaction_date=data.transaction_date,
            description=data.description,
            is_recurring=data.is_recurring,
            payment_method=data.payment_method,
            transaction_type=data.transaction_type,
        )
        self.db.add(record)
        self.db.flush()  # Get ID without committing
        return record


class CategoryRepository:
    """Repository for categories"""

    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> List[CategoryRecord]:
        return self.db.query(CategoryRecord).order_by(CategoryRecord.name).all()

    def get_category(self, category_id: int) -> Optional[CategoryRecord]:
        return self.db.query(CategoryRecord).filter(CategoryRecord.id == category_id).first()


class AccountRepository:
    """Repository for accounts"""

    def __init__(self, db: Session):
        self.db = db

    def list_accounts(self) -> List[AccountRecord]:
        return self.db.query(AccountRecord).order_by(AccountRecord.name).all()
