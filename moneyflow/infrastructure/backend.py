"""Finance backend port and its direct-database implementation.

Category ids are canonical strings in the domain. The database keys them by
integer, so values are coerced with ``str()`` on the way out and parsed back
to ``int`` on the way in; that conversion happens only here.
"""

from decimal import Decimal
from typing import Dict, List, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from moneyflow.domain.exceptions import BackendError, UnknownCategoryError
from moneyflow.domain.flow import canonical_category_id, category_names_from
from moneyflow.domain.models import Account, Category, NewTransaction, Transaction, TransactionFilter
from moneyflow.infrastructure.database.models import AccountRecord, CategoryRecord, TransactionRecord
from moneyflow.infrastructure.database.repositories import (
    AccountRepository,
    CategoryRepository,
    TransactionRepository,
    is_numeric_id,
)


class FinanceBackend(Protocol):
    """Data-access collaborator the API depends on"""

    async def list_transactions(self, criteria: TransactionFilter) -> List[Transaction]: ...

    async def category_names(self) -> Dict[str, str]: ...

    async def list_categories(self) -> List[Category]: ...

    async def list_accounts(self) -> List[Account]: ...

    async def create_transaction(self, data: NewTransaction) -> Transaction: ...


def transaction_from_record(record: TransactionRecord) -> Transaction:
    return Transaction(
        id=str(record.id),
        amount=Decimal(record.amount),
        transaction_type=record.transaction_type,
        category_id=None if record.category_id is None else canonical_category_id(record.category_id),
        transaction_date=record.transaction_date,
        description=record.description or "",
        payment_method=record.payment_method or "",
        account_id=record.account_id,
        is_recurring=bool(record.is_recurring),
    )


def category_from_record(record: CategoryRecord) -> Category:
    return Category(id=canonical_category_id(record.id), name=record.name, type=record.type)


def account_from_record(record: AccountRecord) -> Account:
    return Account(
        id=str(record.id),
        name=record.name,
        type=record.type,
        balance=Decimal(record.balance),
        institution=record.institution,
        opened_date=record.opened_date,
    )


class DatabaseBackend:
    """FinanceBackend over the relational schema via SQLAlchemy"""

    def __init__(self, db: Session):
        self.db = db
        self.transactions = TransactionRepository(db)
        self.categories = CategoryRepository(db)
        self.accounts = AccountRepository(db)

    async def list_transactions(self, criteria: TransactionFilter) -> List[Transaction]:
        try:
            records = self.transactions.list_transactions(criteria)
        except SQLAlchemyError as e:
            raise BackendError(f"Transaction query failed: {e}") from e
        return [transaction_from_record(r) for r in records]

    async def category_names(self) -> Dict[str, str]:
        return category_names_from(await self.list_categories())

    async def list_categories(self) -> List[Category]:
        try:
            records = self.categories.list_categories()
        except SQLAlchemyError as e:
            raise BackendError(f"Category query failed: {e}") from e
        return [category_from_record(r) for r in records]

    async def list_accounts(self) -> List[Account]:
        try:
            records = self.accounts.list_accounts()
        except SQLAlchemyError as e:
            raise BackendError(f"Account query failed: {e}") from e
        return [account_from_record(r) for r in records]

    async def create_transaction(self, data: NewTransaction) -> Transaction:
        """
        Insert a transaction and commit.

        Raises:
            UnknownCategoryError: category id is not a known category key
            BackendError: the insert failed
        """
        category_id = None
        if data.category_id is not None:
            if not is_numeric_id(data.category_id):
                raise UnknownCategoryError(f"Unknown category: {data.category_id}")
            category_id = int(data.category_id)

        try:
            if category_id is not None and self.categories.get_category(category_id) is None:
                raise UnknownCategoryError(f"Unknown category: {data.category_id}")

            record = self.transactions.create_transaction(data, category_id)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise BackendError(f"Transaction insert failed: {e}") from e
        return transaction_from_record(record)
