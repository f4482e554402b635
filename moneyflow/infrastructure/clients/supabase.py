"""Hosted backend HTTP client (PostgREST-compatible REST API)"""

import httpx
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional
from moneyflow.domain.models import Account, Category, NewTransaction, Transaction, TransactionFilter
from moneyflow.domain.exceptions import BackendError, UnknownCategoryError
from moneyflow.domain.flow import canonical_category_id, category_names_from
from moneyflow.config import settings

FOREIGN_KEY_VIOLATION = "23503"


def _error_code(response: httpx.Response) -> Optional[str]:
    """PostgREST reports the database error code in the JSON body"""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("code") is not None:
        return str(body["code"])
    return None


def _parse_date(value: str) -> date:
    # Timestamps come back as "YYYY-MM-DDTHH:MM:SS+00:00"; only the day matters
    return date.fromisoformat(value[:10])


def _in_list(values: List[str]) -> str:
    return "in.(" + ",".join(str(v) for v in values) + ")"


def parse_transaction(row: Dict[str, Any]) -> Transaction:
    category_id = row.get("category_id")
    return Transaction(
        id=str(row["id"]),
        amount=Decimal(str(row["amount"])),
        transaction_type=row["transaction_type"],
        category_id=None if category_id is None else canonical_category_id(category_id),
        transaction_date=_parse_date(row["transaction_date"]),
        description=row.get("description") or "",
        payment_method=row.get("payment_method") or "",
        account_id=row.get("account_id"),
        is_recurring=bool(row.get("is_recurring", False)),
    )


def parse_account(row: Dict[str, Any]) -> Account:
    opened = row.get("opened_date")
    return Account(
        id=str(row["id"]),
        name=row["name"],
        type=row["type"],
        balance=Decimal(str(row.get("balance", 0))),
        institution=row.get("institution") or "",
        opened_date=_parse_date(opened) if opened else None,
    )


class SupabaseClient:
    """Client for the hosted finance database's REST interface"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.supabase_url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.supabase_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    async def _request(self, method: str, table: str, **kwargs) -> Any:
        """
        Send one request to /rest/v1/<table> and return the decoded JSON.

        Raises:
            BackendError: On timeout, HTTP errors, or network failure
        """
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(),
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                response = await client.request(method, f"/rest/v1/{table}", **kwargs)
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                raise BackendError(f"Backend timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise BackendError(
                    f"Backend error: {e.response.status_code}",
                    status_code=e.response.status_code,
                    code=_error_code(e.response),
                ) from e
            except httpx.RequestError as e:
                raise BackendError(f"Backend unreachable: {e}") from e
            except ValueError as e:
                raise BackendError(f"Backend returned invalid JSON: {e}") from e

    async def list_transactions(self, criteria: TransactionFilter) -> List[Transaction]:
        """Fetch transactions in the date range, newest first"""
        params = [
            ("select", "*"),
            ("transaction_date", f"gte.{criteria.start_date.isoformat()}"),
            ("transaction_date", f"lte.{criteria.end_date.isoformat()}"),
            ("order", "transaction_date.desc"),
        ]
        if criteria.payment_methods:
            params.append(("payment_method", _in_list(criteria.payment_methods)))
        if criteria.category_ids:
            params.append(("category_id", _in_list(criteria.category_ids)))

        rows = await self._request("GET", "transactions", params=params)
        try:
            return [parse_transaction(row) for row in rows]
        except (KeyError, ValueError, TypeError, InvalidOperation) as e:
            raise BackendError(f"Invalid transaction data from backend: {e}") from e

    async def category_names(self) -> Dict[str, str]:
        return category_names_from(await self.list_categories())

    async def list_categories(self) -> List[Category]:
        rows = await self._request("GET", "categories", params={"select": "id,name,type", "order": "name.asc"})
        try:
            return [
                Category(id=canonical_category_id(row["id"]), name=row["name"], type=row.get("type") or "expense")
                for row in rows
            ]
        except (KeyError, TypeError) as e:
            raise BackendError(f"Invalid category data from backend: {e}") from e

    async def list_accounts(self) -> List[Account]:
        rows = await self._request("GET", "accounts", params={"select": "*", "order": "name.asc"})
        try:
            return [parse_account(row) for row in rows]
        except (KeyError, ValueError, TypeError, InvalidOperation) as e:
            raise BackendError(f"Invalid account data from backend: {e}") from e

    async def create_transaction(self, data: NewTransaction) -> Transaction:
        """
        Insert a transaction and return the stored row.

        Raises:
            UnknownCategoryError: the backend rejected the category reference
            BackendError: On any other backend failure
        """
        payload = {
            "amount": str(data.amount),
            "transaction_type": data.transaction_type,
            "transaction_date": data.transaction_date.isoformat(),
            "category_id": data.category_id,
            "description": data.description,
            "payment_method": data.payment_method,
            "account_id": data.account_id,
            "is_recurring": data.is_recurring,
        }
        try:
            rows = await self._request(
                "POST",
                "transactions",
                json=payload,
                headers={"Prefer": "return=representation"},
            )
        except BackendError as e:
            # Foreign-key violation on insert: the category does not exist
            fk_violation = e.code == FOREIGN_KEY_VIOLATION or (e.code is None and e.status_code == 409)
            if fk_violation and data.category_id is not None:
                raise UnknownCategoryError(f"Unknown category: {data.category_id}") from e
            raise
        try:
            return parse_transaction(rows[0])
        except (KeyError, IndexError, ValueError, TypeError, InvalidOperation) as e:
            raise BackendError(f"Invalid transaction data from backend: {e}") from e
