"""Recent activity helpers for the dashboard"""

from decimal import Decimal
from typing import List, Sequence

from moneyflow.domain.flow import validated_amount
from moneyflow.domain.models import Transaction, TransactionType

# Checked in order; first match wins
_ICON_KEYWORDS = [
    ("travel", ("vuelo", "avion", "flight")),
    ("food", ("comida", "restaurante", "food")),
    ("books", ("libro", "book")),
    ("education", ("curso", "course")),
    ("housing", ("renta", "rent")),
]


def recent_transactions(transactions: Sequence[Transaction], limit: int = 3) -> List[Transaction]:
    """First `limit` transactions in caller order (newest first by convention)"""
    if limit <= 0:
        return []
    return list(transactions[:limit])


def signed_amount(transaction: Transaction) -> Decimal:
    amount = validated_amount(transaction)
    return amount if transaction.transaction_type == TransactionType.INCOME else -amount


def transaction_icon(transaction_type: str, description: str) -> str:
    """Icon hint for a transaction row"""
    if transaction_type == TransactionType.INCOME:
        return "income"

    text = (description or "").lower()
    for icon, keywords in _ICON_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return icon
    return "card"
