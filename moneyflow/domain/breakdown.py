"""Per-day expense totals by payment method, for the transactions bar chart"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Sequence

from moneyflow.domain.flow import validated_amount
from moneyflow.domain.models import DailyBreakdown, PaymentMethod, Transaction, TransactionType
from moneyflow.domain.periods import validate_range
from moneyflow.utils.date_utils import generate_date_range


def daily_payment_breakdown(
    transactions: Sequence[Transaction],
    start_date: date,
    end_date: date,
) -> DailyBreakdown:
    """
    Bucket expense amounts by day and payment method.

    Requirements:
    - Every day in [start_date, end_date] appears, zero-filled
    - Only expenses are counted
    - Payment methods are matched case-insensitively; unknown methods
      and transactions outside the range are skipped
    """
    validate_range(start_date, end_date)
    days = generate_date_range(start_date, end_date)

    buckets: Dict[date, Dict[str, Decimal]] = {
        day: {method: Decimal("0") for method in PaymentMethod.ALL} for day in days
    }

    for txn in transactions:
        if txn.transaction_type != TransactionType.EXPENSE:
            continue
        bucket = buckets.get(txn.transaction_date)
        if bucket is None:
            continue
        method = (txn.payment_method or "").lower()
        if method in bucket:
            bucket[method] += validated_amount(txn)

    series: Dict[str, List[Decimal]] = {
        method: [buckets[day][method] for day in days] for method in PaymentMethod.ALL
    }
    return DailyBreakdown(days=days, series=series)
