"""Prometheus metrics for monitoring summaries, backend health and request latency"""

from decimal import Decimal
from prometheus_client import Counter, Histogram

# Summary metrics
summary_counter = Counter(
    "moneyflow_summary_total",
    "Total dashboard summaries computed",
    ["outcome"],  # surplus | deficit | even
)

# Write path
transactions_created_counter = Counter(
    "moneyflow_transactions_created_total",
    "Transactions written to the backend",
    ["transaction_type"],
)

# Backend metrics
backend_failures_counter = Counter(
    "backend_failures_total",
    "Failed finance backend calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_summary(total_savings: Decimal) -> None:
    """Record whether the period ended with a surplus or a deficit"""
    if total_savings > 0:
        outcome = "surplus"
    elif total_savings < 0:
        outcome = "deficit"
    else:
        outcome = "even"

    summary_counter.labels(outcome=outcome).inc()
