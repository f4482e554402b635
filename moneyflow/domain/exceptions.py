"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidAmountError(DomainException):
    """Transaction amount is not a finite, non-negative number"""

    def __init__(self, transaction_id, amount):
        self.transaction_id = transaction_id
        self.amount = amount
        super().__init__(f"Invalid amount {amount!r} on transaction {transaction_id!r}")


class InvalidPeriodError(DomainException):
    """Reporting period or date range is malformed"""

    pass


class BackendError(DomainException):
    """Finance backend returned an error or is unavailable"""

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        self.status_code = status_code
        self.code = code  # database error code reported by the backend, e.g. "23503"
        super().__init__(message)


class UnknownCategoryError(DomainException):
    """Referenced category does not exist in the backend"""

    pass
