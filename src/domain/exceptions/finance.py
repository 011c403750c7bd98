"""Finance-related domain exceptions."""

from .base import DomainException


class InvalidDateException(DomainException):
    """Raised when a date value cannot be parsed."""

    def __init__(self, value: object):
        super().__init__(
            message=f"Invalid date: {value!r}",
            code="INVALID_DATE",
        )
        self.value = value


class InvalidAdjustmentException(DomainException):
    """Raised when a balance adjustment type is not recognised."""

    def __init__(self, adjustment_type: object):
        super().__init__(
            message=f"Unknown adjustment type: {adjustment_type!r}",
            code="INVALID_ADJUSTMENT",
        )
        self.adjustment_type = adjustment_type


class InvalidFinanceRequestException(DomainException):
    """Raised when a finance service request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_FINANCE_REQUEST",
        )
