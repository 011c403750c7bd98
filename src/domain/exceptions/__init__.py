"""Domain Exceptions - inputs the finance module cannot interpret."""

from .base import DomainException
from .finance import (
    InvalidAdjustmentException,
    InvalidDateException,
    InvalidFinanceRequestException,
)

__all__ = [
    "DomainException",
    "InvalidAdjustmentException",
    "InvalidDateException",
    "InvalidFinanceRequestException",
]
