"""Application services (use cases)."""

from .finance_service import FinanceService

__all__ = [
    "FinanceService",
]
