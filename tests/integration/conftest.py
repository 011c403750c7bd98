"""
Fixtures for integration tests.

Provides:
- A fixed clock so overdue and aging results are reproducible
- FinanceService instances with metrics enabled and disabled
- Sample receivables, payments and retailer accounts
"""

from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from src.application.services import FinanceService
from src.service.finance import (
    FinanceSettings,
    OrderReceivable,
    Payment,
    PaymentMethod,
    PaymentStatus,
    RetailerAccount,
)

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    return NOW


@pytest.fixture
def finance_settings() -> FinanceSettings:
    return FinanceSettings()


@pytest.fixture
def finance_service(finance_settings: FinanceSettings) -> FinanceService:
    """FinanceService with metrics enabled and a frozen clock."""
    return FinanceService(
        settings=finance_settings,
        metrics_enabled=True,
        clock=lambda: NOW,
    )


@pytest.fixture
def quiet_finance_service(finance_settings: FinanceSettings) -> FinanceService:
    """FinanceService that records no metrics."""
    return FinanceService(
        settings=finance_settings,
        metrics_enabled=False,
        clock=lambda: NOW,
    )


@pytest.fixture
def receivables() -> List[OrderReceivable]:
    """Credit orders at various ages, one of them fully paid."""
    return [
        OrderReceivable(NOW - timedelta(days=5), 12000, 2000, order_id="ORD-001"),
        OrderReceivable(NOW - timedelta(days=42), 8000, 0, order_id="ORD-002"),
        OrderReceivable(NOW - timedelta(days=70), 5000, 1000, order_id="ORD-003"),
        OrderReceivable(NOW - timedelta(days=120), 3000, 0, order_id="ORD-004"),
        OrderReceivable(NOW - timedelta(days=50), 6000, 6000, order_id="ORD-005"),
    ]


@pytest.fixture
def collector_payments() -> List[Payment]:
    """A collector's payments for the day."""
    return [
        Payment(4500, PaymentMethod.CASH, PaymentStatus.COMPLETED, NOW),
        Payment(2500, PaymentMethod.CASH, PaymentStatus.COMPLETED, NOW),
        Payment(9000, PaymentMethod.CREDIT, PaymentStatus.COMPLETED, NOW),
        Payment(1000, PaymentMethod.CASH, PaymentStatus.FAILED, NOW),
    ]


@pytest.fixture
def retailer_accounts() -> List[RetailerAccount]:
    return [
        RetailerAccount(credit_limit=50000, current_balance=-20000, status="active"),
        RetailerAccount(credit_limit=30000, current_balance=-35000, status="active"),
        RetailerAccount(credit_limit=10000, current_balance=1500, status="inactive"),
    ]
