"""
Unit Tests for payment validation, cash flow, cash reconciliation and
cash collection reports.
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.domain.exceptions import InvalidDateException
from src.service.finance.models import (
    Payment,
    PaymentMethod,
    PaymentStatus,
    ReconciliationStatus,
)
from src.service.finance.payments import (
    analyze_cash_flow,
    build_cash_collection_report,
    days_since_last_payment,
    reconcile_cash,
    validate_payment_amount,
)

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_payment(
    amount: float,
    method: PaymentMethod = PaymentMethod.CASH,
    status: PaymentStatus = PaymentStatus.COMPLETED,
) -> Payment:
    """Helper to create a payment."""
    return Payment(amount=amount, payment_method=method, status=status)


# =============================================================================
# Payment Validation
# =============================================================================

class TestValidatePaymentAmount:
    """Tests for validate_payment_amount()."""

    @pytest.mark.parametrize("amount", [0, -5, -0.01])
    def test_non_positive_amount_rejected(self, amount):
        result = validate_payment_amount(amount, 100)

        assert result.is_valid is False
        assert result.message == "Payment amount must be greater than zero"
        assert result.suggested_amount is None

    def test_valid_partial_payment(self):
        result = validate_payment_amount(40, 100)

        assert result.is_valid is True
        assert result.message is None

    def test_overpayment_allowed_by_default(self):
        assert validate_payment_amount(150, 100).is_valid is True

    def test_overpayment_rejected_when_disallowed(self):
        result = validate_payment_amount(150, 100, allow_overpayment=False)

        assert result.is_valid is False
        assert result.suggested_amount == 100
        assert result.message == "Payment amount (150.00) exceeds outstanding balance (100.00)"

    def test_exact_payment_when_overpayment_disallowed(self):
        assert validate_payment_amount(100, 100, allow_overpayment=False).is_valid is True

    def test_to_dict(self):
        data = validate_payment_amount(150, 100, False).to_dict()

        assert data == {
            "is_valid": False,
            "message": "Payment amount (150.00) exceeds outstanding balance (100.00)",
            "suggested_amount": 100,
        }


# =============================================================================
# Cash Flow
# =============================================================================

class TestAnalyzeCashFlow:
    """Tests for analyze_cash_flow()."""

    @pytest.fixture
    def payments(self) -> list[Payment]:
        return [
            make_payment(100, PaymentMethod.CASH),
            make_payment(50, PaymentMethod.CREDIT),
            make_payment(999, PaymentMethod.CASH, PaymentStatus.PENDING),
            make_payment(10, PaymentMethod.CREDIT, PaymentStatus.FAILED),
        ]

    def test_only_completed_payments_count(self, payments):
        result = analyze_cash_flow(payments, 30)

        assert result.total_inflow == 150
        assert result.cash_receipts == 100
        assert result.credit_payments == 50

    def test_outflow_is_not_tracked(self, payments):
        result = analyze_cash_flow(payments, 30)

        assert result.total_outflow == 0
        assert result.net_flow == result.total_inflow

    def test_average_daily_collection(self, payments):
        assert analyze_cash_flow(payments, 30).average_daily_collection == 5.0

    @pytest.mark.parametrize("period_days", [0, -7])
    def test_non_positive_period_has_zero_average(self, payments, period_days):
        assert analyze_cash_flow(payments, period_days).average_daily_collection == 0

    def test_no_payments(self):
        result = analyze_cash_flow([], 30)

        assert result.total_inflow == 0
        assert result.average_daily_collection == 0

    def test_accepts_plain_string_enums(self):
        """Callers passing raw strings get the same treatment as enum members."""
        payments = [Payment(amount=75, payment_method="cash", status="completed")]

        assert analyze_cash_flow(payments, 1).cash_receipts == 75


# =============================================================================
# Cash Reconciliation
# =============================================================================

class TestReconcileCash:
    """Tests for reconcile_cash()."""

    @pytest.fixture
    def payments(self) -> list[Payment]:
        return [
            make_payment(100, PaymentMethod.CASH),
            make_payment(250.5, PaymentMethod.CASH),
            make_payment(70, PaymentMethod.CREDIT),
            make_payment(40, PaymentMethod.CASH, PaymentStatus.PENDING),
        ]

    def test_balanced(self, payments):
        result = reconcile_cash(payments, 350.5)

        assert result.expected_amount == 350.5
        assert result.discrepancy_amount == 0
        assert result.status == ReconciliationStatus.BALANCED
        assert result.cash_payments_count == 2

    def test_shortfall_is_negative_discrepancy(self, payments):
        result = reconcile_cash(payments, 340)

        assert result.discrepancy_amount == pytest.approx(-10.5)
        assert result.status == ReconciliationStatus.DISCREPANCY

    def test_within_tolerance_is_balanced(self):
        result = reconcile_cash([make_payment(100)], 100.005)

        assert result.status == ReconciliationStatus.BALANCED

    def test_custom_tolerance(self):
        result = reconcile_cash([make_payment(100)], 104, tolerance=5)

        assert result.status == ReconciliationStatus.BALANCED

    def test_to_dict(self, payments):
        data = reconcile_cash(payments, 340).to_dict()

        assert data["status"] == "discrepancy"
        assert data["reported_amount"] == 340


# =============================================================================
# Payment Recency
# =============================================================================

class TestDaysSinceLastPayment:
    """Tests for days_since_last_payment()."""

    def test_counts_from_newest_payment(self):
        payments = [
            Payment(100, PaymentMethod.CASH, PaymentStatus.COMPLETED, NOW - timedelta(days=20)),
            Payment(50, PaymentMethod.CASH, PaymentStatus.COMPLETED, NOW - timedelta(days=3, hours=6)),
        ]

        assert days_since_last_payment(payments, NOW) == 3

    def test_any_status_counts(self):
        payments = [
            Payment(100, PaymentMethod.CASH, PaymentStatus.PENDING, "2025-06-13T12:00:00Z"),
        ]

        assert days_since_last_payment(payments, NOW) == 2

    def test_no_payments(self):
        assert days_since_last_payment([], NOW) is None

    def test_payments_without_readable_dates_are_ignored(self):
        payments = [
            make_payment(100),
            Payment(50, PaymentMethod.CASH, PaymentStatus.COMPLETED, "garbage"),
        ]

        assert days_since_last_payment(payments, NOW) is None


# =============================================================================
# Cash Collection Report
# =============================================================================

class TestCashCollectionReport:
    """Tests for build_cash_collection_report()."""

    @pytest.fixture
    def payments(self) -> list[Payment]:
        return [
            Payment(100, PaymentMethod.CASH, PaymentStatus.COMPLETED, "2025-06-10T09:00:00Z", "amina"),
            Payment(250, PaymentMethod.CASH, PaymentStatus.COMPLETED, "2025-06-12T16:30:00.5+00", "amina"),
            Payment(80, PaymentMethod.CASH, PaymentStatus.COMPLETED, "2025-06-11T10:00:00Z", "karim"),
            Payment(40, PaymentMethod.CASH, PaymentStatus.COMPLETED, "2025-06-11T11:00:00Z"),
            Payment(500, PaymentMethod.CREDIT, PaymentStatus.COMPLETED, "2025-06-11T12:00:00Z", "karim"),
            Payment(70, PaymentMethod.CASH, PaymentStatus.PENDING, "2025-06-11T12:00:00Z", "karim"),
            Payment(90, PaymentMethod.CASH, PaymentStatus.COMPLETED, "2025-06-01T12:00:00Z", "karim"),
            Payment(60, PaymentMethod.CASH, PaymentStatus.COMPLETED, None, "karim"),
        ]

    def test_totals(self, payments):
        report = build_cash_collection_report(
            payments, "2025-06-10T00:00:00Z", "2025-06-14T23:59:59Z"
        )

        assert report.payment_count == 4
        assert report.total_amount == 470

    def test_breakdown_by_collector(self, payments):
        report = build_cash_collection_report(
            payments, "2025-06-10T00:00:00Z", "2025-06-14T23:59:59Z"
        )

        assert report.by_user["amina"].count == 2
        assert report.by_user["amina"].amount == 350
        assert report.by_user["karim"].amount == 80
        assert report.by_user["Unknown"].count == 1

    def test_newest_first(self, payments):
        report = build_cash_collection_report(
            payments, "2025-06-10T00:00:00Z", "2025-06-14T23:59:59Z"
        )

        assert [p.amount for p in report.payments] == [250, 40, 80, 100]

    def test_range_is_inclusive(self, payments):
        report = build_cash_collection_report(
            payments, "2025-06-10T09:00:00Z", "2025-06-10T09:00:00Z"
        )

        assert report.payment_count == 1

    def test_single_collector(self, payments):
        report = build_cash_collection_report(
            payments, "2025-06-01T00:00:00Z", "2025-06-14T23:59:59Z", collector="karim"
        )

        assert report.total_amount == 170
        assert list(report.by_user) == ["karim"]

    def test_empty_range(self, payments):
        report = build_cash_collection_report(
            payments, "2024-01-01T00:00:00Z", "2024-01-31T00:00:00Z"
        )

        assert report.payment_count == 0
        assert report.total_amount == 0
        assert report.by_user == {}

    def test_invalid_bound_raises(self, payments):
        with pytest.raises(InvalidDateException):
            build_cash_collection_report(payments, "last week", "2025-06-14")

    def test_to_dict(self, payments):
        data = build_cash_collection_report(
            payments, "2025-06-11T00:00:00Z", "2025-06-11T23:59:59Z"
        ).to_dict()

        assert data["summary"]["payment_count"] == 2
        assert data["summary"]["by_user"]["karim"] == {"count": 1, "amount": 80}
