"""
Payment Validation & Cash Flow for the Livrili finance module.

Only completed payments count toward collections; pending and failed
payments are ignored by every total in this module.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from .aging import parse_date, to_datetime, utc_now
from .models import (
    CashCollectionReport,
    CashFlowAnalysis,
    CashReconciliation,
    CollectorTotals,
    DateLike,
    Payment,
    PaymentMethod,
    PaymentStatus,
    PaymentValidation,
    ReconciliationStatus,
)


def validate_payment_amount(
    payment_amount: float,
    outstanding_balance: float,
    allow_overpayment: bool = True,
) -> PaymentValidation:
    """
    Validate a payment amount against what the retailer owes.

    Edge Cases:
        - Zero or negative payment: invalid
        - Payment above the outstanding balance: valid unless
          allow_overpayment is False, in which case the outstanding
          balance is suggested instead

    Args:
        payment_amount: Amount being paid
        outstanding_balance: Amount currently owed
        allow_overpayment: Accept payments above the outstanding balance

    Returns:
        PaymentValidation
    """
    if payment_amount <= 0:
        return PaymentValidation(
            is_valid=False,
            message="Payment amount must be greater than zero",
        )

    if payment_amount > outstanding_balance and not allow_overpayment:
        return PaymentValidation(
            is_valid=False,
            message=(
                f"Payment amount ({payment_amount:.2f}) exceeds "
                f"outstanding balance ({outstanding_balance:.2f})"
            ),
            suggested_amount=outstanding_balance,
        )

    return PaymentValidation(is_valid=True)


def completed_payments(payments: Iterable[Payment]) -> List[Payment]:
    return [p for p in payments if p.status == PaymentStatus.COMPLETED]


def analyze_cash_flow(payments: Iterable[Payment], period_days: int) -> CashFlowAnalysis:
    """
    Summarize collections over a period.

    Outflows are not tracked by this system, so total_outflow is always 0
    and net_flow equals total_inflow.

    Args:
        payments: Payments recorded in the period
        period_days: Length of the period in days

    Returns:
        CashFlowAnalysis; average_daily_collection is 0 when period_days <= 0
    """
    completed = completed_payments(payments)

    total_inflow = sum(p.amount for p in completed)
    cash_receipts = sum(p.amount for p in completed if p.payment_method == PaymentMethod.CASH)
    credit_payments = sum(
        p.amount for p in completed if p.payment_method == PaymentMethod.CREDIT
    )

    return CashFlowAnalysis(
        total_inflow=total_inflow,
        total_outflow=0,
        net_flow=total_inflow,
        cash_receipts=cash_receipts,
        credit_payments=credit_payments,
        average_daily_collection=total_inflow / period_days if period_days > 0 else 0,
    )


def reconcile_cash(
    payments: Iterable[Payment],
    actual_amount: float,
    tolerance: float = 0.01,
) -> CashReconciliation:
    """
    Compare the cash a collector hands in with the cash payments on record.

    Algorithm:
        1. expected = sum of completed cash payments
        2. discrepancy = actual_amount - expected
        3. balanced when |discrepancy| < tolerance

    A positive discrepancy means more cash was handed in than recorded.

    Args:
        payments: The collector's payments for the day
        actual_amount: Cash counted at the end of the day
        tolerance: Largest discrepancy still treated as balanced (exclusive)

    Returns:
        CashReconciliation
    """
    cash = [
        p for p in completed_payments(payments)
        if p.payment_method == PaymentMethod.CASH
    ]
    expected = sum(p.amount for p in cash)
    discrepancy = actual_amount - expected

    status = (
        ReconciliationStatus.BALANCED
        if abs(discrepancy) < tolerance
        else ReconciliationStatus.DISCREPANCY
    )

    return CashReconciliation(
        expected_amount=expected,
        reported_amount=actual_amount,
        discrepancy_amount=discrepancy,
        status=status,
        cash_payments_count=len(cash),
    )


def days_since_last_payment(
    payments: Iterable[Payment],
    now: Optional[datetime] = None,
) -> Optional[int]:
    """
    Whole days since the most recent payment, whatever its status.

    Returns None when no payment carries a readable created_at.
    """
    dates = [d for d in (parse_date(p.created_at) for p in payments) if d is not None]
    if not dates:
        return None

    reference = to_datetime(now) if now is not None else utc_now()
    return (reference - max(dates)).days


def build_cash_collection_report(
    payments: Iterable[Payment],
    date_from: DateLike,
    date_to: DateLike,
    collector: Optional[str] = None,
) -> CashCollectionReport:
    """
    Report the cash collected between two dates, both inclusive.

    Only completed cash payments with a readable created_at inside the
    range count. Passing a collector restricts the report to that
    collector's payments.

    Raises:
        InvalidDateException: If date_from or date_to is not a date
    """
    start = to_datetime(date_from)
    end = to_datetime(date_to)

    matched = []
    for payment in completed_payments(payments):
        if payment.payment_method != PaymentMethod.CASH:
            continue
        if collector is not None and payment.collected_by != collector:
            continue
        collected_at = parse_date(payment.created_at)
        if collected_at is None or not start <= collected_at <= end:
            continue
        matched.append((collected_at, payment))

    matched.sort(key=lambda item: item[0], reverse=True)

    by_user: Dict[str, CollectorTotals] = {}
    for _, payment in matched:
        by_user.setdefault(payment.collected_by or "Unknown", CollectorTotals()).add(payment.amount)

    return CashCollectionReport(
        payments=[payment for _, payment in matched],
        total_amount=sum(p.amount for _, p in matched),
        payment_count=len(matched),
        by_user=by_user,
    )
