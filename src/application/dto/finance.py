"""Data transfer objects for retailer finance operations."""

from dataclasses import dataclass
from typing import List, Optional

from src.service.finance.aging import parse_date
from src.service.finance.models import AdjustmentType, PaymentMethod


def _require_id(value: str, name: str) -> List[str]:
    if not value or not value.strip():
        return [f"{name} is required"]
    return []


@dataclass(frozen=True)
class PurchaseCheckRequest:
    """Input for checking a credit purchase."""
    retailer_id: str
    purchase_amount: float
    credit_limit: float
    current_balance: float

    def validate(self) -> List[str]:
        errors = _require_id(self.retailer_id, "retailer_id")

        if self.credit_limit < 0:
            errors.append("credit_limit cannot be negative")

        return errors


@dataclass(frozen=True)
class PaymentCheckRequest:
    """Input for validating a payment amount."""
    retailer_id: str
    payment_amount: float
    outstanding_balance: float
    allow_overpayment: Optional[bool] = None

    def validate(self) -> List[str]:
        return _require_id(self.retailer_id, "retailer_id")


@dataclass(frozen=True)
class RiskAssessmentRequest:
    """Retailer attributes submitted for a credit risk assessment."""
    retailer_id: str
    current_balance: float
    credit_limit: float
    payment_history_months: int
    late_payment_count: int
    total_payments: int
    business_age_months: int

    def validate(self) -> List[str]:
        errors = _require_id(self.retailer_id, "retailer_id")

        if self.credit_limit < 0:
            errors.append("credit_limit cannot be negative")

        for name in (
            "payment_history_months",
            "late_payment_count",
            "total_payments",
            "business_age_months",
        ):
            if getattr(self, name) < 0:
                errors.append(f"{name} cannot be negative")

        return errors


@dataclass(frozen=True)
class PaymentPlanRequest:
    """Input for building a repayment plan for an overdue balance."""
    retailer_id: str
    total_owed: float
    monthly_installments: int
    interest_rate: Optional[float] = None

    def validate(self) -> List[str]:
        errors = _require_id(self.retailer_id, "retailer_id")

        if isinstance(self.monthly_installments, bool) or not isinstance(self.monthly_installments, int):
            errors.append("monthly_installments must be a whole number")

        if self.interest_rate is not None and self.interest_rate < 0:
            errors.append("interest_rate cannot be negative")

        return errors


@dataclass(frozen=True)
class RecordPaymentRequest:
    """A payment taken from a retailer, about to be posted to its balance."""
    retailer_id: str
    amount: float
    payment_method: str
    collected_by: Optional[str] = None

    def validate(self) -> List[str]:
        errors = _require_id(self.retailer_id, "retailer_id")

        if self.amount <= 0:
            errors.append("amount must be greater than zero")

        if self.payment_method not in {m.value for m in PaymentMethod}:
            errors.append(f"payment_method must be one of: {', '.join(m.value for m in PaymentMethod)}")

        return errors


@dataclass(frozen=True)
class BalanceAdjustmentRequest:
    """Manual balance or credit limit change made by an admin."""
    retailer_id: str
    adjustment_type: str
    adjustment_amount: float
    reason: str
    notes: Optional[str] = None

    def validate(self) -> List[str]:
        errors = _require_id(self.retailer_id, "retailer_id")

        if self.adjustment_type not in {t.value for t in AdjustmentType}:
            errors.append(f"adjustment_type must be one of: {', '.join(t.value for t in AdjustmentType)}")

        if not self.reason or not self.reason.strip():
            errors.append("reason is required")

        return errors


@dataclass(frozen=True)
class CashReconciliationRequest:
    """End-of-day cash count reported by a collector."""
    collector_id: str
    reconciliation_date: str
    actual_amount: float
    discrepancy_reason: Optional[str] = None

    def validate(self) -> List[str]:
        errors = _require_id(self.collector_id, "collector_id")
        errors.extend(_require_id(self.reconciliation_date, "reconciliation_date"))

        if self.actual_amount < 0:
            errors.append("actual_amount cannot be negative")

        return errors


@dataclass(frozen=True)
class CashCollectionReportRequest:
    """Date range, and optionally a collector, for a cash collection report."""
    date_from: str
    date_to: str
    collected_by: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        for name in ("date_from", "date_to"):
            if parse_date(getattr(self, name)) is None:
                errors.append(f"{name} must be a valid date")

        if not errors and parse_date(self.date_from) > parse_date(self.date_to):
            errors.append("date_from must not be after date_to")

        return errors


@dataclass(frozen=True)
class RetailerFinancialsResponse:
    """Credit position of a retailer with display-ready amounts."""

    retailer_id: str
    credit_limit: float
    current_balance: float
    available_credit: float
    credit_used: float
    credit_utilization_percentage: float
    is_overlimit: bool
    available_credit_display: str
    credit_used_display: str
    days_since_last_payment: Optional[int] = None

    @classmethod
    def from_summary(cls, retailer_id: str, summary, formatter) -> "RetailerFinancialsResponse":
        return cls(
            retailer_id=retailer_id,
            credit_limit=summary.credit_limit,
            current_balance=summary.current_balance,
            available_credit=summary.available_credit,
            credit_used=summary.credit_used,
            credit_utilization_percentage=round(summary.credit_utilization_percentage, 2),
            is_overlimit=summary.is_overlimit,
            available_credit_display=formatter(summary.available_credit),
            credit_used_display=formatter(summary.credit_used),
            days_since_last_payment=summary.days_since_last_payment,
        )


@dataclass(frozen=True)
class InstallmentDTO:
    """Single installment within a payment plan response."""
    installment: int
    amount: float
    principal: float
    interest: float
    remaining_balance: float
    amount_display: str


@dataclass(frozen=True)
class PaymentPlanResponse:
    """Repayment schedule with totals."""

    retailer_id: str
    total_owed: float
    total_interest: float
    total_payable: float
    installments: List[InstallmentDTO]

    @classmethod
    def from_installments(
        cls,
        retailer_id: str,
        total_owed: float,
        installments: list,
        formatter,
    ) -> "PaymentPlanResponse":
        return cls(
            retailer_id=retailer_id,
            total_owed=total_owed,
            total_interest=sum(i.interest for i in installments),
            total_payable=sum(i.amount for i in installments),
            installments=[
                InstallmentDTO(
                    installment=i.installment,
                    amount=i.amount,
                    principal=i.principal,
                    interest=i.interest,
                    remaining_balance=i.remaining_balance,
                    amount_display=formatter(i.amount),
                )
                for i in installments
            ],
        )
