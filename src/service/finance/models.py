"""
Data models for the finance calculations.

These are plain value records supplied by the caller (retailer snapshots,
payments, receivables) and the result records returned by the calculation
functions. Nothing here is persisted or mutated by the finance module.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Union


DateLike = Union[date, datetime, str]


class PaymentMethod(str, Enum):
    """How a payment was collected."""
    CASH = "cash"
    CREDIT = "credit"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class Severity(str, Enum):
    """Overdue severity of a receivable."""
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AdjustmentType(str, Enum):
    """Manual adjustment applied to a retailer account by an admin."""
    CREDIT = "credit"                            # Adds to the balance
    DEBIT = "debit"                              # Subtracts from the balance
    CREDIT_LIMIT_CHANGE = "credit_limit_change"  # Replaces the credit limit


class ReconciliationStatus(str, Enum):
    BALANCED = "balanced"
    DISCREPANCY = "discrepancy"


# =============================================================================
# Inputs
# =============================================================================

@dataclass
class RetailerCreditSnapshot:
    """
    A retailer's credit position at a point in time.

    Attributes:
        credit_limit: Maximum credit extended to the retailer (>= 0)
        current_balance: Account balance. A negative balance is money the
            retailer owes; a positive balance is credit held by the retailer.
    """
    credit_limit: float
    current_balance: float


@dataclass
class Payment:
    """
    A payment recorded against a retailer account.

    Attributes:
        created_at: When the payment was collected
        collected_by: Username of the collector who took the payment
    """
    amount: float
    payment_method: PaymentMethod
    status: PaymentStatus
    created_at: Optional[DateLike] = None
    collected_by: Optional[str] = None


@dataclass
class OrderReceivable:
    """
    An order with money still to collect.

    Attributes:
        delivery_date: When the order was delivered (aging reference point)
        total_amount: Order total
        payments_received: Sum of completed payments against the order
        order_id: Optional caller identifier, echoed back in reports
    """
    delivery_date: DateLike
    total_amount: float
    payments_received: float = 0.0
    order_id: Optional[str] = None

    @property
    def outstanding(self) -> float:
        return self.total_amount - self.payments_received


@dataclass
class RiskProfile:
    """Retailer attributes used by the credit risk heuristic."""
    current_balance: float
    credit_limit: float
    payment_history_months: int
    late_payment_count: int
    total_payments: int
    business_age_months: int


@dataclass
class InvoiceOrder:
    """An order line rolled into an invoice."""
    subtotal: float
    tax_amount: float
    total_amount: float
    payments: List[Payment] = field(default_factory=list)


@dataclass
class RetailerAccount:
    """A retailer's credit snapshot together with its account status."""
    credit_limit: float
    current_balance: float
    status: str = "active"

    @property
    def is_active(self) -> bool:
        return self.status == "active"


# =============================================================================
# Results
# =============================================================================

@dataclass
class CreditLimitValidation:
    """
    Outcome of checking a purchase against a retailer's credit.

    Attributes:
        is_valid: True if the purchase can go on credit
        available_credit: Credit left before the hard limit
        credit_used: Credit currently drawn
        utilization_percentage: credit_used as a percentage of the limit
        exceeds_limit: True if the purchase breaks the buffered limit
        message: Reason for rejection (None when valid)
    """
    is_valid: bool
    available_credit: float
    credit_used: float
    utilization_percentage: float
    exceeds_limit: bool
    message: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "is_valid": self.is_valid,
            "available_credit": self.available_credit,
            "credit_used": self.credit_used,
            "utilization_percentage": self.utilization_percentage,
            "exceeds_limit": self.exceeds_limit,
        }
        if self.message is not None:
            result["message"] = self.message
        return result


@dataclass
class PaymentValidation:
    is_valid: bool
    message: Optional[str] = None
    suggested_amount: Optional[float] = None

    def to_dict(self) -> dict:
        result: dict = {"is_valid": self.is_valid}
        if self.message is not None:
            result["message"] = self.message
        if self.suggested_amount is not None:
            result["suggested_amount"] = self.suggested_amount
        return result


@dataclass
class OverdueCalculation:
    is_overdue: bool
    days_past_due: int
    grace_period_days: int
    severity: Severity

    def to_dict(self) -> dict:
        return {
            "is_overdue": self.is_overdue,
            "days_past_due": self.days_past_due,
            "grace_period_days": self.grace_period_days,
            "severity": self.severity.value,
        }


@dataclass
class AgingBucket:
    count: int = 0
    amount: float = 0.0

    def add(self, amount: float) -> None:
        self.count += 1
        self.amount += amount


@dataclass
class AgingBuckets:
    """
    Outstanding receivables grouped by days since delivery.

    Attributes:
        current: 0-30 days
        thirty_days: 31-60 days
        sixty_days: 61-90 days
        ninety_days: 91+ days
    """
    current: AgingBucket = field(default_factory=AgingBucket)
    thirty_days: AgingBucket = field(default_factory=AgingBucket)
    sixty_days: AgingBucket = field(default_factory=AgingBucket)
    ninety_days: AgingBucket = field(default_factory=AgingBucket)

    @property
    def total_amount(self) -> float:
        return (
            self.current.amount
            + self.thirty_days.amount
            + self.sixty_days.amount
            + self.ninety_days.amount
        )

    @property
    def total_count(self) -> int:
        return (
            self.current.count
            + self.thirty_days.count
            + self.sixty_days.count
            + self.ninety_days.count
        )

    def to_dict(self) -> dict:
        return {
            name: {"count": bucket.count, "amount": bucket.amount}
            for name, bucket in (
                ("current", self.current),
                ("thirty_days", self.thirty_days),
                ("sixty_days", self.sixty_days),
                ("ninety_days", self.ninety_days),
            )
        }


@dataclass
class CashFlowAnalysis:
    total_inflow: float
    total_outflow: float
    net_flow: float
    cash_receipts: float
    credit_payments: float
    average_daily_collection: float

    def to_dict(self) -> dict:
        return {
            "total_inflow": self.total_inflow,
            "total_outflow": self.total_outflow,
            "net_flow": self.net_flow,
            "cash_receipts": self.cash_receipts,
            "credit_payments": self.credit_payments,
            "average_daily_collection": self.average_daily_collection,
        }


@dataclass
class PaymentPlanInstallment:
    """
    One monthly installment of a repayment plan.

    Attributes:
        installment: 1-based installment number
        amount: principal + interest due for the month
        principal: Share of the original debt repaid
        interest: Interest charged on the balance before this payment
        remaining_balance: Debt left after this payment (never negative)
    """
    installment: int
    amount: float
    principal: float
    interest: float
    remaining_balance: float

    def to_dict(self) -> dict:
        return {
            "installment": self.installment,
            "amount": self.amount,
            "principal": self.principal,
            "interest": self.interest,
            "remaining_balance": self.remaining_balance,
        }


@dataclass
class RiskAssessment:
    """
    Credit risk verdict for a retailer.

    Attributes:
        risk_score: 0-100, higher is riskier
        risk_level: low / medium / high
        factors: Human-readable reasons that added to the score
        recommendation: Suggested credit action
    """
    risk_score: int
    risk_level: RiskLevel
    factors: List[str]
    recommendation: str

    def to_dict(self) -> dict:
        return {
            "risk_score": self.risk_score,
            "risk_level": self.risk_level.value,
            "factors": list(self.factors),
            "recommendation": self.recommendation,
        }


@dataclass
class CreditSummary:
    credit_limit: float
    current_balance: float
    available_credit: float
    credit_used: float
    credit_utilization_percentage: float
    is_overlimit: bool
    days_since_last_payment: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "credit_limit": self.credit_limit,
            "current_balance": self.current_balance,
            "available_credit": self.available_credit,
            "credit_used": self.credit_used,
            "credit_utilization_percentage": self.credit_utilization_percentage,
            "is_overlimit": self.is_overlimit,
            "days_since_last_payment": self.days_since_last_payment,
        }


@dataclass
class BalanceAdjustment:
    adjustment_type: AdjustmentType
    adjustment_amount: float
    previous_balance: float
    new_balance: float
    previous_credit_limit: float
    new_credit_limit: float

    @property
    def changes_balance(self) -> bool:
        return self.adjustment_type != AdjustmentType.CREDIT_LIMIT_CHANGE

    def to_dict(self) -> dict:
        return {
            "adjustment_type": self.adjustment_type.value,
            "adjustment_amount": self.adjustment_amount,
            "previous_balance": self.previous_balance,
            "new_balance": self.new_balance,
            "previous_credit_limit": self.previous_credit_limit,
            "new_credit_limit": self.new_credit_limit,
        }


@dataclass
class PaymentPosting:
    """Effect of recording a payment on the retailer's balance."""
    payment_amount: float
    previous_balance: float
    new_balance: float
    available_credit: float

    def to_dict(self) -> dict:
        return {
            "payment_amount": self.payment_amount,
            "previous_balance": self.previous_balance,
            "new_balance": self.new_balance,
            "available_credit": self.available_credit,
        }


@dataclass
class CashReconciliation:
    expected_amount: float
    reported_amount: float
    discrepancy_amount: float
    status: ReconciliationStatus
    cash_payments_count: int

    def to_dict(self) -> dict:
        return {
            "expected_amount": self.expected_amount,
            "reported_amount": self.reported_amount,
            "discrepancy_amount": self.discrepancy_amount,
            "status": self.status.value,
            "cash_payments_count": self.cash_payments_count,
        }


@dataclass
class CollectorTotals:
    count: int = 0
    amount: float = 0.0

    def add(self, amount: float) -> None:
        self.count += 1
        self.amount += amount


@dataclass
class CashCollectionReport:
    """
    Cash collected over a date range.

    Attributes:
        payments: Matching payments, newest first
        by_user: Totals per collector; "Unknown" when no collector was recorded
    """
    payments: List[Payment]
    total_amount: float
    payment_count: int
    by_user: Dict[str, CollectorTotals]

    def to_dict(self) -> dict:
        return {
            "summary": {
                "total_amount": self.total_amount,
                "payment_count": self.payment_count,
                "by_user": {
                    user: {"count": totals.count, "amount": totals.amount}
                    for user, totals in self.by_user.items()
                },
            },
        }


@dataclass
class OverdueOrder:
    order_id: Optional[str]
    total_amount: float
    total_paid: float
    outstanding_amount: float
    days_past_due: int


@dataclass
class OverdueReport:
    overdue_orders: List[OverdueOrder]
    total_overdue_amount: float
    overdue_count: int
    average_days_overdue: float

    def to_dict(self) -> dict:
        return {
            "overdue_orders": [
                {
                    "order_id": o.order_id,
                    "total_amount": o.total_amount,
                    "total_paid": o.total_paid,
                    "outstanding_amount": o.outstanding_amount,
                    "days_past_due": o.days_past_due,
                }
                for o in self.overdue_orders
            ],
            "summary": {
                "total_overdue_amount": self.total_overdue_amount,
                "overdue_count": self.overdue_count,
                "average_days_overdue": self.average_days_overdue,
            },
        }


@dataclass
class InvoiceTotals:
    subtotal: float = 0.0
    tax_amount: float = 0.0
    total_amount: float = 0.0
    total_paid: float = 0.0
    balance_due: float = 0.0

    def to_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "tax_amount": self.tax_amount,
            "total_amount": self.total_amount,
            "total_paid": self.total_paid,
            "balance_due": self.balance_due,
        }


@dataclass
class PaymentStatistics:
    total_cash_collected: float = 0.0
    total_credit_payments: float = 0.0
    total_payments: float = 0.0
    payment_count: int = 0
    cash_payment_count: int = 0
    credit_payment_count: int = 0


@dataclass
class RetailerStatistics:
    total_retailers: int = 0
    active_retailers: int = 0
    total_credit_limit: float = 0.0
    total_outstanding_balance: float = 0.0
    total_credit_used: float = 0.0


@dataclass
class PortfolioSummary:
    payment_statistics: PaymentStatistics
    retailer_statistics: RetailerStatistics

    @property
    def total_inflow(self) -> float:
        return self.payment_statistics.total_payments

    def to_dict(self) -> dict:
        p = self.payment_statistics
        r = self.retailer_statistics
        return {
            "payment_statistics": {
                "total_cash_collected": p.total_cash_collected,
                "total_credit_payments": p.total_credit_payments,
                "total_payments": p.total_payments,
                "payment_count": p.payment_count,
                "cash_payment_count": p.cash_payment_count,
                "credit_payment_count": p.credit_payment_count,
            },
            "retailer_statistics": {
                "total_retailers": r.total_retailers,
                "active_retailers": r.active_retailers,
                "total_credit_limit": r.total_credit_limit,
                "total_outstanding_balance": r.total_outstanding_balance,
                "total_credit_used": r.total_credit_used,
            },
            "cash_flow": {
                "total_inflow": p.total_payments,
                "cash_inflow": p.total_cash_collected,
                "credit_inflow": p.total_credit_payments,
            },
        }
