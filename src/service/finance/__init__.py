"""
Financial Calculations for the Livrili B2B marketplace.

Pure, stateless functions for retailer credit, receivables and risk.
"""

from .settings import FinanceSettings, finance_settings
from .models import (
    AdjustmentType,
    AgingBucket,
    AgingBuckets,
    BalanceAdjustment,
    CashCollectionReport,
    CashFlowAnalysis,
    CashReconciliation,
    CollectorTotals,
    CreditLimitValidation,
    CreditSummary,
    InvoiceOrder,
    InvoiceTotals,
    OrderReceivable,
    OverdueCalculation,
    OverdueOrder,
    OverdueReport,
    Payment,
    PaymentMethod,
    PaymentPlanInstallment,
    PaymentPosting,
    PaymentStatus,
    PaymentValidation,
    PortfolioSummary,
    ReconciliationStatus,
    RetailerAccount,
    RetailerCreditSnapshot,
    RiskAssessment,
    RiskLevel,
    RiskProfile,
    Severity,
)
from .credit import (
    calculate_available_credit,
    calculate_credit_used,
    calculate_credit_utilization,
    validate_credit_limit,
    summarize_credit,
    apply_balance_adjustment,
    apply_payment,
)
from .payments import (
    validate_payment_amount,
    analyze_cash_flow,
    reconcile_cash,
    days_since_last_payment,
    build_cash_collection_report,
)
from .aging import (
    calculate_overdue_status,
    calculate_aging_buckets,
    summarize_overdue_orders,
)
from .collections import calculate_payment_plan, calculate_late_fees
from .formatting import format_currency
from .risk import assess_credit_risk, explain_assessment
from .reporting import calculate_invoice_totals, summarize_portfolio

__all__ = [
    # Settings
    "FinanceSettings",
    "finance_settings",
    # Models
    "AdjustmentType",
    "AgingBucket",
    "AgingBuckets",
    "BalanceAdjustment",
    "CashCollectionReport",
    "CashFlowAnalysis",
    "CashReconciliation",
    "CollectorTotals",
    "CreditLimitValidation",
    "CreditSummary",
    "InvoiceOrder",
    "InvoiceTotals",
    "OrderReceivable",
    "OverdueCalculation",
    "OverdueOrder",
    "OverdueReport",
    "Payment",
    "PaymentMethod",
    "PaymentPlanInstallment",
    "PaymentPosting",
    "PaymentStatus",
    "PaymentValidation",
    "PortfolioSummary",
    "ReconciliationStatus",
    "RetailerAccount",
    "RetailerCreditSnapshot",
    "RiskAssessment",
    "RiskLevel",
    "RiskProfile",
    "Severity",
    # Credit
    "calculate_available_credit",
    "calculate_credit_used",
    "calculate_credit_utilization",
    "validate_credit_limit",
    "summarize_credit",
    "apply_balance_adjustment",
    "apply_payment",
    # Payments
    "validate_payment_amount",
    "analyze_cash_flow",
    "reconcile_cash",
    "days_since_last_payment",
    "build_cash_collection_report",
    # Aging
    "calculate_overdue_status",
    "calculate_aging_buckets",
    "summarize_overdue_orders",
    # Collections
    "calculate_payment_plan",
    "calculate_late_fees",
    "format_currency",
    # Risk
    "assess_credit_risk",
    "explain_assessment",
    # Reporting
    "calculate_invoice_totals",
    "summarize_portfolio",
]
