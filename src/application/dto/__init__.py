"""Data Transfer Objects for application layer."""

from .finance import (
    BalanceAdjustmentRequest,
    CashCollectionReportRequest,
    CashReconciliationRequest,
    InstallmentDTO,
    PaymentCheckRequest,
    PaymentPlanRequest,
    PaymentPlanResponse,
    PurchaseCheckRequest,
    RecordPaymentRequest,
    RetailerFinancialsResponse,
    RiskAssessmentRequest,
)

__all__ = [
    "BalanceAdjustmentRequest",
    "CashCollectionReportRequest",
    "CashReconciliationRequest",
    "InstallmentDTO",
    "PaymentCheckRequest",
    "PaymentPlanRequest",
    "PaymentPlanResponse",
    "PurchaseCheckRequest",
    "RecordPaymentRequest",
    "RetailerFinancialsResponse",
    "RiskAssessmentRequest",
]
