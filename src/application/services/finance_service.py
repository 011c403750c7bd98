"""Finance service - orchestrates retailer credit and collections use cases."""

from contextlib import nullcontext
from datetime import datetime
from typing import Callable, Iterable, Optional

import structlog

from src.core import metrics
from src.core.config import settings as app_settings
from src.domain.exceptions import InvalidFinanceRequestException
from src.application.dto import (
    BalanceAdjustmentRequest,
    CashCollectionReportRequest,
    CashReconciliationRequest,
    PaymentCheckRequest,
    PaymentPlanRequest,
    PaymentPlanResponse,
    PurchaseCheckRequest,
    RecordPaymentRequest,
    RetailerFinancialsResponse,
    RiskAssessmentRequest,
)
from src.service.finance import (
    AgingBuckets,
    BalanceAdjustment,
    CashCollectionReport,
    CashFlowAnalysis,
    CashReconciliation,
    CreditLimitValidation,
    FinanceSettings,
    InvoiceOrder,
    InvoiceTotals,
    OrderReceivable,
    OverdueCalculation,
    OverdueReport,
    Payment,
    PaymentPosting,
    PaymentValidation,
    PortfolioSummary,
    RetailerAccount,
    RetailerCreditSnapshot,
    RiskAssessment,
    RiskProfile,
    analyze_cash_flow,
    apply_balance_adjustment,
    apply_payment,
    assess_credit_risk,
    build_cash_collection_report,
    calculate_aging_buckets,
    calculate_invoice_totals,
    calculate_late_fees,
    calculate_overdue_status,
    calculate_payment_plan,
    finance_settings,
    format_currency,
    reconcile_cash,
    summarize_credit,
    summarize_overdue_orders,
    summarize_portfolio,
    validate_credit_limit,
    validate_payment_amount,
)
from src.service.finance.aging import utc_now
from src.service.finance.models import DateLike

logger = structlog.get_logger(__name__)


def _raise_if_invalid(errors: list) -> None:
    if errors:
        raise InvalidFinanceRequestException("; ".join(errors))


class FinanceService:
    """
    Application service for retailer finance use cases.

    Wraps the pure calculations in src.service.finance with request
    validation, configured defaults, structured logging and metrics.
    """

    def __init__(
        self,
        settings: FinanceSettings = finance_settings,
        metrics_enabled: bool = app_settings.metrics_enabled,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._settings = settings
        self._metrics_enabled = metrics_enabled
        self._clock = clock

    def _track(self, operation: str):
        if self._metrics_enabled:
            return metrics.track_calculation_latency(operation)
        return nullcontext()

    def format_amount(self, amount: float) -> str:
        """Format an amount in the configured currency and locale."""
        return format_currency(
            amount,
            currency=self._settings.currency,
            locale=self._settings.currency_locale,
        )

    # =========================================================================
    # Credit
    # =========================================================================

    def check_purchase(self, request: PurchaseCheckRequest) -> CreditLimitValidation:
        """
        Check whether a purchase can go on a retailer's credit.

        Raises:
            InvalidFinanceRequestException: If request validation fails
        """
        _raise_if_invalid(request.validate())

        log = logger.bind(
            retailer_id=request.retailer_id,
            purchase_amount=request.purchase_amount,
        )

        with self._track("credit_check"):
            validation = validate_credit_limit(
                purchase_amount=request.purchase_amount,
                credit_limit=request.credit_limit,
                current_balance=request.current_balance,
                buffer_percentage=self._settings.credit_buffer_percentage,
            )

        if self._metrics_enabled:
            metrics.record_credit_check(validation.is_valid)

        if validation.is_valid:
            log.info(
                "credit_check_approved",
                available_credit=validation.available_credit,
                utilization=round(validation.utilization_percentage, 2),
            )
        else:
            log.warning(
                "credit_check_rejected",
                available_credit=validation.available_credit,
                exceeds_limit=validation.exceeds_limit,
                reason=validation.message,
            )

        return validation

    def get_retailer_financials(
        self,
        retailer_id: str,
        snapshot: RetailerCreditSnapshot,
        payments: Optional[Iterable[Payment]] = None,
    ) -> RetailerFinancialsResponse:
        summary = summarize_credit(snapshot, payments, now=self._clock())

        if summary.is_overlimit:
            logger.warning(
                "retailer_over_credit_limit",
                retailer_id=retailer_id,
                current_balance=snapshot.current_balance,
                credit_limit=snapshot.credit_limit,
            )

        return RetailerFinancialsResponse.from_summary(retailer_id, summary, self.format_amount)

    def adjust_balance(
        self,
        request: BalanceAdjustmentRequest,
        snapshot: RetailerCreditSnapshot,
    ) -> BalanceAdjustment:
        """
        Compute a manual balance or credit limit adjustment.

        The caller persists the result; the snapshot is not modified.

        Raises:
            InvalidFinanceRequestException: If request validation fails
        """
        _raise_if_invalid(request.validate())

        adjustment = apply_balance_adjustment(
            snapshot,
            request.adjustment_type,
            request.adjustment_amount,
        )

        logger.info(
            "balance_adjusted",
            retailer_id=request.retailer_id,
            adjustment_type=adjustment.adjustment_type.value,
            adjustment_amount=adjustment.adjustment_amount,
            previous_balance=adjustment.previous_balance,
            new_balance=adjustment.new_balance,
            previous_credit_limit=adjustment.previous_credit_limit,
            new_credit_limit=adjustment.new_credit_limit,
            reason=request.reason,
        )

        return adjustment

    def assess_risk(self, request: RiskAssessmentRequest) -> RiskAssessment:
        """
        Score a retailer's credit risk.

        Raises:
            InvalidFinanceRequestException: If request validation fails
        """
        _raise_if_invalid(request.validate())

        profile = RiskProfile(
            current_balance=request.current_balance,
            credit_limit=request.credit_limit,
            payment_history_months=request.payment_history_months,
            late_payment_count=request.late_payment_count,
            total_payments=request.total_payments,
            business_age_months=request.business_age_months,
        )

        with self._track("risk_assessment"):
            assessment = assess_credit_risk(
                profile,
                high_threshold=self._settings.risk_high_threshold,
                medium_threshold=self._settings.risk_medium_threshold,
            )

        if self._metrics_enabled:
            metrics.record_risk_assessment(assessment.risk_level.value)

        logger.info(
            "risk_assessed",
            retailer_id=request.retailer_id,
            risk_score=assessment.risk_score,
            risk_level=assessment.risk_level.value,
            factor_count=len(assessment.factors),
        )

        return assessment

    # =========================================================================
    # Payments
    # =========================================================================

    def validate_payment(self, request: PaymentCheckRequest) -> PaymentValidation:
        """
        Validate a payment amount before it is recorded.

        Raises:
            InvalidFinanceRequestException: If request validation fails
        """
        _raise_if_invalid(request.validate())

        allow_overpayment = (
            request.allow_overpayment
            if request.allow_overpayment is not None
            else self._settings.allow_overpayment
        )

        validation = validate_payment_amount(
            request.payment_amount,
            request.outstanding_balance,
            allow_overpayment=allow_overpayment,
        )

        if self._metrics_enabled:
            metrics.record_payment_validation(validation.is_valid)

        if not validation.is_valid:
            logger.info(
                "payment_rejected",
                retailer_id=request.retailer_id,
                payment_amount=request.payment_amount,
                reason=validation.message,
            )

        return validation

    def record_payment(
        self,
        request: RecordPaymentRequest,
        snapshot: RetailerCreditSnapshot,
    ) -> PaymentPosting:
        """
        Compute the balance after posting a collected payment.

        The caller persists the payment and the new balance.

        Raises:
            InvalidFinanceRequestException: If request validation fails
        """
        _raise_if_invalid(request.validate())

        posting = apply_payment(snapshot, request.amount)

        logger.info(
            "payment_recorded",
            retailer_id=request.retailer_id,
            payment_amount=request.amount,
            payment_method=request.payment_method,
            collected_by=request.collected_by,
            previous_balance=posting.previous_balance,
            new_balance=posting.new_balance,
        )

        return posting

    def cash_collection_report(
        self,
        request: CashCollectionReportRequest,
        payments: Iterable[Payment],
    ) -> CashCollectionReport:
        """
        Summarize completed cash collections over a date range.

        Raises:
            InvalidFinanceRequestException: If request validation fails
        """
        _raise_if_invalid(request.validate())

        with self._track("cash_collection_report"):
            report = build_cash_collection_report(
                payments,
                request.date_from,
                request.date_to,
                collector=request.collected_by,
            )

        logger.info(
            "cash_collection_report_built",
            date_from=request.date_from,
            date_to=request.date_to,
            collected_by=request.collected_by,
            payment_count=report.payment_count,
            total_amount=report.total_amount,
        )

        return report

    def analyze_cash_flow(self, payments: Iterable[Payment], period_days: int) -> CashFlowAnalysis:
        with self._track("cash_flow"):
            return analyze_cash_flow(payments, period_days)

    def reconcile_cash(
        self,
        request: CashReconciliationRequest,
        payments: Iterable[Payment],
    ) -> CashReconciliation:
        """
        Reconcile a collector's reported cash against recorded payments.

        Raises:
            InvalidFinanceRequestException: If request validation fails
        """
        _raise_if_invalid(request.validate())

        reconciliation = reconcile_cash(
            payments,
            request.actual_amount,
            tolerance=self._settings.reconciliation_tolerance,
        )

        if self._metrics_enabled:
            metrics.record_cash_reconciliation(reconciliation.status.value)

        log = logger.bind(
            collector_id=request.collector_id,
            reconciliation_date=request.reconciliation_date,
        )
        log.info(
            "cash_reconciled",
            status=reconciliation.status.value,
            expected_amount=reconciliation.expected_amount,
            reported_amount=reconciliation.reported_amount,
            discrepancy_amount=round(reconciliation.discrepancy_amount, 2),
            discrepancy_reason=request.discrepancy_reason,
        )

        return reconciliation

    # =========================================================================
    # Receivables
    # =========================================================================

    def classify_overdue(
        self,
        due_date: DateLike,
        grace_period_days: Optional[int] = None,
    ) -> OverdueCalculation:
        grace = (
            grace_period_days
            if grace_period_days is not None
            else self._settings.grace_period_days
        )

        result = calculate_overdue_status(
            due_date,
            grace_period_days=grace,
            now=self._clock(),
            critical_offset_days=self._settings.critical_offset_days,
        )

        if self._metrics_enabled:
            metrics.record_overdue_classification(result.severity.value)

        return result

    def aging_report(self, orders: Iterable[OrderReceivable]) -> AgingBuckets:
        with self._track("aging_buckets"):
            buckets = calculate_aging_buckets(
                orders,
                now=self._clock(),
                bucket_edges=self._settings.aging_bucket_edges,
            )

        logger.info(
            "aging_report_built",
            receivable_count=buckets.total_count,
            total_outstanding=buckets.total_amount,
            ninety_days_amount=buckets.ninety_days.amount,
        )

        return buckets

    def overdue_report(
        self,
        orders: Iterable[OrderReceivable],
        grace_period_days: Optional[int] = None,
    ) -> OverdueReport:
        grace = (
            grace_period_days
            if grace_period_days is not None
            else self._settings.grace_period_days
        )

        report = summarize_overdue_orders(orders, grace_period_days=grace, now=self._clock())

        logger.info(
            "overdue_report_built",
            grace_period_days=grace,
            overdue_count=report.overdue_count,
            total_overdue_amount=report.total_overdue_amount,
        )

        return report

    # =========================================================================
    # Collections
    # =========================================================================

    def build_payment_plan(self, request: PaymentPlanRequest) -> PaymentPlanResponse:
        """
        Build a monthly repayment plan for an overdue balance.

        Raises:
            InvalidFinanceRequestException: If request validation fails
        """
        _raise_if_invalid(request.validate())

        interest_rate = (
            request.interest_rate
            if request.interest_rate is not None
            else self._settings.plan_interest_rate
        )

        installments = calculate_payment_plan(
            request.total_owed,
            request.monthly_installments,
            interest_rate=interest_rate,
        )

        response = PaymentPlanResponse.from_installments(
            request.retailer_id,
            request.total_owed,
            installments,
            self.format_amount,
        )

        logger.info(
            "payment_plan_built",
            retailer_id=request.retailer_id,
            total_owed=request.total_owed,
            num_installments=len(response.installments),
            total_interest=round(response.total_interest, 2),
        )

        return response

    def late_fees(self, outstanding_amount: float, days_past_due: int) -> float:
        return calculate_late_fees(
            outstanding_amount,
            days_past_due,
            daily_late_fee_rate=self._settings.daily_late_fee_rate,
            max_late_fee_percentage=self._settings.max_late_fee_percentage,
        )

    # =========================================================================
    # Reporting
    # =========================================================================

    def invoice_totals(self, orders: Iterable[InvoiceOrder]) -> InvoiceTotals:
        return calculate_invoice_totals(orders)

    def financial_summary(
        self,
        retailers: Iterable[RetailerAccount],
        payments: Iterable[Payment],
    ) -> PortfolioSummary:
        with self._track("portfolio_summary"):
            summary = summarize_portfolio(retailers, payments)

        if self._metrics_enabled:
            metrics.record_portfolio_credit_used(summary.retailer_statistics.total_credit_used)

        logger.info(
            "financial_summary_built",
            total_retailers=summary.retailer_statistics.total_retailers,
            active_retailers=summary.retailer_statistics.active_retailers,
            total_inflow=summary.total_inflow,
        )

        return summary
