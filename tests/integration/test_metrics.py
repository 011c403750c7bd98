"""
Integration tests for metrics tracking.

These tests verify:
1. Business counters are incremented by FinanceService use cases
2. Calculation latency is observed per operation
3. Nothing is recorded when metrics are disabled
4. The exposition output is valid Prometheus text format
"""

from typing import Dict, Optional

import pytest

from src.application.dto import (
    CashReconciliationRequest,
    PaymentCheckRequest,
    PurchaseCheckRequest,
    RiskAssessmentRequest,
)
from src.application.services import FinanceService
from src.core.metrics import REGISTRY, get_metrics, get_metrics_content_type


def sample(name: str, labels: Optional[Dict[str, str]] = None) -> float:
    """Current value of a metric sample, 0 if it was never recorded."""
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


# =============================================================================
# Business Metrics
# =============================================================================

class TestBusinessMetrics:
    """Counters recorded by FinanceService."""

    def test_credit_check_outcomes(self, finance_service: FinanceService):
        approved_before = sample("livrili_credit_check_total", {"outcome": "approved"})
        rejected_before = sample("livrili_credit_check_total", {"outcome": "rejected"})

        finance_service.check_purchase(PurchaseCheckRequest("ret-1", 100, 10000, 0))
        finance_service.check_purchase(PurchaseCheckRequest("ret-2", 100, 1000, -950))

        assert sample("livrili_credit_check_total", {"outcome": "approved"}) == approved_before + 1
        assert sample("livrili_credit_check_total", {"outcome": "rejected"}) == rejected_before + 1

    def test_payment_validation_outcomes(self, finance_service: FinanceService):
        before = sample("livrili_payment_validation_total", {"outcome": "invalid"})

        finance_service.validate_payment(PaymentCheckRequest("ret-1", 0, 100))

        assert sample("livrili_payment_validation_total", {"outcome": "invalid"}) == before + 1

    def test_risk_assessment_by_level(self, finance_service: FinanceService):
        before = sample("livrili_risk_assessment_total", {"risk_level": "low"})

        finance_service.assess_risk(RiskAssessmentRequest("ret-1", 500, 1000, 24, 0, 30, 48))

        assert sample("livrili_risk_assessment_total", {"risk_level": "low"}) == before + 1

    @pytest.mark.parametrize(
        "due_date,severity",
        [
            ("2025-06-13T12:00:00Z", "normal"),
            ("2025-05-01T12:00:00Z", "warning"),
            ("2025-03-01T12:00:00Z", "critical"),
        ],
    )
    def test_overdue_classification_by_severity(
        self,
        finance_service: FinanceService,
        due_date: str,
        severity: str,
    ):
        before = sample("livrili_overdue_classification_total", {"severity": severity})

        finance_service.classify_overdue(due_date)

        assert sample("livrili_overdue_classification_total", {"severity": severity}) == before + 1

    def test_cash_reconciliation_status(self, finance_service: FinanceService, collector_payments):
        before = sample("livrili_cash_reconciliation_total", {"status": "balanced"})

        finance_service.reconcile_cash(
            CashReconciliationRequest("collector-1", "2025-06-15", 7000),
            collector_payments,
        )

        assert sample("livrili_cash_reconciliation_total", {"status": "balanced"}) == before + 1

    def test_portfolio_credit_used_gauge(
        self,
        finance_service: FinanceService,
        retailer_accounts,
        collector_payments,
    ):
        finance_service.financial_summary(retailer_accounts, collector_payments)

        assert sample("livrili_portfolio_credit_used") == 55000


# =============================================================================
# Technical Metrics
# =============================================================================

class TestLatencyMetrics:
    """Calculation latency histograms."""

    def test_latency_observed_per_operation(self, finance_service: FinanceService, receivables):
        labels = {"operation": "aging_buckets"}
        before = sample("livrili_calculation_latency_seconds_count", labels)

        finance_service.aging_report(receivables)

        assert sample("livrili_calculation_latency_seconds_count", labels) == before + 1


class TestMetricsDisabled:
    """A service with metrics disabled records nothing."""

    def test_no_counters_recorded(self, quiet_finance_service: FinanceService):
        before = sample("livrili_credit_check_total", {"outcome": "approved"})
        latency_before = sample(
            "livrili_calculation_latency_seconds_count", {"operation": "credit_check"}
        )

        quiet_finance_service.check_purchase(PurchaseCheckRequest("ret-1", 100, 10000, 0))

        assert sample("livrili_credit_check_total", {"outcome": "approved"}) == before
        assert sample(
            "livrili_calculation_latency_seconds_count", {"operation": "credit_check"}
        ) == latency_before


# =============================================================================
# Exposition
# =============================================================================

class TestExposition:
    """Tests for get_metrics()."""

    def test_prometheus_text_format(self, finance_service: FinanceService):
        finance_service.check_purchase(PurchaseCheckRequest("ret-1", 100, 10000, 0))

        content = get_metrics().decode("utf-8")

        assert "# HELP livrili_credit_check_total" in content
        assert "# TYPE livrili_calculation_latency_seconds histogram" in content

    def test_content_type(self):
        assert get_metrics_content_type().startswith("text/plain")
