"""Prometheus metrics for the Livrili finance service.

Business Metrics (for Finance/Credit teams):
- livrili_credit_check_total: Purchase credit checks by outcome
- livrili_payment_validation_total: Payment validations by outcome
- livrili_risk_assessment_total: Risk assessments by level
- livrili_overdue_classification_total: Overdue checks by severity
- livrili_cash_reconciliation_total: Cash reconciliations by status
- livrili_portfolio_credit_used: Credit drawn across active retailers

Technical Metrics (for Engineering):
- livrili_calculation_latency_seconds: Calculation latency by operation
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, Gauge, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

credit_check_total = Counter(
    "livrili_credit_check_total",
    "Total number of purchase credit checks",
    ["outcome"],  # approved, rejected
)

payment_validation_total = Counter(
    "livrili_payment_validation_total",
    "Total number of payment amount validations",
    ["outcome"],  # valid, invalid
)

risk_assessment_total = Counter(
    "livrili_risk_assessment_total",
    "Total number of retailer credit risk assessments",
    ["risk_level"],  # low, medium, high
)

overdue_classification_total = Counter(
    "livrili_overdue_classification_total",
    "Total number of overdue classifications",
    ["severity"],  # normal, warning, critical
)

cash_reconciliation_total = Counter(
    "livrili_cash_reconciliation_total",
    "Total number of cash reconciliations",
    ["status"],  # balanced, discrepancy
)

portfolio_credit_used_gauge = Gauge(
    "livrili_portfolio_credit_used",
    "Credit drawn across active retailers at the last portfolio summary",
)


# =============================================================================
# Technical Metrics
# =============================================================================

calculation_latency = Histogram(
    "livrili_calculation_latency_seconds",
    "Finance calculation latency in seconds",
    ["operation"],
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_credit_check(is_valid: bool) -> None:
    """Record a purchase credit check."""
    credit_check_total.labels(outcome="approved" if is_valid else "rejected").inc()


def record_payment_validation(is_valid: bool) -> None:
    payment_validation_total.labels(outcome="valid" if is_valid else "invalid").inc()


def record_risk_assessment(risk_level: str) -> None:
    risk_assessment_total.labels(risk_level=risk_level).inc()


def record_overdue_classification(severity: str) -> None:
    overdue_classification_total.labels(severity=severity).inc()


def record_cash_reconciliation(status: str) -> None:
    cash_reconciliation_total.labels(status=status).inc()


def record_portfolio_credit_used(credit_used: float) -> None:
    portfolio_credit_used_gauge.set(credit_used)


@contextmanager
def track_calculation_latency(operation: str) -> Generator[None, None, None]:
    """Context manager to track the latency of a finance calculation."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        calculation_latency.labels(operation=operation).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
