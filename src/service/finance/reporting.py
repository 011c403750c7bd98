"""
Invoice & Portfolio Reporting for the Livrili finance module.

Aggregations behind the admin finance dashboard and invoice generation.
"""

from typing import Iterable

from .credit import calculate_credit_used
from .models import (
    InvoiceOrder,
    InvoiceTotals,
    Payment,
    PaymentMethod,
    PaymentStatistics,
    PaymentStatus,
    PortfolioSummary,
    RetailerAccount,
    RetailerStatistics,
)
from .payments import completed_payments


def calculate_invoice_totals(orders: Iterable[InvoiceOrder]) -> InvoiceTotals:
    """
    Roll order amounts up into invoice totals.

    Only completed payments count as paid. balance_due is total minus
    paid and may be negative if the retailer overpaid.
    """
    totals = InvoiceTotals()

    for order in orders:
        totals.subtotal += order.subtotal
        totals.tax_amount += order.tax_amount
        totals.total_amount += order.total_amount
        totals.total_paid += sum(p.amount for p in completed_payments(order.payments))

    totals.balance_due = totals.total_amount - totals.total_paid
    return totals


def summarize_portfolio(
    retailers: Iterable[RetailerAccount],
    payments: Iterable[Payment],
) -> PortfolioSummary:
    """
    Summarize collections and credit exposure across all retailers.

    Payment Statistics:
        payment_count counts every payment; the amounts and per-method
        counts only include completed payments. Anything that is not a
        cash payment is counted as a credit payment.

    Retailer Statistics:
        total_outstanding_balance sums the negative balances (owed money,
        so the total is <= 0). total_credit_used only covers active
        retailers.
    """
    payments = list(payments)
    payment_stats = PaymentStatistics(payment_count=len(payments))

    for payment in payments:
        if payment.status != PaymentStatus.COMPLETED:
            continue
        payment_stats.total_payments += payment.amount
        if payment.payment_method == PaymentMethod.CASH:
            payment_stats.total_cash_collected += payment.amount
            payment_stats.cash_payment_count += 1
        else:
            payment_stats.total_credit_payments += payment.amount
            payment_stats.credit_payment_count += 1

    retailer_stats = RetailerStatistics()
    for retailer in retailers:
        retailer_stats.total_retailers += 1
        retailer_stats.total_credit_limit += retailer.credit_limit
        retailer_stats.total_outstanding_balance += min(0, retailer.current_balance)
        if retailer.is_active:
            retailer_stats.active_retailers += 1
            retailer_stats.total_credit_used += calculate_credit_used(
                retailer.credit_limit, retailer.current_balance
            )

    return PortfolioSummary(
        payment_statistics=payment_stats,
        retailer_statistics=retailer_stats,
    )
