"""
Payment Plans & Late Fees for the Livrili finance module.

Used by collections staff to turn an overdue balance into a monthly
schedule and to price late payment.
"""

from typing import List

from .models import PaymentPlanInstallment


def calculate_payment_plan(
    total_owed: float,
    monthly_installments: int,
    interest_rate: float = 0,
) -> List[PaymentPlanInstallment]:
    """
    Build an equal-principal repayment schedule.

    Algorithm:
        1. Base principal per month = total_owed / monthly_installments
        2. Each month, interest = remaining balance * (interest_rate / 12 / 100)
        3. principal = min(base principal, remaining balance)
        4. amount due = principal + interest
        5. Stop early once the remaining balance reaches zero

    Interest is charged on the declining balance, so later installments
    are cheaper than earlier ones when interest_rate > 0.

    Args:
        total_owed: Balance to repay
        monthly_installments: Number of monthly payments
        interest_rate: Annual interest rate in percent (0 = interest free)

    Returns:
        List of installments; empty if either total_owed or
        monthly_installments is not positive
    """
    if monthly_installments <= 0 or total_owed <= 0:
        return []

    plan = []
    remaining_balance = total_owed
    monthly_interest_rate = interest_rate / 12 / 100
    base_payment = total_owed / monthly_installments

    # a fractional count still gets one installment per whole month
    i = 1
    while i <= monthly_installments:
        interest = remaining_balance * monthly_interest_rate
        principal = min(base_payment, remaining_balance)

        remaining_balance -= principal

        plan.append(PaymentPlanInstallment(
            installment=i,
            amount=principal + interest,
            principal=principal,
            interest=interest,
            remaining_balance=max(0, remaining_balance),
        ))

        if remaining_balance <= 0:
            break
        i += 1

    return plan


def calculate_late_fees(
    outstanding_amount: float,
    days_past_due: int,
    daily_late_fee_rate: float = 0.001,
    max_late_fee_percentage: float = 10,
) -> float:
    """
    Late fee for an overdue balance.

    Accrues linearly at daily_late_fee_rate (0.1% per day by default),
    capped at max_late_fee_percentage of the outstanding amount (10%).

    Returns:
        Fee amount; 0 when the balance is not past due
    """
    if days_past_due <= 0:
        return 0

    late_fee = outstanding_amount * daily_late_fee_rate * days_past_due
    max_late_fee = outstanding_amount * (max_late_fee_percentage / 100)

    return min(late_fee, max_late_fee)
