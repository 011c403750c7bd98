"""
Credit Utilization & Validation for the Livrili finance module.

Balance sign convention: a negative current_balance is money the retailer
owes, a positive one is credit the retailer holds. Every function here
follows that arithmetic.

All functions are pure and never raise for out-of-range amounts;
results are clamped instead so callers can render them directly.
"""

from datetime import datetime
from typing import Iterable, Optional, Union

from src.domain.exceptions import InvalidAdjustmentException

from .models import (
    AdjustmentType,
    BalanceAdjustment,
    CreditLimitValidation,
    CreditSummary,
    Payment,
    PaymentPosting,
    RetailerCreditSnapshot,
)
from .payments import days_since_last_payment


def calculate_available_credit(credit_limit: float, current_balance: float) -> float:
    """
    Calculate credit still available to a retailer.

    Debt (negative balance) eats into the limit; a positive balance
    extends it. Never negative.
    """
    return max(0, credit_limit + current_balance)


def calculate_credit_used(credit_limit: float, current_balance: float) -> float:
    """Amount currently borrowed. Only a negative balance counts as used."""
    return max(0, -current_balance)


def calculate_credit_utilization(credit_limit: float, current_balance: float) -> float:
    """
    Credit used as a percentage of the credit limit.

    Returns 0 for a zero or negative limit.
    """
    if credit_limit <= 0:
        return 0
    credit_used = calculate_credit_used(credit_limit, current_balance)
    return (credit_used / credit_limit) * 100


def validate_credit_limit(
    purchase_amount: float,
    credit_limit: float,
    current_balance: float,
    buffer_percentage: float = 5,
) -> CreditLimitValidation:
    """
    Check whether a purchase can be charged to a retailer's credit.

    Two conditions must hold:
        1. The purchase fits within the available credit.
        2. Credit used plus the purchase stays within the limit reduced
           by buffer_percentage (the "effective limit").

    Args:
        purchase_amount: Amount to charge
        credit_limit: Retailer credit limit
        current_balance: Retailer balance (negative = owed)
        buffer_percentage: Share of the limit held back (default 5%)

    Returns:
        CreditLimitValidation; message explains the first failing condition
    """
    available_credit = calculate_available_credit(credit_limit, current_balance)
    credit_used = calculate_credit_used(credit_limit, current_balance)
    utilization_percentage = calculate_credit_utilization(credit_limit, current_balance)

    effective_limit = credit_limit * (1 - buffer_percentage / 100)
    exceeds_limit = (credit_used + purchase_amount) > effective_limit

    validation = CreditLimitValidation(
        is_valid=purchase_amount <= available_credit and not exceeds_limit,
        available_credit=available_credit,
        credit_used=credit_used,
        utilization_percentage=utilization_percentage,
        exceeds_limit=exceeds_limit,
    )

    if not validation.is_valid:
        if purchase_amount > available_credit:
            validation.message = (
                f"Purchase amount ({purchase_amount:.2f}) exceeds "
                f"available credit ({available_credit:.2f})"
            )
        elif exceeds_limit:
            validation.message = (
                f"Purchase would exceed credit limit with {buffer_percentage:g}% buffer"
            )

    return validation


def summarize_credit(
    snapshot: RetailerCreditSnapshot,
    payments: Optional[Iterable[Payment]] = None,
    now: Optional[datetime] = None,
) -> CreditSummary:
    """
    Build the credit overview shown on a retailer's finance page.

    days_since_last_payment is only filled in when the retailer's payment
    history is passed.
    """
    return CreditSummary(
        credit_limit=snapshot.credit_limit,
        current_balance=snapshot.current_balance,
        available_credit=calculate_available_credit(
            snapshot.credit_limit, snapshot.current_balance
        ),
        credit_used=calculate_credit_used(snapshot.credit_limit, snapshot.current_balance),
        credit_utilization_percentage=calculate_credit_utilization(
            snapshot.credit_limit, snapshot.current_balance
        ),
        is_overlimit=snapshot.current_balance < -snapshot.credit_limit,
        days_since_last_payment=(
            days_since_last_payment(payments, now) if payments is not None else None
        ),
    )


def apply_balance_adjustment(
    snapshot: RetailerCreditSnapshot,
    adjustment_type: Union[AdjustmentType, str],
    amount: float,
) -> BalanceAdjustment:
    """
    Compute the effect of a manual account adjustment.

    - credit: amount is added to the balance
    - debit: amount is subtracted from the balance
    - credit_limit_change: amount becomes the new credit limit

    The snapshot itself is left untouched.

    Raises:
        InvalidAdjustmentException: If adjustment_type is not recognised
    """
    try:
        adjustment = AdjustmentType(adjustment_type)
    except ValueError:
        raise InvalidAdjustmentException(adjustment_type) from None

    new_balance = snapshot.current_balance
    new_limit = snapshot.credit_limit

    if adjustment == AdjustmentType.CREDIT:
        new_balance += amount
    elif adjustment == AdjustmentType.DEBIT:
        new_balance -= amount
    else:
        new_limit = amount

    return BalanceAdjustment(
        adjustment_type=adjustment,
        adjustment_amount=amount,
        previous_balance=snapshot.current_balance,
        new_balance=new_balance,
        previous_credit_limit=snapshot.credit_limit,
        new_credit_limit=new_limit,
    )


def apply_payment(snapshot: RetailerCreditSnapshot, amount: float) -> PaymentPosting:
    """
    Compute the balance after recording a payment.

    A payment always adds to the balance, paying down debt first and
    building up held credit after that.
    """
    new_balance = snapshot.current_balance + amount
    return PaymentPosting(
        payment_amount=amount,
        previous_balance=snapshot.current_balance,
        new_balance=new_balance,
        available_credit=calculate_available_credit(snapshot.credit_limit, new_balance),
    )
