"""
Overdue & Aging Analysis for the Livrili finance module.

Two different reference points are used on purpose:
- calculate_overdue_status() measures from an invoice due date
- calculate_aging_buckets() and summarize_overdue_orders() measure from
  the order delivery date

Every function here depends on the current time. Pass `now` explicitly
to get reproducible results; it defaults to the wall clock in UTC.

A receivable whose date cannot be read never aborts a calculation: it is
not overdue, ages into the oldest bucket and is left out of the overdue
report.
"""

import math
import re
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from src.domain.exceptions import InvalidDateException

from .models import (
    AgingBuckets,
    DateLike,
    OrderReceivable,
    OverdueCalculation,
    OverdueOrder,
    OverdueReport,
    Severity,
)

SECONDS_PER_DAY = 24 * 60 * 60
DEFAULT_BUCKET_EDGES = (30, 60, 90)

_datetime_adapter = TypeAdapter(datetime)

# Postgres renders a UTC offset as "+00"; pydantic wants "+00:00"
_HOUR_ONLY_OFFSET = re.compile(r"(\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?[+-]\d{2})$")


def to_datetime(value: DateLike) -> datetime:
    """
    Normalize a date-like value to an aware UTC datetime.

    Accepts datetime (naive values are taken as UTC), date (midnight UTC)
    and ISO-8601 strings as stored by Postgres: "Z" or "+00" offsets,
    a space instead of "T", and 1 to 6 fraction digits.

    Raises:
        InvalidDateException: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = _HOUR_ONLY_OFFSET.sub(r"\1:00", value.strip())
        try:
            dt = _datetime_adapter.validate_python(text)
        except ValidationError:
            raise InvalidDateException(value) from None
    else:
        raise InvalidDateException(value)

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def parse_date(value: Optional[DateLike]) -> Optional[datetime]:
    """Like to_datetime(), but returns None for a missing or unreadable date."""
    if value is None:
        return None
    try:
        return to_datetime(value)
    except InvalidDateException:
        return None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _reference_time(now: Optional[datetime]) -> datetime:
    return to_datetime(now) if now is not None else utc_now()


def _whole_days(start: datetime, end: datetime) -> int:
    return math.floor((end - start).total_seconds() / SECONDS_PER_DAY)


def days_between(start: DateLike, now: Optional[datetime] = None) -> int:
    """
    Whole days elapsed from start to now, floored (negative if start is ahead).

    Raises:
        InvalidDateException: If start cannot be interpreted as a date
    """
    return _whole_days(to_datetime(start), _reference_time(now))


def calculate_overdue_status(
    due_date: DateLike,
    grace_period_days: int = 30,
    now: Optional[datetime] = None,
    critical_offset_days: int = 30,
) -> OverdueCalculation:
    """
    Classify how late a payment is.

    Algorithm:
        1. days = floor((now - due_date) in days)
        2. Overdue only when days > grace_period_days (strictly)
        3. Severity: critical when days > grace + critical_offset_days,
           warning when days > grace, otherwise normal

    The reported days_past_due is never negative, even for a due date
    in the future. An unreadable due date is reported as 0 days, normal.

    Args:
        due_date: When payment was due
        grace_period_days: Days of tolerance after the due date
        now: Reference time (defaults to current UTC time)
        critical_offset_days: Days past the grace period that become critical

    Returns:
        OverdueCalculation
    """
    due = parse_date(due_date)
    days_past_due = _whole_days(due, _reference_time(now)) if due is not None else 0

    is_overdue = days_past_due > grace_period_days

    severity = Severity.NORMAL
    if days_past_due > grace_period_days + critical_offset_days:
        severity = Severity.CRITICAL
    elif days_past_due > grace_period_days:
        severity = Severity.WARNING

    return OverdueCalculation(
        is_overdue=is_overdue,
        days_past_due=max(0, days_past_due),
        grace_period_days=grace_period_days,
        severity=severity,
    )


def calculate_aging_buckets(
    orders: Iterable[OrderReceivable],
    now: Optional[datetime] = None,
    bucket_edges: Sequence[int] = DEFAULT_BUCKET_EDGES,
) -> AgingBuckets:
    """
    Group outstanding receivables by days since delivery.

    Buckets (with default edges):
        current      0-30 days
        thirty_days  31-60 days
        sixty_days   61-90 days
        ninety_days  91+ days, and any order without a readable delivery date

    Fully paid orders (outstanding <= 0) are skipped. The summed bucket
    amounts always equal the sum of positive outstanding amounts.

    Args:
        orders: Receivables with delivery date, total and payments received
        now: Reference time (defaults to current UTC time)
        bucket_edges: Inclusive upper bounds of the first three buckets

    Returns:
        AgingBuckets with a count and amount per bucket
    """
    current_edge, thirty_edge, sixty_edge = bucket_edges
    reference = _reference_time(now)
    buckets = AgingBuckets()

    for order in orders:
        outstanding = order.outstanding
        if outstanding <= 0:
            continue

        delivered = parse_date(order.delivery_date)
        if delivered is None:
            buckets.ninety_days.add(outstanding)
            continue

        days_past_delivery = _whole_days(delivered, reference)

        if days_past_delivery <= current_edge:
            buckets.current.add(outstanding)
        elif days_past_delivery <= thirty_edge:
            buckets.thirty_days.add(outstanding)
        elif days_past_delivery <= sixty_edge:
            buckets.sixty_days.add(outstanding)
        else:
            buckets.ninety_days.add(outstanding)

    return buckets


def summarize_overdue_orders(
    orders: Iterable[OrderReceivable],
    grace_period_days: int = 30,
    now: Optional[datetime] = None,
) -> OverdueReport:
    """
    List credit orders still unpaid after the grace period.

    An order is overdue when it was delivered strictly before
    now - grace_period_days and still has a positive outstanding amount.
    days_past_due is counted from delivery. Orders without a readable
    delivery date are left out.

    Returns:
        OverdueReport with per-order details and totals
    """
    reference = _reference_time(now)
    cutoff = reference - timedelta(days=grace_period_days)

    overdue = []
    for order in orders:
        delivered = parse_date(order.delivery_date)
        if delivered is None or delivered >= cutoff:
            continue
        if order.payments_received >= order.total_amount:
            continue
        overdue.append(OverdueOrder(
            order_id=order.order_id,
            total_amount=order.total_amount,
            total_paid=order.payments_received,
            outstanding_amount=order.outstanding,
            days_past_due=_whole_days(delivered, reference),
        ))

    total_overdue = sum(o.outstanding_amount for o in overdue)
    average_days = (
        sum(o.days_past_due for o in overdue) / len(overdue) if overdue else 0
    )

    return OverdueReport(
        overdue_orders=overdue,
        total_overdue_amount=total_overdue,
        overdue_count=len(overdue),
        average_days_overdue=average_days,
    )
