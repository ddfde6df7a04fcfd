from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from app.services.date_range import ONE_DAY, as_naive_datetime

# (minimum days before check-in, refund percentage), most generous tier first.
REFUND_TIERS: dict[str, tuple[tuple[int, int], ...]] = {
    "flexible": ((1, 100),),
    "moderate": ((5, 100), (1, 50)),
    "strict": ((14, 100), (7, 50)),
}
DEFAULT_POLICY = "moderate"
CANCELLABLE_STATUSES = {"pending", "confirmed"}


@dataclass(frozen=True)
class RefundEstimate:
    days_until_check_in: int
    refund_percentage: int
    refund_amount: Decimal


def refund_percentage(policy: str, cancelled_by: str, days_until_check_in: int) -> int:
    if cancelled_by == "host":
        return 100
    for min_days, percentage in REFUND_TIERS.get(policy, ()):
        if days_until_check_in >= min_days:
            return percentage
    return 0


def days_until(check_in: date | datetime, now: datetime) -> int:
    """Days left before check-in, rounded up; zero or negative once it has passed."""
    delta = as_naive_datetime(check_in) - as_naive_datetime(now)
    days, remainder = divmod(delta, ONE_DAY)
    return days + (1 if remainder else 0)


def estimate_refund(
    total_amount: Decimal,
    policy: str,
    cancelled_by: str,
    check_in: date | datetime,
    now: datetime,
) -> RefundEstimate:
    remaining = days_until(check_in, now)
    percentage = refund_percentage(policy, cancelled_by, remaining)
    return RefundEstimate(
        days_until_check_in=remaining,
        refund_percentage=percentage,
        refund_amount=total_amount * percentage / 100,
    )
