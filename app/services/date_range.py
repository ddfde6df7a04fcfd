from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone

CHECKOUT_BEFORE_CHECKIN = "Checkout date must be after check-in date."
CHECKIN_IN_PAST = "Check-in date cannot be in the past."

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class DateRangeResult:
    nights: int
    errors: list[str] = field(default_factory=list)


def as_naive_datetime(value: date | datetime) -> datetime:
    """Bring dates and (aware or naive) datetimes onto one comparable UTC-naive scale."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    return datetime.combine(value, time.min)


def count_nights(check_in: date | datetime, check_out: date | datetime) -> int:
    """Whole nights between two instants; any partial day counts as a night."""
    delta = as_naive_datetime(check_out) - as_naive_datetime(check_in)
    if delta <= timedelta(0):
        return 0
    days, remainder = divmod(delta, ONE_DAY)
    return days + (1 if remainder else 0)


def validate_date_range(
    check_in: date | datetime,
    check_out: date | datetime,
    *,
    today: date,
    allow_past: bool = False,
) -> DateRangeResult:
    """Validate a stay window and count its nights.

    Problems are reported in ``errors`` rather than raised. Past check-ins are
    rejected unless ``allow_past`` is set, which is how past trips are re-quoted.
    """
    errors: list[str] = []

    nights = count_nights(check_in, check_out)
    if nights == 0:
        errors.append(CHECKOUT_BEFORE_CHECKIN)

    check_in_day = check_in.date() if isinstance(check_in, datetime) else check_in
    if not allow_past and check_in_day < today:
        errors.append(CHECKIN_IN_PAST)

    return DateRangeResult(nights=nights, errors=errors)


def validate_stay_length(
    nights: int,
    minimum_stay: int = 1,
    maximum_stay: int | None = None,
) -> list[str]:
    if nights <= 0:
        return []
    if nights < minimum_stay:
        return [f"Minimum stay is {minimum_stay} night(s)."]
    if maximum_stay is not None and nights > maximum_stay:
        return [f"Maximum stay is {maximum_stay} nights."]
    return []
