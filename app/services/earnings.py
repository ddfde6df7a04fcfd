from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from app.core.money import ZERO, to_decimal
from app.services.date_range import as_naive_datetime

HOST_SHARE = Decimal("0.85")
DEFAULT_PAYOUT_METHOD = "Bank Transfer"


def booking_host_earnings(booking: dict[str, Any]) -> Decimal:
    """Host payout for a booking, falling back to the standard share of the total."""
    earnings = to_decimal(booking.get("host_earnings"))
    if earnings:
        return earnings
    return to_decimal(booking.get("total_price")) * HOST_SHARE


def summarize_earnings(
    bookings: list[dict[str, Any]],
    property_count: int,
    days_elapsed: int,
) -> dict[str, Any]:
    revenue = sum((booking_host_earnings(b) for b in bookings), ZERO)
    total_nights = sum(int(b.get("number_of_nights") or 0) for b in bookings)

    adr = revenue / total_nights if total_nights else ZERO

    available_nights = property_count * days_elapsed
    occupancy = (
        round(total_nights / available_nights * 100, 1) if available_nights else 0.0
    )

    return {
        "total_bookings": len(bookings),
        "total_nights": total_nights,
        "revenue": revenue,
        "adr": adr,
        "occupancy_rate": occupancy,
    }


def _parse_timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        return as_naive_datetime(datetime.fromisoformat(str(value)))
    except ValueError:
        return None


def payout_from_row(row: dict[str, Any], default_currency: str) -> dict[str, Any]:
    scheduled_date = _parse_timestamp(row.get("scheduled_date"))
    paid_date = _parse_timestamp(row.get("paid_date"))
    return {
        "id": str(row.get("id")),
        "amount": to_decimal(row.get("amount")),
        "status": str(row.get("status") or "").lower(),
        # Paid payouts are dated by payment, pending ones by schedule.
        "date": paid_date or scheduled_date or _parse_timestamp(row.get("created_at")),
        "scheduled_date": scheduled_date,
        "paid_date": paid_date,
        "method": row.get("method") or DEFAULT_PAYOUT_METHOD,
        "currency_code": str(row.get("currency") or default_currency).upper(),
        "period_start": _parse_timestamp(row.get("period_start")),
        "period_end": _parse_timestamp(row.get("period_end")),
    }


def next_scheduled_payout(
    payouts: list[dict[str, Any]], now: datetime
) -> dict[str, Any] | None:
    """The soonest payout still scheduled after ``now``."""
    current = as_naive_datetime(now)
    upcoming = [
        payout
        for payout in payouts
        if payout["status"] == "scheduled"
        and payout["scheduled_date"] is not None
        and payout["scheduled_date"] > current
    ]
    if not upcoming:
        return None
    soonest = min(upcoming, key=lambda payout: payout["scheduled_date"])
    return {
        "amount": soonest["amount"],
        "date": soonest["scheduled_date"],
        "method": soonest["method"],
    }
