from __future__ import annotations

from datetime import date

from supabase import Client

from app.schemas.quote import BookedRange

INACTIVE_BOOKING_STATUSES = ("cancelled", "rejected", "expired")
EARNING_BOOKING_STATUSES = ("confirmed", "completed")


def _parse_day(value) -> date:
    # Rows may carry plain dates or full ISO timestamps.
    return date.fromisoformat(str(value)[:10])


async def get_booked_ranges(
    client: Client, property_id: str, check_in: date, check_out: date
) -> list[BookedRange]:
    """Active bookings on the property that touch the requested window."""
    query = (
        client.table("bookings")
        .select("id, check_in, check_out, status")
        .eq("property_id", property_id)
    )
    for inactive in INACTIVE_BOOKING_STATUSES:
        query = query.neq("status", inactive)
    response = (
        query.lt("check_in", check_out.isoformat())
        .gt("check_out", check_in.isoformat())
        .execute()
    )
    return [
        BookedRange(
            booking_id=str(row["id"]) if row.get("id") is not None else None,
            check_in=_parse_day(row["check_in"]),
            check_out=_parse_day(row["check_out"]),
        )
        for row in response.data or []
    ]


async def get_booking_by_id(client: Client, booking_id: str) -> dict | None:
    response = (
        client.table("bookings")
        .select("*")
        .eq("id", booking_id)
        .limit(1)
        .execute()
    )
    if not response.data:
        return None
    return response.data[0]


async def get_host_bookings(
    client: Client, host_id: str, start: date, end: date
) -> list[dict]:
    """Confirmed or completed bookings for a host with check-in inside [start, end]."""
    response = (
        client.table("bookings")
        .select("id, total_price, host_earnings, number_of_nights, status, check_in")
        .eq("host_id", host_id)
        .in_("status", list(EARNING_BOOKING_STATUSES))
        .gte("check_in", start.isoformat())
        .lte("check_in", end.isoformat())
        .execute()
    )
    return response.data or []
