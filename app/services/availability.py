from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from app.schemas.quote import BookedRange

NOT_AVAILABLE = "Property is not available for the selected dates."


def ranges_overlap(
    request_start: date,
    request_end: date,
    booked_start: date,
    booked_end: date,
) -> bool:
    # Check-out day is free for the next check-in.
    return request_start < booked_end and request_end > booked_start


def find_conflicts(
    check_in: date,
    check_out: date,
    booked_ranges: Iterable[BookedRange],
) -> list[BookedRange]:
    return [
        booked
        for booked in booked_ranges
        if ranges_overlap(check_in, check_out, booked.check_in, booked.check_out)
    ]
