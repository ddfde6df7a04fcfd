from __future__ import annotations

from app.schemas.quote import GuestCount

ADULT_REQUIRED = "At least one adult guest is required."


def check_capacity(guests: GuestCount, max_guests: int) -> list[str]:
    """Validate requested occupancy. Infants are not counted against ``max_guests``."""
    errors: list[str] = []
    if guests.adults < 1:
        errors.append(ADULT_REQUIRED)
    if guests.countable > max_guests:
        errors.append(f"This property accommodates a maximum of {max_guests} guests.")
    return errors
