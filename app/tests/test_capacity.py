from __future__ import annotations

from app.schemas.quote import GuestCount
from app.services.capacity import ADULT_REQUIRED, check_capacity


def test_exactly_at_capacity_is_allowed():
    assert check_capacity(GuestCount(adults=2, children=2), max_guests=4) == []


def test_one_over_capacity_is_rejected():
    assert check_capacity(GuestCount(adults=3, children=2), max_guests=4) == [
        "This property accommodates a maximum of 4 guests."
    ]


def test_infants_do_not_count_towards_capacity():
    guests = GuestCount(adults=2, children=1, infants=1)

    assert guests.countable == 3
    assert check_capacity(guests, max_guests=3) == []


def test_adult_is_required():
    assert check_capacity(GuestCount(adults=0, children=1), max_guests=4) == [ADULT_REQUIRED]


def test_adult_error_precedes_capacity_error():
    errors = check_capacity(GuestCount(adults=0, children=5), max_guests=2)

    assert errors == [
        "At least one adult guest is required.",
        "This property accommodates a maximum of 2 guests.",
    ]
