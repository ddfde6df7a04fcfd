from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from app.services.date_range import (
    CHECKIN_IN_PAST,
    CHECKOUT_BEFORE_CHECKIN,
    count_nights,
    validate_date_range,
    validate_stay_length,
)

TODAY = date(2024, 1, 1)


def test_counts_whole_nights_between_dates():
    result = validate_date_range(date(2024, 1, 1), date(2024, 1, 6), today=TODAY)

    assert result.nights == 5
    assert result.errors == []


def test_same_day_checkout_is_rejected_without_nights():
    result = validate_date_range(date(2024, 3, 10), date(2024, 3, 10), today=TODAY)

    assert result.nights == 0
    assert result.errors == [CHECKOUT_BEFORE_CHECKIN]


def test_checkout_before_checkin_is_rejected():
    result = validate_date_range(date(2024, 3, 10), date(2024, 3, 8), today=TODAY)

    assert result.nights == 0
    assert result.errors == ["Checkout date must be after check-in date."]


def test_partial_day_rounds_up_to_a_full_night():
    check_in = datetime(2024, 1, 1, 23, 0)
    check_out = datetime(2024, 1, 2, 1, 0)

    assert count_nights(check_in, check_out) == 1
    assert count_nights(datetime(2024, 1, 1, 15, 0), datetime(2024, 1, 3, 11, 0)) == 2


def test_count_nights_handles_aware_datetimes():
    check_in = datetime(2024, 1, 1, 22, 0, tzinfo=timezone(timedelta(hours=3)))
    check_out = datetime(2024, 1, 2, 10, 0, tzinfo=timezone.utc)

    assert count_nights(check_in, check_out) == 1


def test_past_checkin_is_rejected_by_default():
    result = validate_date_range(date(2023, 12, 30), date(2024, 1, 2), today=TODAY)

    assert result.nights == 3
    assert result.errors == [CHECKIN_IN_PAST]


def test_past_checkin_allowed_for_historical_quotes():
    result = validate_date_range(
        date(2023, 12, 30), date(2024, 1, 2), today=TODAY, allow_past=True
    )

    assert result.errors == []
    assert result.nights == 3


def test_checkin_today_is_allowed():
    result = validate_date_range(TODAY, date(2024, 1, 2), today=TODAY)

    assert result.errors == []


def test_both_date_errors_are_reported_in_order():
    result = validate_date_range(date(2023, 12, 30), date(2023, 12, 29), today=TODAY)

    assert result.errors == [CHECKOUT_BEFORE_CHECKIN, CHECKIN_IN_PAST]


def test_stay_length_limits():
    assert validate_stay_length(2, minimum_stay=3) == ["Minimum stay is 3 night(s)."]
    assert validate_stay_length(10, minimum_stay=1, maximum_stay=7) == [
        "Maximum stay is 7 nights."
    ]
    assert validate_stay_length(3, minimum_stay=3, maximum_stay=3) == []
    assert validate_stay_length(0, minimum_stay=3) == []
