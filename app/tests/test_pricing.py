from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

from app.schemas.quote import PropertyPricingProfile
from app.services.pricing import compose_price, split_payment


def _profile(**overrides) -> PropertyPricingProfile:
    values = {
        "nightly_rate": Decimal("100"),
        "cleaning_fee": Decimal("50"),
        "service_fee_rate": Decimal("0.10"),
        "tax_rate": Decimal("0.12"),
        "max_guests": 4,
    }
    values.update(overrides)
    return PropertyPricingProfile(**values)


def test_compose_price_five_nights():
    breakdown = compose_price(5, _profile())

    assert breakdown.base_amount == Decimal("500")
    assert breakdown.service_fee_amount == Decimal("50")
    assert breakdown.tax_amount == Decimal("66")
    assert breakdown.cleaning_fee == Decimal("50")
    assert breakdown.total_amount == Decimal("666")


def test_cleaning_fee_is_not_taxed():
    with_cleaning = compose_price(2, _profile(cleaning_fee=Decimal("80")))
    without_cleaning = compose_price(2, _profile(cleaning_fee=Decimal("0")))

    assert with_cleaning.tax_amount == without_cleaning.tax_amount
    assert with_cleaning.total_amount - without_cleaning.total_amount == Decimal("80")


def test_total_is_sum_of_components():
    breakdown = compose_price(
        3,
        _profile(
            nightly_rate=Decimal("89.99"),
            cleaning_fee=Decimal("35.5"),
            service_fee_rate=Decimal("0.14"),
            tax_rate=Decimal("0.0825"),
        ),
    )

    assert breakdown.total_amount == (
        breakdown.base_amount
        + breakdown.cleaning_fee
        + breakdown.service_fee_amount
        + breakdown.tax_amount
    )
    assert breakdown.base_amount == Decimal("269.97")


def test_amounts_are_unrounded_until_serialized():
    breakdown = compose_price(1, _profile(nightly_rate=Decimal("10.05"), cleaning_fee=Decimal("0")))

    # 10.05 * 0.10 = 1.005 stays exact internally and rounds half-up on output.
    assert breakdown.service_fee_amount == Decimal("1.005")
    payload = json.loads(breakdown.model_dump_json())
    assert payload["service_fee_amount"] == "1.01"
    assert payload["base_amount"] == "10.05"


def test_zero_rates_produce_base_only():
    breakdown = compose_price(
        4,
        _profile(
            cleaning_fee=Decimal("0"),
            service_fee_rate=Decimal("0"),
            tax_rate=Decimal("0"),
        ),
    )

    assert breakdown.total_amount == Decimal("400")
    assert breakdown.tax_amount == Decimal("0")


def test_split_payment_halves_the_total():
    schedule = split_payment(Decimal("666.000"), date(2024, 1, 1))

    assert schedule.due_now == Decimal("333.00")
    assert schedule.due_later == Decimal("333.00")
    assert schedule.due_later_on == date(2024, 1, 1)


def test_split_payment_rounds_deposit_half_up():
    schedule = split_payment(Decimal("100.01"), date(2024, 1, 1))

    assert schedule.due_now == Decimal("50.01")
    assert schedule.due_later == Decimal("50.00")
    assert schedule.due_now + schedule.due_later == Decimal("100.01")
