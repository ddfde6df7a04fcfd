from __future__ import annotations

from datetime import date
from decimal import Decimal

from app.core.money import round_money
from app.schemas.quote import PaymentSchedule, PriceBreakdown, PropertyPricingProfile

DEFAULT_DEPOSIT_RATIO = Decimal("0.5")


def compose_price(nights: int, profile: PropertyPricingProfile) -> PriceBreakdown:
    """Price a stay of ``nights`` nights.

    Tax applies to the nightly subtotal plus the service fee; the cleaning fee is
    tax exempt. Nothing is rounded here.
    """
    base_amount = profile.nightly_rate * nights
    service_fee_amount = base_amount * profile.service_fee_rate
    tax_amount = (base_amount + service_fee_amount) * profile.tax_rate
    total_amount = base_amount + profile.cleaning_fee + service_fee_amount + tax_amount

    return PriceBreakdown(
        base_amount=base_amount,
        cleaning_fee=profile.cleaning_fee,
        service_fee_amount=service_fee_amount,
        tax_amount=tax_amount,
        total_amount=total_amount,
    )


def split_payment(
    total_amount: Decimal,
    due_later_on: date,
    deposit_ratio: Decimal = DEFAULT_DEPOSIT_RATIO,
) -> PaymentSchedule:
    """Split a total into a deposit charged now and a balance charged at check-in."""
    total = round_money(total_amount)
    due_now = round_money(total * deposit_ratio)
    return PaymentSchedule(
        due_now=due_now,
        due_later=total - due_now,
        due_later_on=due_later_on,
    )
