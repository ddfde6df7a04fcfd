from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import ValidationError
from supabase import Client

from app.core.config import Settings
from app.core.money import ZERO
from app.schemas.quote import PropertyListing, PropertyPricingProfile

logger = logging.getLogger(__name__)

PRICING_UNAVAILABLE = "Property pricing is not configured"

PROPERTY_COLUMNS = (
    "id, title, city, country, amenities, photos, cover_photo, "
    "price_per_night, cleaning_fee, service_fee_rate, tax_rate, "
    "max_guests, minimum_stay, maximum_stay, currency_code"
)


def normalize_currency_code(value: str | None, default: str) -> str:
    if not value:
        return default

    normalized = value.strip().upper()
    if len(normalized) != 3 or not normalized.isalpha():
        return default
    return normalized


def normalize_string_list(value: Any) -> list[str]:
    """Return a clean list of strings from a list or a JSON-encoded list."""
    if value is None:
        return []
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return []
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding malformed JSON list value: {raw[:80]!r}")
            return []
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _optional_int(value: Any) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _stored_amount(value: Any) -> Decimal | None:
    """Parse a stored amount or rate; None when it is not a finite, non-negative number."""
    if isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def pricing_profile_from_row(row: dict, settings: Settings) -> PropertyPricingProfile | None:
    """Build the pricing profile for a property row.

    Returns None when the stored pricing cannot be quoted: a missing or unusable
    nightly rate, or a fee or rate column holding something other than a
    non-negative number. Unset fees and rates fall back to zero or the
    configured defaults.
    """
    property_id = row.get("id")

    nightly_rate = None
    if row.get("price_per_night") not in (None, ""):
        nightly_rate = _stored_amount(row["price_per_night"])
    if nightly_rate is None:
        logger.warning(
            f"Property {property_id} has no usable price_per_night "
            f"({row.get('price_per_night')!r}); refusing to quote"
        )
        return None

    amounts: dict[str, Decimal] = {}
    fallbacks = {
        "cleaning_fee": ZERO,
        "service_fee_rate": settings.default_service_fee_rate,
        "tax_rate": settings.default_tax_rate,
    }
    for field, fallback in fallbacks.items():
        raw = row.get(field)
        if raw in (None, ""):
            amounts[field] = fallback
            continue
        parsed = _stored_amount(raw)
        if parsed is None:
            logger.warning(
                f"Property {property_id} has an invalid {field} ({raw!r}); refusing to quote"
            )
            return None
        amounts[field] = parsed

    max_guests = _optional_int(row.get("max_guests"))
    if not max_guests or max_guests < 1:
        logger.warning(f"Property {property_id} has no usable max_guests; assuming 1")
        max_guests = 1

    minimum_stay = _optional_int(row.get("minimum_stay")) or 1
    maximum_stay = _optional_int(row.get("maximum_stay"))

    try:
        return PropertyPricingProfile(
            nightly_rate=nightly_rate,
            max_guests=max_guests,
            minimum_stay=max(minimum_stay, 1),
            maximum_stay=maximum_stay if maximum_stay and maximum_stay >= 1 else None,
            currency_code=normalize_currency_code(
                row.get("currency_code"), settings.default_currency_code
            ),
            **amounts,
        )
    except ValidationError as exc:
        logger.warning(f"Property {property_id} has an invalid pricing profile: {exc}")
        return None


def listing_from_row(row: dict) -> PropertyListing:
    photos = normalize_string_list(row.get("photos"))
    cover_photo = row.get("cover_photo") or (photos[0] if photos else None)
    return PropertyListing(
        id=str(row["id"]),
        title=row.get("title") or "",
        city=row.get("city"),
        country=row.get("country"),
        amenities=normalize_string_list(row.get("amenities")),
        photos=photos,
        cover_photo=cover_photo,
    )


async def get_property_by_id(client: Client, property_id: str) -> dict | None:
    response = (
        client.table("properties")
        .select(PROPERTY_COLUMNS)
        .eq("id", property_id)
        .limit(1)
        .execute()
    )
    if not response.data:
        return None
    return response.data[0]


async def get_pricing_profile(
    client: Client, property_id: str, settings: Settings
) -> PropertyPricingProfile | None:
    row = await get_property_by_id(client, property_id)
    if not row:
        return None
    return pricing_profile_from_row(row, settings)


async def get_property_listing(client: Client, property_id: str) -> PropertyListing | None:
    row = await get_property_by_id(client, property_id)
    if not row:
        return None
    return listing_from_row(row)


async def count_published_properties(client: Client, host_id: str) -> int:
    response = (
        client.table("properties")
        .select("id")
        .eq("owner_id", host_id)
        .eq("status", "published")
        .execute()
    )
    return len(response.data or [])
