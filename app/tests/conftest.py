from __future__ import annotations

import pytest

from app.core.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://demo.supabase.co",
        supabase_service_key="service-key",
        booking_service_url="https://bookings.example.com/api/v1.0",
    )


@pytest.fixture
def property_row() -> dict:
    return {
        "id": "prop-1",
        "title": "Corniche View Apartment",
        "city": "Doha",
        "country": "Qatar",
        "amenities": '["Wifi", "Pool", ""]',
        "photos": ["https://cdn.example.com/prop-1/a.jpg", "https://cdn.example.com/prop-1/b.jpg"],
        "cover_photo": None,
        "price_per_night": 100,
        "cleaning_fee": 50,
        "service_fee_rate": None,
        "tax_rate": None,
        "max_guests": 3,
        "minimum_stay": None,
        "maximum_stay": None,
        "currency_code": "qar",
    }
