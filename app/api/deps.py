import re
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import Depends, Header, HTTPException, status

from app.core.config import Settings, get_settings
from app.core.session import SessionContext
from app.services.booking_backend import BookingBackendClient

PROPERTY_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def validate_property_id(property_id: str) -> str:
    """Validate that property_id is a well-formed opaque identifier.

    Raises HTTP 400 if not, so malformed ids never reach the database filters.
    """
    if not PROPERTY_ID_PATTERN.match(property_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid property ID format.",
        )
    return property_id


def get_now() -> datetime:
    return datetime.now(timezone.utc)


def get_today(
    now: datetime = Depends(get_now),
    x_client_timezone: str | None = Header(None),
) -> date:
    """The caller's calendar date, taken from an IANA zone name sent by the client.

    Without the header the date is taken in UTC.
    """
    if not x_client_timezone or not x_client_timezone.strip():
        return now.astimezone(timezone.utc).date()

    try:
        zone = ZoneInfo(x_client_timezone.strip())
    except (ZoneInfoNotFoundError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid client timezone.",
        )
    return now.astimezone(zone).date()


async def get_session(
    x_user_id: str | None = Header(None),
    authorization: str | None = Header(None),
) -> SessionContext:
    """Build the caller's session from headers set by the upstream auth gateway."""
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip() or None

    return SessionContext(user_id=user_id, access_token=token)


def get_booking_backend(
    settings: Settings = Depends(get_settings),
) -> BookingBackendClient:
    if not settings.booking_service_url:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Booking service is not configured",
        )
    return BookingBackendClient(
        settings.booking_service_url,
        timeout=settings.booking_service_timeout_seconds,
    )
