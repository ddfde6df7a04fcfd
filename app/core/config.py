from decimal import Decimal
from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_HOSTS = {"your-booking-service.com", "example.invalid"}


def _validate_public_http_url(
    value: str,
    field_name: str,
    *,
    reject_placeholders: bool,
) -> None:
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError(f"{field_name} must be an absolute http(s) URL.")

    host = (parsed.hostname or "").lower()
    if reject_placeholders and host in PLACEHOLDER_HOSTS:
        raise ValueError(
            f"{field_name} points to placeholder host '{host}'. Set a real service URL."
        )


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "stay-quote-api"
    log_level: str = "INFO"

    # Supabase configuration (required)
    supabase_url: str
    supabase_service_key: str

    # External booking service that persists reservations
    booking_service_url: str | None = None
    booking_service_timeout_seconds: float = Field(30.0, gt=0)

    # Pricing defaults applied when a property row leaves them unset
    default_currency_code: str = "QAR"
    default_service_fee_rate: Decimal = Field(Decimal("0.10"), ge=0)
    default_tax_rate: Decimal = Field(Decimal("0.12"), ge=0)
    deposit_ratio: Decimal = Field(Decimal("0.5"), ge=0, le=1)

    @field_validator("default_currency_code")
    @classmethod
    def normalize_currency(cls, value: str) -> str:
        normalized = (value or "").strip().upper()
        if len(normalized) != 3 or not normalized.isalpha():
            raise ValueError("DEFAULT_CURRENCY_CODE must be a 3-letter ISO code.")
        return normalized

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return (value or "INFO").strip().upper()

    @model_validator(mode="after")
    def validate_settings(self):
        if not self.supabase_url or not self.supabase_service_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required. "
                "Get these from your Supabase project settings."
            )

        if not self.supabase_url.endswith(".supabase.co"):
            raise ValueError(
                "SUPABASE_URL must be a valid Supabase project URL "
                "(e.g., https://<project>.supabase.co)"
            )

        if self.booking_service_url:
            _validate_public_http_url(
                self.booking_service_url,
                "BOOKING_SERVICE_URL",
                reject_placeholders=True,
            )
            self.booking_service_url = self.booking_service_url.rstrip("/")

        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
