from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List


class Settings(BaseSettings):
    # Project Info
    PROJECT_NAME: str = "Storefront API"
    API_V1_STR: str = "/api/v1"

    # Database
    DATABASE_URL: str = "sqlite:///./storefront.db"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
    ]

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Frontend
    FRONTEND_URL: str = "http://localhost:3000"

    # Monitoring (Optional - Add to .env for production)
    SENTRY_DSN: str = ""

    # Rate limiting
    RATE_LIMIT_DEFAULT: str = "200/minute"

    # Shipping (currency units)
    FREE_SHIPPING_THRESHOLD: int = 200000
    STANDARD_SHIPPING_COST: int = 20000

    # WhatsApp checkout
    WHATSAPP_PHONE_NUMBER: str = "628175753345"
    WHATSAPP_BASE_URL: str = "https://wa.me"

    # Currency formatting
    CURRENCY_CODE: str = "IDR"
    CURRENCY_LOCALE: str = "id-ID"

    # Cart persistence
    CART_STORAGE_KEY: str = "cart"
    CART_SESSION_COOKIE: str = "cart_session"
    CART_SESSION_MAX_AGE: int = 60 * 60 * 24 * 30  # 30 days

    @field_validator("ENVIRONMENT")
    @classmethod
    def normalize_environment(cls, value: str) -> str:
        return value.lower().strip()

    @field_validator("CURRENCY_CODE")
    @classmethod
    def normalize_currency_code(cls, value: str) -> str:
        return value.upper().strip()

    @field_validator("FREE_SHIPPING_THRESHOLD", "STANDARD_SHIPPING_COST")
    @classmethod
    def validate_non_negative_amount(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Shipping amounts must not be negative")
        return value

    @field_validator("WHATSAPP_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore",
    }


settings = Settings()
