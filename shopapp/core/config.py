# shopapp/core/config.py
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # --- API Info ---
    API_TITLE: str = "Shop Application API"
    API_DESCRIPTION: str = (
        "E-commerce backend: authentication, catalog, cart, orders, payments, reviews, favorites and notifications.\n\n"
        "Errors are returned as `{\"error\": {\"code\": ..., \"message\": ..., \"context\": {...}}}`; "
        "`error.message` carries the human-readable text."
    )
    API_VERSION: str = "1.0.0"

    # --- Server Configuration ---
    PORT: int = int(os.getenv("PORT", "8000"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # --- Database ---
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./shop.db")

    # --- Tokens ---
    ENCODING_SECRET_KEY: str = os.getenv("ENCODING_SECRET_KEY") or "dev-secret-change-me"
    ENCODING_ALGORITHM: str = os.getenv("ENCODING_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
    PASSWORD_RESET_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("PASSWORD_RESET_TOKEN_EXPIRE_MINUTES", "30"))
    ADMIN_REGISTRATION_KEY: str = os.getenv("ADMIN_REGISTRATION_KEY", "")

    # --- Infrastructure ---
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    RATE_LIMIT_ENABLED: bool = _env_bool("RATE_LIMIT_ENABLED", "1")
    CORS_ORIGINS: list = [
        origin.strip()
        for origin in os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173",
        ).split(",")
        if origin.strip()
    ]
    SEED_SAMPLE_DATA: bool = _env_bool("SEED_SAMPLE_DATA", "1")

    # --- Payment simulation ---
    PAYMENT_SUCCESS_RATE: float = float(os.getenv("PAYMENT_SUCCESS_RATE", "0.9"))
    PAYMENT_PROCESSING_DELAY_SECONDS: float = float(os.getenv("PAYMENT_PROCESSING_DELAY_SECONDS", "1.0"))

    # --- Catalog ---
    LOW_STOCK_THRESHOLD: int = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))
    MIN_PASSWORD_LENGTH: int = 6


settings = Settings()
