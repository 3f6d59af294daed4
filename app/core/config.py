from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_publishable_key: str = ""  # Used for owner sign-in / sign-up
    supabase_secret_key: str = ""  # Service role, used for table access

    # Server
    environment: str = "development"
    cors_origin_pattern: str = r"^https://([a-z0-9-]+\.)?findmeacoffee\.in$"

    # Stamp collection targets encoded in QR codes / NFC tags
    stamp_base_url: str = "https://findmeacoffee.in/stamp"
    nfc_url_scheme: str = "findmeacoffee://stamp"
    qr_download_size: int = 400  # px, square

    # Loyalty program
    redemption_code_length: int = 6
    redemption_list_limit: int = 50
    active_customer_window_days: int = 7

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


def get_stamp_url(cafe_id: str) -> str:
    """URL customers scan to download the app / collect a stamp at a cafe."""
    return f"{settings.stamp_base_url.rstrip('/')}/{cafe_id}"


def get_nfc_url(cafe_id: str) -> str:
    """Deep link to program onto a cafe's NFC tag."""
    return f"{settings.nfc_url_scheme.rstrip('/')}/{cafe_id}"
