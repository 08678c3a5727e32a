"""Pointshare settings, read from the environment or a local ``.env`` file."""
from collections import Counter
from functools import lru_cache
import math

from pydantic import field_validator
from pydantic_settings import BaseSettings

PLACEHOLDER_KEYS = {"secret", "password", "test", "changeme", "changeme-in-production"}
MIN_SECRET_KEY_LENGTH = 32
MIN_SECRET_KEY_BITS = 100


def estimate_entropy_bits(value: str) -> float:
    """Shannon entropy of ``value`` times its length."""
    total = len(value)
    per_char = -sum((n / total) * math.log2(n / total) for n in Counter(value).values())
    return per_char * total


class Settings(BaseSettings):
    app_name: str = "Pointshare"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    database_url: str = "sqlite:///./data/pointshare.db"

    # Tokens are signed with secret_key; there is no default.
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, value: str) -> str:
        """Refuse to start with a missing, short, placeholder or low-entropy key."""
        if not value:
            raise ValueError("SECRET_KEY must be set.")
        if len(value) < MIN_SECRET_KEY_LENGTH:
            raise ValueError(f"SECRET_KEY must be at least {MIN_SECRET_KEY_LENGTH} characters.")

        lowered = value.lower()
        if lowered in PLACEHOLDER_KEYS or "changeme" in lowered:
            raise ValueError("SECRET_KEY must not be a placeholder value.")
        if estimate_entropy_bits(value) < MIN_SECRET_KEY_BITS:
            raise ValueError("SECRET_KEY entropy is too low; use a cryptographically random value.")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
