import os
from functools import lru_cache

from pydantic import BaseModel


class Settings(BaseModel):
    PORT: int = 3000
    HOST: str | None = None
    COLLABLAND_ACTION_PUBLIC_KEY: str | None = None
    COINGECKO_API_URL: str = "https://api.coingecko.com"
    COINGECKO_TIMEOUT_SEC: float | None = None
    DISCORD_API_URL: str = "https://discord.com/api/v10"

    @classmethod
    def from_env(cls) -> "Settings":
        raw = {
            "PORT": os.getenv("PORT"),
            "HOST": os.getenv("HOST"),
            "COLLABLAND_ACTION_PUBLIC_KEY": os.getenv("COLLABLAND_ACTION_PUBLIC_KEY"),
            "COINGECKO_API_URL": os.getenv("COINGECKO_API_URL"),
            "COINGECKO_TIMEOUT_SEC": os.getenv("COINGECKO_TIMEOUT_SEC"),
            "DISCORD_API_URL": os.getenv("DISCORD_API_URL"),
        }
        # empty env vars fall back to field defaults
        return cls.model_validate({k: v for k, v in raw.items() if v not in (None, "")})


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
