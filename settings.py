import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field, SecretStr, field_validator

load_dotenv()

DEFAULT_API_SERVER = "https://api.hetrixtools.com/v3"


class Settings(BaseModel):
    api_server: str = DEFAULT_API_SERVER
    api_key: SecretStr | None = None
    allowed_origin: str = "*"
    cache_ttl_seconds: int = Field(default=60, gt=0)
    host: str = "0.0.0.0"
    port: int = 8787

    @field_validator("api_server")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @classmethod
    def from_env(cls) -> "Settings":
        api_key = os.getenv("HT_API_KEY", "").strip()
        return cls(
            api_server=os.getenv("HT_API_SERVER") or DEFAULT_API_SERVER,
            api_key=SecretStr(api_key) if api_key else None,
            allowed_origin=os.getenv("ALLOWED_ORIGIN", "*").strip(),
            cache_ttl_seconds=int(os.getenv("CACHE_TTL_SECONDS", "60")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8787")),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
