from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "FocusDay"
    debug: bool = True
    database_url: str = Field("sqlite:///./focusday.db", validation_alias="DATABASE_URL")
    redis_url: Optional[str] = Field(None, validation_alias="REDIS_URL")
    plan_cache_ttl_seconds: int = 3600
    break_minutes: int = 15
    break_after_minutes: int = 90
    default_day_start: str = "08:00"
    default_day_end: str = "18:00"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
