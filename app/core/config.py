from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    app_name: str = "MineMods API"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite:///./minemods.db"
    app_url: str = "http://localhost:3000"

    google_client_id: str = ""
    google_client_secret: str = ""

    session_secret: str = "change-me"
    session_algorithm: str = "HS256"
    session_max_age_days: int = 7
    admin_password: str = ""

    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_tts_model: str = "gemini-2.5-flash-preview-tts"
    gemini_tts_voice: str = "Kore"

    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"])
    rate_limit_per_minute: int = 120
    max_image_size_mb: int = 8
    auto_create_tables: bool = True

    @property
    def oauth_redirect_uri(self) -> str:
        return f"{self.app_url.rstrip('/')}/auth/callback"

    @property
    def cookie_secure(self) -> bool:
        return self.environment == "prod"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
