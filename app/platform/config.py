from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "TapRight Waitlist API"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = False
    CORS_ORIGINS: list[str] = ["*"]

    # ── Email (Resend) ──────────────────────────
    RESEND_API_KEY: Optional[str] = None
    RESEND_API_URL: str = "https://api.resend.com/emails"
    MAIL_FROM: str = "TapRight <info@tapright.app>"
    WAITLIST_ALERT_EMAIL: Optional[str] = None

    # ── Record store (Supabase) ─────────────────
    SUPABASE_URL: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    SUPABASE_WAITLIST_TABLE: Optional[str] = "waitlist_signups"

    # Ceiling for every outbound call (store writes, reads and email sends)
    OUTBOUND_TIMEOUT_SECONDS: float = 10.0

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def email_configured(self) -> bool:
        return bool(self.RESEND_API_KEY)

    @property
    def alert_configured(self) -> bool:
        return self.email_configured and bool(self.WAITLIST_ALERT_EMAIL)

    @property
    def store_configured(self) -> bool:
        return bool(
            self.SUPABASE_URL and self.SUPABASE_SERVICE_ROLE_KEY and self.SUPABASE_WAITLIST_TABLE
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
