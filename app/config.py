"""
Application configuration loaded from environment variables.
Uses pydantic-settings for typed, validated config.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.models import ServiceCredentials


class Settings(BaseSettings):
    """All environment variables read by the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    # ── Tika server ───────────────────────────────────────────
    tika_url: str = "http://localhost:9998"
    tika_timeout: float = 30.0       # seconds, per request
    tika_min_version: str = "1.7"    # oldest server the extractor accepts

    # Basic auth, only sent when a password is configured
    tika_username: str | None = Field(default=None, validation_alias="SS_TIKA_USERNAME")
    tika_password: str | None = Field(default=None, validation_alias="SS_TIKA_PASSWORD")

    # ── App ───────────────────────────────────────────────────
    app_name: str = "textextraction.service"
    debug: bool = False

    def tika_credentials(self) -> ServiceCredentials | None:
        """Return basic auth credentials, or None when no password is set."""
        if not self.tika_password:
            return None
        return ServiceCredentials(
            username=self.tika_username or "",
            password=self.tika_password,
        )


# Singleton, import this wherever config is needed
settings = Settings()
