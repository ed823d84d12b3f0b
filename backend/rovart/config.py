# backend/rovart/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repo root


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/sqlite/rovart.db"
    redis_url: str | None = None

    identity_api_url: str = "https://api.clerk.com"
    identity_secret_key: str = ""
    identity_timeout_seconds: float = 10.0
    admin_emails: str = ""

    business_timezone: str = "Indian/Antananarivo"
    cancelled_frees_slot: bool = False

    request_timeout_seconds: float = 15.0
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # relative sqlite path -> absolute, anchored at the repo root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            return f"sqlite:///{absolute_path}"
        return url

    @property
    def admin_email_set(self) -> frozenset[str]:
        return frozenset(
            e.strip().lower() for e in self.admin_emails.split(",") if e.strip()
        )


settings = Settings()
