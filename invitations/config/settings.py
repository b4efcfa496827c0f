# invitations/config/settings.py

from functools import lru_cache
from pathlib import Path
from typing import Dict, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "event-invitations"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False
    version: str = "0.1.0"

    # --- Persistence ---
    persistence_mode: Literal["file", "redis", "transient"] = "file"
    data_file: Path = Path("data/invitations.json")

    # --- Redis ---
    redis_url: str = "redis://localhost:6379/0"
    redis_snapshot_key: str = "invitations:snapshot"

    # --- Templates ---
    template_dir: Path = Path("templates")
    template_suffix: str = ".txt.j2"
    default_identity: str = "default"

    # --- Mail ---
    sender_addresses: Dict[str, str] = Field(default_factory=dict)
    fallback_sender: str = "info@example.org"
    mail_subject: str = "Invitation to our launch event"
    smtp_host: str = "localhost"
    smtp_port: int = 25
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_starttls: bool = False
    smtp_timeout: float = 10.0
    send_delay_seconds: float = Field(1.0, ge=0.0)

    # --- Listing / audit ---
    default_page_size: int = Field(25, gt=0)
    default_actor: str = "anonymous"

    # --- Observability ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()


# Singleton for direct import (e.g. in infrastructure clients)
settings = get_settings()
