"""fieldsync configuration via pydantic-settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class FieldSyncSettings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///fieldsync.db"
    echo_sql: bool = False

    # Remote service (Fineract-style REST API)
    api_base_url: str = "https://demo.openmf.org/fineract-provider/api/v1"
    api_tenant: str = "default"
    api_username: str = "mifos"
    api_password: str = ""
    api_timeout_seconds: float = 30.0

    # Initial connectivity mode: online, offline or unknown
    mode: str = "online"
    page_limit: int = 100
    log_level: str = "INFO"

    model_config = {"env_prefix": "FIELDSYNC_", "env_file": ".env", "extra": "ignore"}


settings = FieldSyncSettings()
