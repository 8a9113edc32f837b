from functools import lru_cache
import json
from pathlib import Path
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


BACKEND_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


def _split_list(value: str) -> list[str]:
    stripped = value.strip()
    if stripped.startswith("["):
        try:
            parsed = json.loads(stripped)
            if isinstance(parsed, list):
                return [str(item).strip() for item in parsed if str(item).strip()]
        except json.JSONDecodeError:
            pass
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    # Resolve to backend/.env so `uvicorn --app-dir backend` works from any cwd.
    model_config = SettingsConfigDict(env_file=str(BACKEND_ENV_FILE), env_file_encoding="utf-8")

    project_name: str = "Timetable Live API"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./timetable.db"

    jwt_secret_key: str = "changeme-super-secret"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 12

    # "userId:password" pairs; replace with a real identity provider in production.
    admin_accounts: Annotated[list[str], NoDecode] = ["admin1:pass1", "admin2:pass2"]

    # Empty means any non-empty day label is accepted.
    allowed_days: Annotated[list[str], NoDecode] = []
    strict_time_parsing: bool = False

    login_rate_limit_max_requests: int = 12
    login_rate_limit_window_seconds: int = 300

    max_request_size_bytes: int = 1_000_000
    static_dir: str | None = None

    cors_origins: Annotated[list[str], NoDecode] = ["*"]

    @field_validator("cors_origins", "admin_accounts", "allowed_days", mode="before")
    @classmethod
    def split_list_values(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return _split_list(value)
        return value

    def admin_credentials(self) -> dict[str, str]:
        credentials: dict[str, str] = {}
        for entry in self.admin_accounts:
            user_id, sep, password = entry.partition(":")
            if not sep or not user_id.strip() or not password:
                continue
            credentials[user_id.strip()] = password
        return credentials


@lru_cache
def get_settings() -> Settings:
    return Settings()
