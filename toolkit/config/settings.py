# toolkit/config/settings.py
import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_UPLOAD_BYTES = 1024 * 1024 * 1024  # 1GiB
DEFAULT_MAX_JSON_BYTES = 1024 * 1024  # 1MiB


class Settings(BaseSettings):
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    app_prefix: str = os.getenv("APP_PREFIX", "")

    # Upload
    files_base_path: str = os.getenv("FILES_BASE_PATH", "./_uploads")
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    # Whitelist de tipos detectados pelo conteúdo (vazio = aceita tudo)
    # Ex: "application/pdf,image/png,image/jpeg"
    allowed_mime_types_raw: str = os.getenv("ALLOWED_MIME_TYPES", "")

    # JSON
    max_json_bytes: int = DEFAULT_MAX_JSON_BYTES
    allow_unknown_json_fields: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("allowed_mime_types_raw", "files_base_path", "app_prefix", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @field_validator("max_upload_bytes", "max_json_bytes")
    @classmethod
    def positive_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("o limite deve ser maior que zero")
        return v

    @property
    def allowed_mime_types(self) -> set[str]:
        raw = (self.allowed_mime_types_raw or "").strip()
        if not raw:
            return set()
        parts = [p.strip() for p in raw.split(",")]
        return {p for p in parts if p}


settings = Settings()
