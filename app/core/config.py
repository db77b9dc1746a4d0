from typing import Any, List, Optional
from urllib.parse import quote_plus

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOCAL_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


class Settings(BaseSettings):
    PROJECT_NAME: str = "Landing Submissions"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # --- Environment & Debug ---
    ENVIRONMENT: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None  # e.g. "logs/landing_api.log"

    # --- Outbound email (contact notifier) ---
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    EMAIL_FROM: str = "noreply@localhost"
    CONTACT_NOTIFY_TO: str = "admin@localhost"

    # --- Contact form limits ---
    CONTACT_MAX_ATTACHMENTS: int = 3
    CONTACT_MAX_ATTACHMENT_BYTES: int = 25 * 1024 * 1024  # 25MB

    # --- Waitlist ---
    WAITLIST_INITIALS_SAMPLE: int = 5

    # --- Rate Limiting / Proxy ---
    SUBMISSION_RATE_LIMIT_PER_MINUTE: int = 10
    TRUSTED_PROXIES: List[str] = Field(
        default_factory=lambda: ["127.0.0.1", "10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16"],
        description="CIDR ranges of trusted reverse proxies for X-Forwarded-For",
    )

    # --- CORS ---
    ALLOWED_ORIGINS: List[str] = Field(
        default_factory=list,
        validate_default=True,
        description="List of allowed CORS origins. Configure in .env",
    )

    # --- Database Config ---
    DB_HOST: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_PORT: Optional[str] = "5432"
    DB_NAME: Optional[str] = "postgres"
    DB_AUTO_CREATE: bool = True

    # --- Connection Pool ---
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_PRE_PING: bool = True

    # --- Connection URL (wins over DB_* parts) ---
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def default_allowed_origins(
        cls, v: Optional[List[str]], info: ValidationInfo
    ) -> Optional[List[str]]:
        env = info.data.get("ENVIRONMENT") or "local"
        if env != "production":
            if v is None:
                return list(_LOCAL_ORIGINS)
            if isinstance(v, str) and v.strip() in ("", "[]"):
                return list(_LOCAL_ORIGINS)
            if isinstance(v, list) and len(v) == 0:
                return list(_LOCAL_ORIGINS)
        return v

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> Any:
        if isinstance(v, str) and v:
            return v

        values = info.data
        if not values.get("DB_HOST") or not values.get("DB_USER"):
            return "sqlite:///./landing.db"

        user = values.get("DB_USER")
        # Password may carry @, # or ! characters
        password = quote_plus(values.get("DB_PASSWORD") or "")
        host = values.get("DB_HOST")
        port = values.get("DB_PORT", "5432")
        db = values.get("DB_NAME", "postgres")

        return f"postgresql://{user}:{password}@{host}:{port}/{db}"

    @field_validator("CONTACT_MAX_ATTACHMENTS", "CONTACT_MAX_ATTACHMENT_BYTES", mode="after")
    @classmethod
    def validate_positive_limits(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Attachment limits must be positive")
        return v

    @property
    def is_sqlite(self) -> bool:
        return bool(self.DATABASE_URL) and self.DATABASE_URL.startswith("sqlite")


settings = Settings()
