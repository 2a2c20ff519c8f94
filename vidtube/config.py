# vidtube/config.py

import os
from dataclasses import dataclass, field
from datetime import timedelta
from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """
    Application configuration.
    Built once at process start and handed to create_app().
    """
    access_token_secret: str
    refresh_token_secret: str
    access_token_expiry: timedelta = timedelta(minutes=60)
    refresh_token_expiry: timedelta = timedelta(days=10)
    database_url: str = "sqlite:///./data/app.db"
    db_timeout: float = 5.0
    media_dir: str = "data/media"
    media_base_url: str = "/media"
    cookie_secure: bool = True
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self):
        if not self.access_token_secret or not self.refresh_token_secret:
            raise ValueError("ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must be set")
        if self.access_token_secret == self.refresh_token_secret:
            raise ValueError("access and refresh tokens must use different secrets")

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            access_token_secret=os.getenv("ACCESS_TOKEN_SECRET", ""),
            refresh_token_secret=os.getenv("REFRESH_TOKEN_SECRET", ""),
            access_token_expiry=timedelta(minutes=int(os.getenv("ACCESS_TOKEN_EXPIRY_MINUTES", "60"))),
            refresh_token_expiry=timedelta(days=int(os.getenv("REFRESH_TOKEN_EXPIRY_DAYS", "10"))),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./data/app.db"),
            db_timeout=float(os.getenv("DB_TIMEOUT", "5")),
            media_dir=os.getenv("MEDIA_DIR", "data/media"),
            media_base_url=os.getenv("MEDIA_BASE_URL", "/media").rstrip("/"),
            cookie_secure=_env_bool("COOKIE_SECURE", True),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )
