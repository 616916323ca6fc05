import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

from .url_parser import parser

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Rental Marketplace API"
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL", "sqlite+aiosqlite:///./rental_marketplace.db"
    )
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_EXPIRE_MINUTES: int = 30
    REFRESH_EXPIRE_DAYS: int = 5
    BLACKLIST_RETENTION_DAYS: int = 7
    SECURE_COOKIES: bool = False  # must be false on localhost
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    # senders must belong to the conversation they post into
    ENFORCE_SENDER_MEMBERSHIP: bool = True
    CREATE_TABLES_ON_STARTUP: bool = False
    DEFAULT_PAGE_SIZE: int = 12
    ALLOWED_HOSTS_RAW: str = os.getenv("ALLOWED_HOSTS", "")

    @property
    def ALLOWED_HOSTS(self) -> List[str]:
        return parser.parse_url_list(self.ALLOWED_HOSTS_RAW, "ALLOWED_HOSTS")

    class Config:
        env_file = ".env"
        extra = "ignore"
        case_sensitive = False


settings = Settings()
