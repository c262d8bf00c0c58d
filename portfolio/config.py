from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_user: str = ""
    db_password: str = ""
    db_name: str = ""
    # TiDB Serverless listens on 4000, not the MySQL default
    db_port: int = 4000
    db_ssl_ca: Optional[str] = None
    db_connect_timeout: int = 10

    services_enabled: bool = False
    fallback_name: str = "Rizwan Ahmed"

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"  # .env file is in the project root
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
