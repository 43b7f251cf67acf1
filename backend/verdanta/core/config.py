from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Auth
    SECRET_KEY: str = "super-secret-key-change-in-prod"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Database (async driver URL)
    DATABASE_URL: str = "sqlite+aiosqlite:///./verdanta.db"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # watsonx.ai backend; unset URL keeps the client on local analytics
    WATSONX_URL: Optional[str] = None
    WATSONX_API_KEY: Optional[str] = None
    WATSONX_TIMEOUT: float = 10.0

    class Config:
        env_file = ".env"


settings = Settings()
