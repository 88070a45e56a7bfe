from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DB_HOST: str = "127.0.0.1"
    DB_PORT: int = 3306
    DB_NAME: str = "workspace_db"
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DATABASE_URL_OVERRIDE: Optional[str] = None

    JWT_SECRET: str = "dev-secret"
    JWT_ALGORITHM: str = "HS256"

    CORS_ALLOW_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    ACTION_HISTORY_RETENTION_LIMIT: int = 100
    ACTION_HISTORY_DEFAULT_LIMIT: int = 50
    ACTION_HISTORY_MAX_LIMIT: int = 200
    ACTION_REPLAY_TIMEOUT_SECONDS: float = 10.0

    # production keeps replay failure causes out of responses
    EXPOSE_ERROR_DETAIL: bool = False

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"mysql+aiomysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?charset=utf8mb4"
        )

    @property
    def ALEMBIC_URL(self) -> str:
        return (
            f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}?charset=utf8mb4"
        )

settings = Settings()
