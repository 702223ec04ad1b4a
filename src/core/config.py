from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Environment setting
    ENVIRONMENT: str = Field(
        "development", description="Environment: development, staging, production"
    )

    # API settings
    API_PREFIX: str = Field("")
    DEBUG: bool = Field(False)
    ALLOWED_ORIGINS: str = Field("*")
    LOG_LEVEL: str = Field("INFO")

    # Database settings
    DB_HOST: str = Field("localhost")
    DB_PORT: int = Field(5432)
    DB_USER: str = Field("")
    DB_PASSWORD: str = Field("")
    DB_NAME: str = Field("dental_telehealth")
    DB_DRIVER: str = Field("postgresql+asyncpg")

    SQLITE_MODE: bool = False

    # Jwt Security settings
    JWT_SECRET: str = Field("")
    JWT_ALGORITHM: str = Field("HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60 * 24)

    # Appwrite object storage
    APPWRITE_ENDPOINT: str = Field("https://cloud.appwrite.io/v1")
    APPWRITE_PROJECT_ID: str = Field("")
    APPWRITE_API_KEY: str = Field("")
    APPWRITE_BUCKET_ID: str = Field("")

    # Upload limits
    MAX_UPLOAD_SIZE: int = Field(10 * 1024 * 1024, description="Bytes per file")
    MAX_DENTAL_IMAGES: int = Field(10)
    MAX_REPORT_IMAGES: int = Field(10)

    # Rate limiting
    QUERY_CREATE_RATE_LIMIT: str = Field("20/minute")

    # Uvicorn settings
    UVICORN_HOST: str = Field("0.0.0.0")
    UVICORN_PORT: int = Field(8000)
    WORKERS_COUNT: int = Field(1)
    RELOAD: bool = Field(False)

    @property
    def POSTGRESQL_DATABASE_URL(self) -> str:
        return (
            f"{self.DB_DRIVER}://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def SQLITE_DATABASE_URL(self) -> str:
        return f"sqlite+aiosqlite:///{self.DB_NAME}.db"

    @property
    def DATABASE_URL(self) -> str:
        return (
            self.SQLITE_DATABASE_URL
            if self.SQLITE_MODE
            else self.POSTGRESQL_DATABASE_URL
        )

    @property
    def CORS_ORIGINS(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @field_validator("LOG_LEVEL")
    def validate_log_level(cls, v: str) -> str:
        return v.upper()

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
