from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Environment setting
    ENVIRONMENT: str = Field(
        "development", description="Environment: development, testing, production"
    )

    # API settings
    API_PREFIX: str = Field("/api")
    DEBUG: bool = Field(False)
    ALLOWED_ORIGINS: str = Field("http://localhost:3000")

    # Database settings
    DB_HOST: str = Field("localhost")
    DB_PORT: int = Field(5432)
    DB_USER: str = Field("")
    DB_PASSWORD: str = Field("")
    DB_NAME: str = Field("nutrition")
    DB_DRIVER: str = Field("postgresql+asyncpg")

    SQLITE_MODE: bool = False

    # Uvicorn settings
    UVICORN_HOST: str = Field("0.0.0.0")
    UVICORN_PORT: int = Field(5000)
    WORKERS_COUNT: int = Field(1)
    RELOAD: bool = Field(True)

    # Attachment storage
    UPLOAD_DIR: str = Field("uploads")
    FOLLOW_UP_ALLOWED_EXTENSIONS: str = Field(".pdf,.doc,.docx,.jpg,.png")

    # Screening settings
    OP_ENFORCE_RESERVED_FIELDS: bool = Field(
        False, description="Drop OP custom fields that shadow fixed columns"
    )

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
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @field_validator("ALLOWED_ORIGINS")
    def validate_origins(cls, v: str) -> List[str]:
        return v.split(",") if v else []

    @field_validator("FOLLOW_UP_ALLOWED_EXTENSIONS")
    def validate_extensions(cls, v: str) -> List[str]:
        return [ext.strip().lower() for ext in v.split(",") if ext.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
