import sys

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    CORS_ORIGINS: list[str] = [
        "http://localhost:4200",
        "http://localhost:5173",
    ]

    STORAGE_BACKEND: str = "file"
    STORAGE_DIR: str = "data"
    STORAGE_KEY: str = "employees"
    STORAGE_QUOTA_BYTES: int = 5 * 1024 * 1024

    PHOTO_MAX_BYTES: int = 2 * 1024 * 1024

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


settings = Settings()
