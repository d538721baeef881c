# apps/api/app/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # App
    APP_NAME: str = "HR Staffing API"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Document store: "json" (single file) | "sql" (one JSON row via SQLAlchemy)
    DB_BACKEND: str = "json"
    DB_PATH: str = "db.json"
    DATABASE_URL: str = ""

    # Auth
    JWT_SECRET: str
    JWT_REFRESH_SECRET: str = ""           # boşsa JWT_SECRET + "-refresh"
    JWT_ALGO: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Avatar storage: "local" | "cloudinary"
    IMAGE_STORAGE: str = "local"
    MEDIA_DIR: str = "media"
    MEDIA_URL: str = "/media"
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    UPLOAD_TIMEOUT: float = 30.0

    # "https://foo.com,https://bar.com"
    CORS_ALLOW_ORIGINS: str = ""

    # .env desteği ve fazla env'leri görmezden gel
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def refresh_secret(self) -> str:
        return self.JWT_REFRESH_SECRET or f"{self.JWT_SECRET}-refresh"

settings = Settings()
