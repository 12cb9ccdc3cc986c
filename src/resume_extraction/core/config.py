from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Resume Extraction Service"
    app_version: str = "0.1.0"
    debug: bool = False

    # Uploads
    max_upload_size_mb: int = 10
    allowed_extensions: set[str] = {".pdf", ".png", ".jpg", ".jpeg", ".webp", ".txt"}

    # AI / Gemini
    google_ai_api_key: str = ""
    gemini_model: str = "gemini-2.5-pro"
    gemini_temperature: float = 0.1
    default_document_mime_type: str = "application/pdf"


@lru_cache
def get_settings() -> Settings:
    return Settings()
