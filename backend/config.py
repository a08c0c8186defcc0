# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"
BACKEND_DIR = Path(__file__).resolve().parent

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./orders.db"

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Static entry page and uploaded images
    PUBLIC_DIR: Path = BACKEND_DIR / "public"
    UPLOAD_DIR: Optional[Path] = None
    UPLOAD_URL_PREFIX: str = "/uploads"

    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    JPEG_QUALITY: int = 85

    class Config:
        env_file: ClassVar[str] = str(env_path)

    @property
    def upload_dir(self) -> Path:
        return self.UPLOAD_DIR or self.PUBLIC_DIR / "uploads"

settings = Settings()
