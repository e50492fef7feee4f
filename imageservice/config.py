"""Configuration management for the image service."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Application configuration."""

    # Application
    PORT: int = int(os.getenv("PORT", "8080"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./imageservice.db")

    # Local state (migration lock)
    DATA_DIR: Path = Path(os.getenv("DATA_DIR", "./data"))

    # Image URL verification
    VERIFY_CONNECT_TIMEOUT_MS: int = int(os.getenv("VERIFY_CONNECT_TIMEOUT_MS", "5000"))
    VERIFY_READ_TIMEOUT_MS: int = int(os.getenv("VERIFY_READ_TIMEOUT_MS", "5000"))
    VERIFY_MAX_WORKERS: int = int(os.getenv("VERIFY_MAX_WORKERS", "8"))
    VERIFY_USER_AGENT: str = os.getenv("VERIFY_USER_AGENT", "ImageService Verifier/0.1")

    @classmethod
    def ensure_data_dir(cls) -> None:
        """Ensure the data directory exists."""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)


config = Config()
