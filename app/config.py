"""
Configuration settings for the YouTube study notes application.
"""

import os
from pathlib import Path
from dotenv import load_dotenv


# Ensure environment variables are loaded
load_dotenv()


class Config:
    """Base configuration class."""

    # Application info
    APP_NAME = "YouTube Study Notes"
    APP_VERSION = "0.2.0"

    # Data directories
    BASE_DIR = Path(__file__).resolve().parent.parent.absolute()
    DATA_DIR = Path(os.getenv("DATA_DIR", BASE_DIR / "data"))
    LOG_DIR = Path(os.getenv("LOG_DIR", BASE_DIR / "logs"))

    # API keys
    GROQ_API_KEY = os.getenv("GROQ_API_KEY")

    # Note generation model
    NOTES_MODEL = os.getenv("NOTES_MODEL", "llama-3.3-70b-versatile")
    NOTES_MODEL_PROVIDER = os.getenv("NOTES_MODEL_PROVIDER", "groq")
    NOTES_TEMPERATURE = float(os.getenv("NOTES_TEMPERATURE", "0.2"))
    NOTES_MAX_TOKENS = int(os.getenv("NOTES_MAX_TOKENS", "4096"))
    GENERATION_TIMEOUT = float(os.getenv("GENERATION_TIMEOUT", "120"))

    # Transcript acceptance policy
    MIN_TRANSCRIPT_SEGMENTS = int(os.getenv("MIN_TRANSCRIPT_SEGMENTS", "10"))
    MIN_TRANSCRIPT_CHARS = int(os.getenv("MIN_TRANSCRIPT_CHARS", "200"))
    MIN_OVERRIDE_CHARS = int(os.getenv("MIN_OVERRIDE_CHARS", "200"))
    PREFERRED_CAPTION_LANGUAGE = os.getenv("PREFERRED_CAPTION_LANGUAGE", "en")

    # Formatting and chunking
    SEGMENTS_PER_BLOCK = int(os.getenv("SEGMENTS_PER_BLOCK", "12"))
    DIRECT_MODE_MAX_CHARS = int(os.getenv("DIRECT_MODE_MAX_CHARS", "24000"))
    CHUNK_SIZE = int(os.getenv("CHUNK_SIZE", "18000"))
    MAX_CHUNKS = int(os.getenv("MAX_CHUNKS", "6"))

    # Upstream HTTP
    HTTP_MAX_ATTEMPTS = int(os.getenv("HTTP_MAX_ATTEMPTS", "3"))
    HTTP_BACKOFF_BASE = float(os.getenv("HTTP_BACKOFF_BASE", "0.5"))
    HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

    PUBLIC_URL = os.getenv("PUBLIC_URL", "http://localhost:8000")

    # Create data directories if they don't exist
    @classmethod
    def initialize(cls):
        """Initialize the application configuration."""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)

        if not cls.GROQ_API_KEY:
            print("WARNING: GROQ_API_KEY environment variable not set.")
            print("Note generation requests will fail with AI_NOT_CONFIGURED.")


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


# Determine which configuration to use based on environment
def get_config():
    """Get the appropriate configuration based on environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env == "production":
        return ProductionConfig
    else:
        return DevelopmentConfig


# Create a config instance
config = get_config()
config.initialize()
