"""Configuration for the eSocial relay service."""
import os


class Settings:
    """Application settings from environment variables."""

    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Relay behaviour
    REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))
    DEFAULT_EVENT_TYPE: str = os.getenv("DEFAULT_EVENT_TYPE", "S-5002")

    # Service info
    SERVICE_NAME: str = "esocial-relay"
    VERSION: str = "2.1.0"


settings = Settings()
