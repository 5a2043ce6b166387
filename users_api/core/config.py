# Standard library imports
import os
from typing import Final, Optional


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Vault Configuration
        self.vault_addr: Final[str] = os.getenv("VAULT_ADDR", "http://localhost:8200")
        self.vault_token: Final[str] = os.getenv("VAULT_TOKEN", "")
        self.vault_secret_mount: Final[str] = os.getenv("VAULT_SECRET_MOUNT", "secret")
        self.vault_secret_path: Final[str] = os.getenv("VAULT_SECRET_PATH", "mongodb")

        # Database Configuration
        self.db_host: Final[str] = os.getenv("DB_HOST", "localhost")
        self.db_port: Final[str] = os.getenv("DB_PORT", "27017")
        self.db_name: Final[str] = os.getenv("DB_NAME", "devenv")
        self.db_min_pool_size: Final[int] = int(os.getenv("DB_MIN_POOL_SIZE", "10"))
        self.db_max_pool_size: Final[int] = int(os.getenv("DB_MAX_POOL_SIZE", "100"))
        self.db_max_idle_minutes: Final[int] = int(os.getenv("DB_MAX_IDLE_MINUTES", "30"))

        # Connection retry policy
        self.db_connect_max_attempts: Final[int] = int(os.getenv("DB_CONNECT_MAX_ATTEMPTS", "5"))
        self.db_connect_initial_interval: Final[float] = float(
            os.getenv("DB_CONNECT_INITIAL_INTERVAL", "5")
        )
        self.db_connect_max_interval: Final[float] = float(
            os.getenv("DB_CONNECT_MAX_INTERVAL", "60")
        )
        self.db_shutdown_timeout: Final[float] = float(os.getenv("DB_SHUTDOWN_TIMEOUT", "10"))

        # Security
        self.password_hash_rounds: Final[int] = int(os.getenv("PASSWORD_HASH_ROUNDS", "12"))

        # HTTP server
        self.port: Final[int] = int(os.getenv("PORT", "8080"))
        self.app_mode: Final[str] = os.getenv("APP_MODE", "debug").lower()
        self.rate_limit_per_second: Final[int] = int(os.getenv("RATE_LIMIT_PER_SECOND", "1"))

    @property
    def debug(self) -> bool:
        """True unless the service runs in release mode"""
        return self.app_mode != "release"


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
