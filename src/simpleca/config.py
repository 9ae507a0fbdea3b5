"""
Application configuration and environment variables.

This module unifies configuration using pydantic-settings.
Variables can come from:
1. .env file
2. System environment variables (have priority)
3. Default values

Naming convention:
- In Python code: snake_case (storage_dir)
- In .env or ENV vars: UPPER_CASE (STORAGE_DIR)
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from simpleca import __version__


class Settings(BaseSettings):
    """
    Unified application configuration.

    Example:
        # In .env or as environment variable:
        STORAGE_DIR=/var/lib/simpleca
        LOG_LEVEL=DEBUG
        DEFAULT_ROOT_COMMON_NAME="Home Lab Root"
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================================================
    # PROJECT SETTINGS
    # ============================================================================
    project_name: str = Field(default="SimpleCA", description="Project name")
    project_description: str = Field(
        default="Private certificate authority for root CA and leaf certificate management",
        description="Project description",
    )
    project_version: str = Field(default=__version__, description="Project version")

    # ============================================================================
    # SERVER SETTINGS
    # ============================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, description="Server port")
    debug: bool = Field(default=False, description="Debug mode")
    enable_docs: bool = Field(
        default=False, description="Enable API documentation (Swagger/ReDoc)"
    )

    # ============================================================================
    # LOGGING SETTINGS
    # ============================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | trace_id={extra[trace_id]} | {name}:{function}:{line} - {message}",  # noqa: E501
        description="Log format",
    )
    logger_enqueue: bool = Field(
        default=False, description="Enqueue logs using multiprocessing"
    )

    # ============================================================================
    # CORS SETTINGS
    # ============================================================================
    allowed_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        description="Allowed origins for CORS (comma-separated)",
    )
    cors_allowed_methods: str = Field(
        default="GET,POST,OPTIONS", description="Allowed HTTP methods for CORS"
    )
    cors_allowed_headers: str = Field(
        default="Content-Type", description="Allowed headers for CORS"
    )

    # ============================================================================
    # STORAGE SETTINGS
    # ============================================================================
    infrastructure_provider: str = Field(
        default="local",
        description="Infrastructure provider (only 'local' is supported)",
    )
    storage_dir: str = Field(
        default="./data",
        description="Managed storage directory for keys, certificates and the registry",
    )
    root_key_file: str = Field(
        default="root-key.pem", description="Root CA private key file name"
    )
    root_cert_file: str = Field(
        default="root-crt.pem", description="Root CA certificate file name (PEM)"
    )
    root_cert_der_file: str = Field(
        default="root-crt.der", description="Root CA certificate file name (DER)"
    )
    registry_file: str = Field(
        default="certs.json", description="Leaf certificate registry document"
    )

    # ============================================================================
    # CERTIFICATE DEFAULTS
    # ============================================================================
    default_root_common_name: str = Field(
        default="SimpleCA Root", description="Root CA common name when none is given"
    )
    default_root_days: int = Field(
        default=3650, description="Root CA validity in days when none is given"
    )
    default_leaf_days: int = Field(
        default=365, description="Leaf certificate validity in days when none is given"
    )
    default_key_size: int = Field(
        default=2048, description="RSA key size when none is given"
    )
    default_signature_algorithm: str = Field(
        default="sha256", description="Root CA signature digest when none is given"
    )

    # ============================================================================
    # HELPER METHODS
    # ============================================================================

    def get_allowed_origins(self) -> list[str]:
        """
        Get list of allowed origins for CORS.

        Returns:
            list[str]: List of allowed origin URLs.
        """
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    def get_cors_allowed_methods(self) -> list[str]:
        """
        Get list of allowed HTTP methods for CORS.

        Returns:
            list[str]: List of allowed HTTP methods. Returns ["*"] if all methods are allowed.
        """
        if self.cors_allowed_methods == "*":
            return ["*"]
        return [method.strip() for method in self.cors_allowed_methods.split(",")]

    def get_cors_allowed_headers(self) -> list[str]:
        """
        Get list of allowed headers for CORS.

        Returns:
            list[str]: List of allowed headers. Returns ["*"] if all headers are allowed.
        """
        if self.cors_allowed_headers == "*":
            return ["*"]
        return [header.strip() for header in self.cors_allowed_headers.split(",")]

    def get_storage_path(self) -> Path:
        """Managed storage directory as a Path."""
        return Path(self.storage_dir)


# ============================================================================
# SINGLETON PATTERN - Global settings instance
# ============================================================================


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings (LRU cached).

    This function is cached, so the .env file is only read once.
    To refresh the configuration, clear the cache:
        get_settings.cache_clear()

    Returns:
        Settings: Application configuration instance.
    """
    return Settings()


settings = get_settings()
