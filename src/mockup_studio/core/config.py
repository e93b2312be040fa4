"""Configuration management for Mockup Studio.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the MOCKUP_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (MOCKUP_* prefix)
2. .env file in the project root
3. Default values defined in MockupConfig

Example .env file:
    MOCKUP_GEMINI_API_KEY=your-key-here
    MOCKUP_GEMINI_MODEL=gemini-2.5-flash-image
    MOCKUP_DATA_DIR=data
    MOCKUP_INITIAL_CREDITS=3

When ``MOCKUP_GEMINI_API_KEY`` is empty the Gemini SDK falls back to its own
``GOOGLE_API_KEY`` / ``GEMINI_API_KEY`` environment variables.

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.

Usage Example
-------------
    from mockup_studio.core.config import config

    print(config.gemini_model)
    print(config.store_path)

Directory Management
--------------------
The configuration automatically creates required directories on initialization:
- data_dir: For the local credit store
- downloads_dir: For generated mockups offered as downloads
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MockupConfig(BaseSettings):
    """Main configuration for Mockup Studio.

    Attributes
    ----------
    Generation Settings:
        gemini_api_key : str
            API key for the Gemini API (empty = SDK environment fallback)
        gemini_model : str
            Image-capable Gemini model identifier

    Credits:
        initial_credits : int
            Credits granted to a device with no stored state

    Paths:
        data_dir : Path
            Directory holding the local credit store
        store_filename : str
            File name of the local key-value store inside data_dir
        downloads_dir : Path
            Directory where generated mockups are written for download

    Server Settings:
        server_host, server_port : REST API bind address
        gradio_server_name, gradio_server_port, gradio_share : UI bind settings
        log_level : Logging level name for the entry points

    Examples
    --------
        >>> custom_config = MockupConfig(
        ...     gemini_model="gemini-2.5-flash-image",
        ...     initial_credits=10,
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MOCKUP_",
        case_sensitive=False,
        extra="ignore",
    )

    # Generation settings
    gemini_api_key: str = Field(
        default="",
        description="Gemini API key (empty = use GOOGLE_API_KEY / GEMINI_API_KEY)",
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash-image",
        description="Image-capable Gemini model used for mockups",
    )

    # Credits
    initial_credits: int = Field(
        default=3,
        description="Credits granted when no credit state has been stored",
        ge=0,
    )

    # Paths
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory for the local credit store",
    )
    store_filename: str = Field(
        default="local_store.json",
        description="Key-value store file name inside data_dir",
    )
    downloads_dir: Path = Field(
        default=Path("data/downloads"),
        description="Directory for generated mockups offered as downloads",
    )

    # REST API settings
    server_host: str = Field(default="0.0.0.0", description="API bind address")
    server_port: int = Field(default=8000, description="API port", ge=1024, le=65535)

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level for the UI and API entry points",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create required directories."""
        super().__init__(**kwargs)

        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.downloads_dir.mkdir(parents=True, exist_ok=True)

    @property
    def store_path(self) -> Path:
        """Path of the local key-value store file."""
        return self.data_dir / self.store_filename


# Global configuration instance, loaded from MOCKUP_* environment variables and .env.
config = MockupConfig()
