"""Configuration management implementation.

Contains the AppConfig class implementation.
Separated from __init__.py so the singleton lives in one place.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class AppConfig:
    """Application configuration (Singleton pattern).

    Centralizes all configuration management with environment variable support.

    This class should only be instantiated once (Singleton pattern).
    Use the `config` instance from __init__.py instead of creating new instances.
    """

    _instance: "AppConfig | None" = None
    _initialized: bool

    def __new__(cls) -> "AppConfig":
        """Singleton implementation - only one instance allowed."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        if self._initialized:
            return

        self._load_from_env()
        self._initialized = True
        logger.info("Configuration initialized")

    def _load_from_env(self) -> None:
        """Internal method to load values from environment variables."""
        # Project paths
        self.project_root = self._get_project_root()

        # URL layout shared by connections and elements
        self.api_base_path = os.getenv("API_BASE_PATH", "/api").rstrip("/")

        # Default cut applied to newly pooled connections (JSON object)
        self.connection_default_cut = self._parse_cut(os.getenv("CONNECTION_DEFAULT_CUT", ""))

        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    def reload(self) -> None:
        """Force reload configuration from environment variables."""
        logger.info("Reloading configuration from environment...")
        self._load_from_env()

    def _get_project_root(self) -> Path:
        """Get project root directory. Assumes config is in src/core/config/"""
        return Path(__file__).parent.parent.parent.parent

    def _parse_cut(self, raw: str) -> dict[str, Any] | None:
        """Parse a JSON object cut, returning None when unset or unusable."""
        if not raw.strip():
            return None
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("CONNECTION_DEFAULT_CUT is not valid JSON; ignoring it")
            return None
        if not isinstance(value, dict):
            logger.warning("CONNECTION_DEFAULT_CUT must be a JSON object; ignoring it")
            return None
        return value

    def validate(self) -> list[str]:
        """Validate configuration and return list of issues."""
        issues = []
        if not self.api_base_path.startswith("/"):
            issues.append(f"API_BASE_PATH must start with '/': {self.api_base_path!r}")
        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            issues.append(f"Unknown LOG_LEVEL: {self.log_level}")
        return issues

    def to_dict(self) -> dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "api_base_path": self.api_base_path,
            "connection_default_cut": self.connection_default_cut,
            "log_level": self.log_level,
        }


__all__ = ["AppConfig"]
