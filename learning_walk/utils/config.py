"""
Configuration management with environment variables.

This module provides centralized configuration management
with validation and type safety.
"""

import os
import re
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from ..models.constants import STORAGE_KEY


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_COMPOSE_SCHEMES = ["ms-outlook", "mailto"]


class Config:
    """
    Application configuration manager.

    Loads configuration from environment variables (and a local .env
    file, if present) and provides validated access to the values.

    Attributes:
        data_dir: Directory holding the durable storage slot files
        storage_key: Name of the slot holding the observation collection
        output_dir: Base output directory (CSV exports go to output_dir/exports)
        compose_scheme: Mail client URI scheme (ms-outlook or mailto)
        feedback_recipient: Default feedback recipient address, if any
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional rotating log file path

    Examples:
        >>> config = Config()
        >>> if config.validate():
        ...     print(f"Observations stored in: {config.data_dir}")
    """

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        # Load .env file if it exists
        load_dotenv(find_dotenv(usecwd=True))

        # Storage settings
        self._data_dir = Path(os.getenv("LEARNING_WALK_DATA_DIR", "output/learning_walk_data"))
        self._storage_key = os.getenv("LEARNING_WALK_STORAGE_KEY", STORAGE_KEY)

        # Output settings
        self._output_dir = Path(os.getenv("OUTPUT_DIR", "output"))

        # Feedback settings
        self._compose_scheme = os.getenv("MAIL_COMPOSE_SCHEME", "ms-outlook").lower()
        self._feedback_recipient = os.getenv("FEEDBACK_RECIPIENT") or None

        # Logging settings
        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self._log_file = os.getenv("LOG_FILE") or None

    @property
    def data_dir(self) -> Path:
        """Get storage directory path."""
        return self._data_dir

    @property
    def storage_key(self) -> str:
        """Get the storage slot name."""
        return self._storage_key

    @property
    def output_dir(self) -> Path:
        """Get output directory path."""
        return self._output_dir

    @property
    def export_dir(self) -> Path:
        """Get the directory CSV exports are written to."""
        return self._output_dir / "exports"

    @property
    def compose_scheme(self) -> str:
        """Get the mail-compose URI scheme."""
        return self._compose_scheme

    @property
    def feedback_recipient(self) -> Optional[str]:
        """Get the default feedback recipient address."""
        return self._feedback_recipient

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self._log_level

    @property
    def log_file(self) -> Optional[str]:
        """Get log file path."""
        return self._log_file

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all configuration is valid

        Raises:
            ValueError: If validation fails
        """
        errors = []

        if not self._storage_key:
            errors.append("LEARNING_WALK_STORAGE_KEY must not be empty")
        elif not re.match(r'^[A-Za-z0-9_.-]+$', self._storage_key):
            errors.append(
                "LEARNING_WALK_STORAGE_KEY may only contain letters, digits, '_', '.' and '-'"
            )

        if self._compose_scheme not in VALID_COMPOSE_SCHEMES:
            errors.append(
                f"MAIL_COMPOSE_SCHEME must be one of: {', '.join(VALID_COMPOSE_SCHEMES)}"
            )

        if self._feedback_recipient and "@" not in self._feedback_recipient:
            errors.append("FEEDBACK_RECIPIENT must be a valid email address")

        if self._log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"LOG_LEVEL must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ValueError(error_msg)

        return True

    def create_output_directories(self, data_dir: Optional[Path] = None):
        """
        Create storage and export directories if they don't exist.

        Args:
            data_dir: Storage directory to use instead of the configured one
        """
        for directory in (data_dir or self.data_dir, self.export_dir):
            directory.mkdir(parents=True, exist_ok=True)
