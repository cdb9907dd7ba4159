"""
Configuration module with environment overrides and validation.

Only ambient settings live here (agent identity, TLS, logging, debug dumps).
The crawl limits are fixed constants owned by the modules that use them.
"""

import os
import logging
from typing import Dict, List, Any, Optional

from dotenv import load_dotenv

# Initialize logger
log = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()

DEFAULT_USER_AGENT = "EmailFinder/1.0 (+https://github.com/email-finder)"

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigurationError(Exception):
    """Exception raised for configuration errors."""
    pass


class Config:
    """Environment-driven configuration with range validation."""

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize configuration with default values and environment overrides.

        Args:
            env_file: Optional path to an extra .env file to load
        """
        if env_file:
            load_dotenv(env_file, override=True)

        # Agent identity sent with every page request
        self.user_agent = os.getenv("USER_AGENT", DEFAULT_USER_AGENT).strip()

        # SSL verification
        self.insecure_ssl = self._parse_bool("ALLOW_INSECURE_SSL", False)

        # HTTP settings
        self.max_redirects = self._parse_int("MAX_REDIRECTS", 5, 0, 30)
        self.max_body_bytes = self._parse_int(
            "MAX_BODY_BYTES", 5_000_000, 10_000, 50_000_000
        )

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
        self.log_dir = os.getenv("LOG_DIR", "").strip()

        # Debug dumps of fetched pages
        self.debug = self._parse_bool("DEBUG_MODE", False)
        self.debug_dir = os.getenv("DEBUG_DIR", "debug_output").strip() or "debug_output"

    def _parse_int(self, env_var: str, default: int, min_val: int, max_val: int) -> int:
        """Integer setting clamped to ``[min_val, max_val]``; default when unparseable."""
        try:
            value = int(os.getenv(env_var, str(default)))
            if value < min_val:
                log.warning("%s value %d below minimum %d, using minimum", env_var, value, min_val)
                return min_val
            if value > max_val:
                log.warning("%s value %d above maximum %d, using maximum", env_var, value, max_val)
                return max_val
            return value
        except ValueError:
            log.warning("Invalid %s value, using default %d", env_var, default)
            return default

    def _parse_bool(self, env_var: str, default: bool) -> bool:
        value = os.getenv(env_var, "")
        if not value:
            return default
        return value.lower() in {"1", "true", "yes", "y", "on"}

    def as_dict(self) -> Dict[str, Any]:
        """Return configuration as a dictionary."""
        return {k: v for k, v in self.__dict__.items() if not k.startswith('_')}

    def validate(self) -> List[str]:
        """
        Validate configuration and return a list of error messages.

        Returns:
            List of error messages, empty if valid
        """
        errors = []

        if not self.user_agent:
            errors.append("USER_AGENT must not be empty")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of {', '.join(sorted(LOG_LEVELS))}")

        return errors

    def validate_or_raise(self) -> None:
        """
        Validate configuration and raise an exception if invalid.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        errors = self.validate()
        if errors:
            error_msg = "Configuration errors: " + ", ".join(errors)
            log.error(error_msg)
            raise ConfigurationError(error_msg)

    def update_from_dict(self, config_dict: Dict[str, Any]) -> None:
        """
        Update configuration from a dictionary. Unknown keys are ignored.

        Args:
            config_dict: Dictionary of configuration values
        """
        for key, value in config_dict.items():
            if hasattr(self, key):
                setattr(self, key, value)


# Create a global configuration instance
config = Config()
