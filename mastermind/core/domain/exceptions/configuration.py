"""Configuration-related exceptions for Mastermind."""

from .base import MastermindError


class ConfigurationError(MastermindError):
    """Configuration or environment variable errors."""

    error_code = "MM_CFG_001"


class MissingAPIKeyError(ConfigurationError):
    """Required API key is not configured."""

    error_code = "MM_CFG_002"


class InvalidConfigurationError(ConfigurationError):
    """Configuration value is invalid."""

    error_code = "MM_CFG_003"
