"""Validation exceptions for Mastermind."""

from .base import MastermindError


class ValidationError(MastermindError):
    """Input validation failed."""

    error_code = "MM_VAL_001"


class EmptyQueryError(ValidationError):
    """Query cannot be empty or whitespace only."""

    error_code = "MM_VAL_002"


class QueryTooLongError(ValidationError):
    """Query exceeds maximum allowed length."""

    error_code = "MM_VAL_003"
