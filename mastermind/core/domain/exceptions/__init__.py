"""Exception hierarchy for Mastermind.

Every exception carries an error code, the location it was raised from,
an optional cause, and serializes to JSON for structured logging.

    from mastermind.core.domain.exceptions import DocumentNotFoundError
"""

from .base import ExceptionContext, MastermindError, OperationCancelledError
from .configuration import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingAPIKeyError,
)
from .document_store import (
    DocumentAlreadyExistsError,
    DocumentNotFoundError,
    DocumentReadError,
    DocumentStoreError,
    InvalidDocumentPathError,
)
from .llm import (
    LLMConnectionError,
    LLMError,
    LLMGenerationError,
    LLMRateLimitError,
    ToolExecutionError,
)
from .validation import (
    EmptyQueryError,
    QueryTooLongError,
    ValidationError,
)

__all__ = [
    # Base
    "ExceptionContext",
    "MastermindError",
    "OperationCancelledError",
    # Configuration
    "ConfigurationError",
    "MissingAPIKeyError",
    "InvalidConfigurationError",
    # Document store
    "DocumentStoreError",
    "DocumentNotFoundError",
    "DocumentAlreadyExistsError",
    "DocumentReadError",
    "InvalidDocumentPathError",
    # LLM
    "LLMError",
    "LLMConnectionError",
    "LLMRateLimitError",
    "LLMGenerationError",
    "ToolExecutionError",
    # Validation
    "ValidationError",
    "EmptyQueryError",
    "QueryTooLongError",
]
