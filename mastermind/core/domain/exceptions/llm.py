"""LLM exceptions for Mastermind."""

from .base import MastermindError


class LLMError(MastermindError):
    """Base error for LLM operations."""

    error_code = "MM_LLM_001"


class LLMConnectionError(LLMError):
    """Failed to reach the LLM provider.

    Common causes:
    - Invalid API key
    - Network issues
    - Service unavailable
    """

    error_code = "MM_LLM_002"


class LLMRateLimitError(LLMError):
    """Rate limit still exceeded after retries."""

    error_code = "MM_LLM_003"


class LLMGenerationError(LLMError):
    """The provider returned no usable response.

    Common causes:
    - Content filtered by safety settings
    - Tool-calling loop did not converge
    """

    error_code = "MM_LLM_004"


class ToolExecutionError(LLMError):
    """A tool requested by the model could not be executed."""

    error_code = "MM_LLM_005"
