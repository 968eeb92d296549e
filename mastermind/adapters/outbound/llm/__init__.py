"""Gemini LLM adapter."""

from .gemini_adapter import GeminiLLMAdapter
from .gemini_client import GeminiClient

__all__ = ["GeminiClient", "GeminiLLMAdapter"]
