"""LLM Port Interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

from ..domain import ToolSpec

ToolHandler = Callable[[str, dict[str, Any]], dict[str, Any]]


class LLMPort(ABC):
    """Abstract interface for LLM providers."""

    @abstractmethod
    def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        tools: Sequence[ToolSpec] = (),
        tool_handler: ToolHandler | None = None,
    ) -> str:
        """Generate a response, letting the model call ``tools`` through ``tool_handler``."""
        ...
