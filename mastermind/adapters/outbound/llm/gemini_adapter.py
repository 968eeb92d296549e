"""Gemini client adapter implementing the LLM port."""

from __future__ import annotations

from collections.abc import Sequence

from ....core.domain import ToolSpec
from ....core.ports.llm_port import LLMPort, ToolHandler
from .gemini_client import GeminiClient


class GeminiLLMAdapter(LLMPort):
    """Adapter that bridges the Gemini client to the LLM port."""

    def __init__(self, client: GeminiClient) -> None:
        self.client = client

    @property
    def model_name(self) -> str:
        return self.client.model_name

    def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        tools: Sequence[ToolSpec] = (),
        tool_handler: ToolHandler | None = None,
    ) -> str:
        return self.client.generate(
            prompt,
            system_prompt=system_prompt,
            tools=tools,
            tool_handler=tool_handler,
        )
