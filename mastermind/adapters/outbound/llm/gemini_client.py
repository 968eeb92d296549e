"""Google Gemini client with function calling, using the google-genai SDK."""

import logging
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from ....common.rate_limiter import RateLimiter
from ....core.domain import ToolSpec
from ....core.domain.exceptions import (
    LLMConnectionError,
    LLMGenerationError,
    LLMRateLimitError,
    MissingAPIKeyError,
)
from ....core.domain.utils import normalize_text
from ....core.ports.llm_port import ToolHandler

if TYPE_CHECKING:
    from google import genai

logger = logging.getLogger(__name__)

SAFETY_REFUSAL = "I apologize, but I cannot provide a response to that query."


def _is_rate_limit(exc: Exception) -> bool:
    if getattr(exc, "code", None) == 429:
        return True
    message = str(exc).lower()
    return "quota" in message or "rate" in message or "resource_exhausted" in message


class GeminiClient:
    """Client for the Gemini API.

    Runs a manual function-calling loop: when the model requests tool
    calls, each call is executed through the tool handler and the results
    are sent back until the model answers in text or ``max_tool_rounds``
    is reached.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        rate_limiter: RateLimiter | None = None,
        temperature: float = 0.7,
        max_tokens: int = 2048,
        max_tool_rounds: int = 5,
        max_retries: int = 3,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            api_key: Google AI API key.
            model: Model to use.
            rate_limiter: Optional limiter applied to every request.
            temperature: Sampling temperature (0.0-1.0).
            max_tokens: Maximum tokens to generate per request.
            max_tool_rounds: Maximum model turns that may request tools.
            max_retries: Attempts per request when rate limited.
        """
        self.api_key = api_key
        self.model_name = model
        self.rate_limiter = rate_limiter
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_tool_rounds = max_tool_rounds
        self.max_retries = max_retries
        self._client = None

    def _get_client(self) -> "genai.Client":
        """Lazy load the Gemini client."""
        if self._client is None:
            if not self.api_key:
                raise MissingAPIKeyError(
                    "Google API key not set. Get one at https://aistudio.google.com/ "
                    "and set GOOGLE_API_KEY in your .env file."
                )

            from google import genai

            self._client = genai.Client(api_key=self.api_key)
            logger.info("Gemini client initialized for model: %s", self.model_name)

        return self._client

    @staticmethod
    def _build_tools(tools: Sequence[ToolSpec]) -> list[Any]:
        from google.genai import types

        if not tools:
            return []
        declarations = [
            types.FunctionDeclaration(
                name=spec.name,
                description=spec.description,
                parameters=spec.parameters or None,
            )
            for spec in tools
        ]
        return [types.Tool(function_declarations=declarations)]

    def _request(self, contents: list[Any], config: Any) -> Any:
        """Send one generate_content request, retrying on rate limits."""
        client = self._get_client()

        for attempt in range(self.max_retries):
            if self.rate_limiter is not None:
                self.rate_limiter.acquire()
            try:
                return client.models.generate_content(
                    model=self.model_name,
                    contents=contents,
                    config=config,
                )
            except Exception as exc:
                if not _is_rate_limit(exc):
                    raise LLMConnectionError(
                        f"Gemini request failed: {exc}",
                        cause=exc,
                        context={"model": self.model_name},
                    ) from exc
                if attempt < self.max_retries - 1:
                    wait_time = 2**attempt
                    logger.warning("Rate limit hit, retrying in %ss...", wait_time)
                    time.sleep(wait_time)
                else:
                    raise LLMRateLimitError(
                        "Rate limit reached. Please wait a moment and try again.",
                        cause=exc,
                        context={"model": self.model_name, "attempts": self.max_retries},
                    ) from exc

        raise LLMGenerationError("Failed to generate response after retries.")

    def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        tools: Sequence[ToolSpec] = (),
        tool_handler: ToolHandler | None = None,
    ) -> str:
        """Generate a response, executing tool calls the model makes.

        Args:
            prompt: User prompt including the vault context.
            system_prompt: Optional system instructions.
            tools: Tools the model may call.
            tool_handler: Executes a tool call and returns its result.

        Returns:
            The model's final text response.
        """
        from google.genai import types

        tool_declarations = self._build_tools(tools) if tool_handler is not None else []
        config = types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
            tools=tool_declarations or None,
            automatic_function_calling=types.AutomaticFunctionCallingConfig(disable=True),
        )
        contents: list[Any] = [
            types.Content(role="user", parts=[types.Part.from_text(text=normalize_text(prompt))])
        ]

        for round_number in range(self.max_tool_rounds + 1):
            response = self._request(contents, config)

            if not response.candidates:
                return SAFETY_REFUSAL

            function_calls = response.function_calls or []
            if not function_calls or tool_handler is None:
                return normalize_text(response.text)

            if round_number == self.max_tool_rounds:
                break

            contents.append(response.candidates[0].content)
            parts = []
            for call in function_calls:
                result = tool_handler(call.name, dict(call.args or {}))
                parts.append(types.Part.from_function_response(name=call.name, response=result))
            contents.append(types.Content(role="user", parts=parts))

        raise LLMGenerationError(
            "Model kept requesting tools without answering",
            context={"max_tool_rounds": self.max_tool_rounds},
        )
