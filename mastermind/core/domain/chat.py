"""Chat and tool-calling models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ToolSpec:
    """Declaration of an operation the AI client may call mid-conversation.

    Attributes:
        name: Tool name the model refers to.
        description: What the tool does, shown to the model.
        parameters: OpenAPI-style object schema for the arguments.
    """

    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolInvocation:
    """Record of one tool call made while answering a question."""

    name: str
    arguments: dict[str, Any]
    result: dict[str, Any]

    @property
    def failed(self) -> bool:
        return "error" in self.result


@dataclass
class ChatResponse:
    """Answer produced by the chat orchestrator.

    Attributes:
        text: The model's response.
        context: Context string sent alongside the query.
        sources: Paths of notes included in the context, active note first.
        tool_calls: Tool invocations made by the model, in call order.
    """

    text: str
    context: str
    sources: list[str] = field(default_factory=list)
    tool_calls: list[ToolInvocation] = field(default_factory=list)
