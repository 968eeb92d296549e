"""Domain models for Mastermind.

- document: Document, ScoredCandidate, ContextBlock and BlockLabel
- chat: ToolSpec, ToolInvocation and ChatResponse

All models are re-exported here:

    from mastermind.core.domain import Document, ContextBlock
"""

from .chat import ChatResponse, ToolInvocation, ToolSpec
from .document import BlockLabel, ContextBlock, Document, ScoredCandidate

__all__ = [
    # Document models
    "Document",
    "ScoredCandidate",
    "BlockLabel",
    "ContextBlock",
    # Chat models
    "ToolSpec",
    "ToolInvocation",
    "ChatResponse",
]
