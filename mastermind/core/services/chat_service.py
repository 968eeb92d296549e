"""Chat orchestration: context assembly, prompting and tool-enabled generation."""

import logging
import threading

from ..domain import ChatResponse, Document
from ..domain.exceptions import EmptyQueryError, QueryTooLongError
from ..domain.utils import normalize_path, normalize_text
from ..ports.document_store_port import DocumentStorePort
from ..ports.llm_port import LLMPort
from .context_service import ContextAssembler
from .prompts import MASTERMIND_SYSTEM_PROMPT, build_chat_prompt
from .retrieval_service import RetrievalService
from .toolbox import VaultToolbox

logger = logging.getLogger(__name__)

MAX_QUERY_LENGTH = 4000


class ChatService:
    """Answers questions about the vault.

    Gathers context for the query, hands the query and context to the LLM,
    and lets the model call the vault tools while it answers.
    """

    def __init__(
        self,
        store: DocumentStorePort,
        assembler: ContextAssembler,
        retrieval: RetrievalService,
        llm: LLMPort,
        allow_note_creation: bool = True,
    ) -> None:
        self.store = store
        self.assembler = assembler
        self.retrieval = retrieval
        self.llm = llm
        self.allow_note_creation = allow_note_creation

    @staticmethod
    def validate_query(query: str) -> str:
        """Normalize ``query`` and reject empty or oversized input."""
        clean_query = normalize_text(query)
        if not clean_query:
            raise EmptyQueryError("Query cannot be empty or whitespace only")
        if len(clean_query) > MAX_QUERY_LENGTH:
            raise QueryTooLongError(
                f"Query exceeds {MAX_QUERY_LENGTH} characters",
                context={"length": len(clean_query)},
            )
        return clean_query

    def resolve_active(self, active_path: str | None = None) -> Document | None:
        """Return the explicitly requested note, else the store's active note."""
        if active_path:
            return Document(path=normalize_path(active_path))
        return self.store.get_active()

    def build_context(
        self,
        query: str,
        active_path: str | None = None,
        cancel_event: threading.Event | None = None,
    ) -> tuple[str, list[str]]:
        """Assemble context for ``query`` without calling the LLM.

        Returns:
            The context string and the paths of the notes it includes.
        """
        active = self.resolve_active(active_path)
        blocks = self.assembler.collect_blocks(query, active=active, cancel_event=cancel_event)
        return self.assembler.render_blocks(blocks), [block.path for block in blocks]

    def ask(
        self,
        query: str,
        active_path: str | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ChatResponse:
        """Answer ``query`` with vault context.

        Args:
            query: The user's question.
            active_path: Note currently open; defaults to the store's active note.
            cancel_event: Set by the caller to abandon context assembly.

        Returns:
            ChatResponse with the answer, context, sources and tool calls.
        """
        clean_query = self.validate_query(query)
        context, sources = self.build_context(clean_query, active_path, cancel_event)
        logger.info("Asking LLM with %d context notes", len(sources))

        toolbox = VaultToolbox(self.retrieval, allow_create=self.allow_note_creation)
        text = self.llm.generate(
            build_chat_prompt(clean_query, context),
            system_prompt=MASTERMIND_SYSTEM_PROMPT,
            tools=toolbox.specs,
            tool_handler=toolbox.dispatch,
        )

        return ChatResponse(
            text=text,
            context=context,
            sources=sources,
            tool_calls=list(toolbox.invocations),
        )
