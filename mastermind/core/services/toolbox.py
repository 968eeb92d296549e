"""Vault operations exposed to the AI client as callable tools."""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from ..domain import ToolInvocation, ToolSpec
from ..domain.exceptions import MastermindError
from .retrieval_service import RetrievalService

logger = logging.getLogger(__name__)

LIST_FILES = ToolSpec(
    name="list_files",
    description="List the paths of every note in the user's vault.",
)

SEARCH_VAULT = ToolSpec(
    name="search_vault",
    description=(
        "Case-insensitive full-text search over note paths and content. "
        "Returns at most 20 matching note paths."
    ),
    parameters={
        "type": "OBJECT",
        "properties": {
            "query": {"type": "STRING", "description": "Text to search for."},
        },
        "required": ["query"],
    },
)

READ_FILE = ToolSpec(
    name="read_file",
    description="Read the full content of a note by its exact path.",
    parameters={
        "type": "OBJECT",
        "properties": {
            "path": {"type": "STRING", "description": "Vault path of the note, e.g. 'notes/ideas.md'."},
        },
        "required": ["path"],
    },
)

CREATE_NOTE = ToolSpec(
    name="create_note",
    description=(
        "Create a new note in the vault. '.md' is appended when the path has no extension. "
        "Fails if the note already exists."
    ),
    parameters={
        "type": "OBJECT",
        "properties": {
            "path": {"type": "STRING", "description": "Vault path of the new note."},
            "content": {"type": "STRING", "description": "Markdown content of the note."},
        },
        "required": ["path", "content"],
    },
)


class VaultToolbox:
    """Dispatches model tool calls to the retrieval primitives.

    Errors raised by an operation are returned to the model as an
    ``{"error": ..., "code": ...}`` payload instead of aborting the chat.
    Every call is recorded in ``invocations``.
    """

    def __init__(self, retrieval: RetrievalService, allow_create: bool = True) -> None:
        self.retrieval = retrieval
        self.invocations: list[ToolInvocation] = []
        self._handlers: dict[str, Callable[..., dict[str, Any]]] = {
            LIST_FILES.name: self._list_files,
            SEARCH_VAULT.name: self._search_vault,
            READ_FILE.name: self._read_file,
        }
        self._specs = [LIST_FILES, SEARCH_VAULT, READ_FILE]
        if allow_create:
            self._handlers[CREATE_NOTE.name] = self._create_note
            self._specs.append(CREATE_NOTE)

    @property
    def specs(self) -> list[ToolSpec]:
        return list(self._specs)

    def _list_files(self) -> dict[str, Any]:
        return {"paths": self.retrieval.list_documents()}

    def _search_vault(self, query: str) -> dict[str, Any]:
        return {"query": query, "results": self.retrieval.search_documents(query)}

    def _read_file(self, path: str) -> dict[str, Any]:
        return {"path": path, "content": self.retrieval.get_document_content(path)}

    def _create_note(self, path: str, content: str) -> dict[str, Any]:
        return {"path": self.retrieval.create_document(path, content), "created": True}

    def dispatch(self, name: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run the tool called ``name`` with ``arguments``.

        Returns:
            The tool's JSON-serializable result, or an error payload.
        """
        arguments = dict(arguments or {})
        handler = self._handlers.get(name)
        if handler is None:
            result: dict[str, Any] = {"error": f"Unknown tool: {name}", "code": "UNKNOWN_TOOL"}
        else:
            try:
                inspect.signature(handler).bind(**arguments)
            except TypeError as exc:
                logger.warning("Tool %s called with bad arguments %s: %s", name, arguments, exc)
                result = {"error": f"Invalid arguments for {name}: {exc}", "code": "BAD_ARGUMENTS"}
            else:
                try:
                    result = handler(**arguments)
                except MastermindError as exc:
                    logger.warning("Tool %s failed: %s", name, exc.message)
                    result = {"error": exc.message, "code": exc.error_code}

        logger.info("Tool call %s(%s) -> %s", name, ", ".join(arguments), "error" if "error" in result else "ok")
        self.invocations.append(ToolInvocation(name=name, arguments=arguments, result=result))
        return result

    def reset(self) -> None:
        self.invocations.clear()
