"""Retrieval primitives over the vault: list, search, read, create."""

import logging
import threading
from collections.abc import Sequence

from ..domain.exceptions import DocumentStoreError, OperationCancelledError
from ..domain.utils import normalize_path, resolve_note_path
from ..ports.document_store_port import DocumentStorePort

logger = logging.getLogger(__name__)


class RetrievalService:
    """Linear retrieval operations layered on the document store.

    These are also exposed to the AI client as tools, so each one is safe
    to call on its own.
    """

    def __init__(
        self,
        store: DocumentStorePort,
        *,
        search_limit: int = 20,
        extensions: Sequence[str] = (".md",),
        default_extension: str = ".md",
    ) -> None:
        self.store = store
        self.search_limit = search_limit
        self.extensions = tuple(extensions)
        self.default_extension = default_extension

    def list_documents(self) -> list[str]:
        """Return every note path in the store's order. Read-only."""
        return [document.path for document in self.store.list_all()]

    def search_documents(self, query: str, cancel_event: threading.Event | None = None) -> list[str]:
        """Full-text search over note paths and content. Read-only.

        Scans notes in store order and stops as soon as ``search_limit``
        matches are collected. Notes that fail to read are skipped.

        Args:
            query: Case-insensitive substring to look for. Empty matches all.
            cancel_event: Set by the caller to abandon the scan.

        Returns:
            Matching paths in store order.
        """
        query_lower = query.lower()
        results: list[str] = []

        for document in self.store.list_all():
            if cancel_event is not None and cancel_event.is_set():
                raise OperationCancelledError("Vault search cancelled", context={"matches": len(results)})

            if query_lower in document.path.lower():
                results.append(document.path)
            else:
                try:
                    content = self.store.read(document.path)
                except (DocumentStoreError, OSError) as exc:
                    logger.warning("Search skipped unreadable note %s: %s", document.path, exc)
                    continue
                if query_lower in content.lower():
                    results.append(document.path)

            if len(results) >= self.search_limit:
                break

        logger.debug("Search for %r matched %d notes", query, len(results))
        return results

    def get_document_content(self, path: str) -> str:
        """Read a note by exact path. Read-only.

        Raises:
            DocumentNotFoundError: If no note exists at ``path``.
        """
        return self.store.read(normalize_path(path))

    def create_document(self, path: str, content: str) -> str:
        """Create a new note. Writes to the store.

        The default extension is appended when ``path`` lacks a recognized one.

        Returns:
            The path the note was created at.

        Raises:
            DocumentAlreadyExistsError: If a note already exists there.
        """
        resolved = resolve_note_path(path, self.extensions, self.default_extension)
        self.store.create(resolved, content)
        logger.info("Created note %s", resolved)
        return resolved
