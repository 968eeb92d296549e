"""In-memory vault store for tests and embedding hosts."""

import threading
from collections.abc import Iterable

from ...core.domain import Document
from ...core.domain.exceptions import DocumentAlreadyExistsError, DocumentNotFoundError
from ...core.domain.utils import normalize_path
from ...core.ports.document_store_port import DocumentStorePort


class InMemoryDocumentStore(DocumentStorePort):
    """Notes held in a dict, listed in insertion order.

    Example:
        store = InMemoryDocumentStore({"A.md": "the quick fox"})
    """

    def __init__(
        self,
        notes: dict[str, str] | Iterable[tuple[str, str]] | None = None,
        active_path: str | None = None,
    ) -> None:
        items = notes.items() if isinstance(notes, dict) else (notes or [])
        self._notes: dict[str, str] = {normalize_path(path): content for path, content in items}
        self._active_path = active_path
        self._lock = threading.Lock()

    def list_all(self) -> list[Document]:
        with self._lock:
            return [Document(path=path) for path in self._notes]

    def read(self, path: str) -> str:
        with self._lock:
            try:
                return self._notes[path]
            except KeyError as exc:
                raise DocumentNotFoundError(f"Note not found: {path}", context={"path": path}) from exc

    def create(self, path: str, content: str) -> None:
        with self._lock:
            if path in self._notes:
                raise DocumentAlreadyExistsError(f"Note already exists: {path}", context={"path": path})
            self._notes[path] = content

    def get_active(self) -> Document | None:
        if self._active_path is None:
            return None
        return Document(path=self._active_path)

    def set_active(self, path: str | None) -> None:
        self._active_path = path

    def delete(self, path: str) -> None:
        """Remove a note, as a host would when the user deletes it."""
        with self._lock:
            self._notes.pop(path, None)
