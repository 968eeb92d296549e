"""Filesystem-backed vault store."""

import logging
from collections.abc import Sequence
from pathlib import Path

from ...core.domain import Document
from ...core.domain.exceptions import (
    DocumentAlreadyExistsError,
    DocumentNotFoundError,
    DocumentReadError,
    InvalidDocumentPathError,
)
from ...core.domain.utils import has_recognized_extension, normalize_path
from ...core.ports.document_store_port import DocumentStorePort

logger = logging.getLogger(__name__)


class FilesystemDocumentStore(DocumentStorePort):
    """Reads and writes notes under a vault root directory.

    Only files with one of ``extensions`` are listed. Hidden files and
    folders (``.obsidian/``, ``.trash/``) are skipped. Paths are
    vault-relative and slash-separated on every platform.
    """

    def __init__(
        self,
        root: str | Path,
        extensions: Sequence[str] = (".md",),
        active_path: str | None = None,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize the store.

        Args:
            root: Vault root directory.
            extensions: Note extensions to list.
            active_path: Vault path of the note currently in focus.
            encoding: Text encoding of notes.
        """
        self.root = Path(root)
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.encoding = encoding
        self._active_path = normalize_path(active_path) if active_path else None

    def _resolve(self, path: str) -> Path:
        relative = normalize_path(path)
        target = (self.root / relative).resolve()
        if not target.is_relative_to(self.root.resolve()):
            raise InvalidDocumentPathError("Note path escapes the vault root", context={"path": path})
        return target

    def _open(self, path: str):
        target = self._resolve(path)
        if not target.is_file():
            raise DocumentNotFoundError(f"Note not found: {path}", context={"path": path})
        try:
            return open(target, encoding=self.encoding, errors="replace")
        except FileNotFoundError as exc:
            raise DocumentNotFoundError(f"Note not found: {path}", cause=exc, context={"path": path}) from exc
        except OSError as exc:
            raise DocumentReadError(f"Failed to read note: {path}", cause=exc, context={"path": path}) from exc

    def list_all(self) -> list[Document]:
        if not self.root.is_dir():
            logger.warning("Vault directory %s does not exist", self.root)
            return []

        documents = []
        for file_path in sorted(self.root.rglob("*")):
            relative = file_path.relative_to(self.root)
            if any(part.startswith(".") for part in relative.parts):
                continue
            if not file_path.is_file() or not has_recognized_extension(file_path.name, self.extensions):
                continue
            documents.append(Document(path=relative.as_posix()))
        return documents

    def read(self, path: str) -> str:
        with self._open(path) as handle:
            try:
                return handle.read()
            except OSError as exc:
                raise DocumentReadError(f"Failed to read note: {path}", cause=exc, context={"path": path}) from exc

    def read_prefix(self, path: str, max_chars: int) -> str:
        with self._open(path) as handle:
            try:
                return handle.read(max_chars)
            except OSError as exc:
                raise DocumentReadError(f"Failed to read note: {path}", cause=exc, context={"path": path}) from exc

    def create(self, path: str, content: str) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        try:
            # "x" fails atomically if the file already exists
            with open(target, "x", encoding=self.encoding) as handle:
                handle.write(content)
        except FileExistsError as exc:
            raise DocumentAlreadyExistsError(
                f"Note already exists: {path}", cause=exc, context={"path": path}
            ) from exc

    def get_active(self) -> Document | None:
        if self._active_path is None:
            return None
        return Document(path=self._active_path)

    def set_active(self, path: str | None) -> None:
        """Change the note in focus, or clear it with None."""
        self._active_path = normalize_path(path) if path else None
