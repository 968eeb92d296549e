"""Document Store Port Interface."""

from abc import ABC, abstractmethod

from ..domain import Document


class DocumentStorePort(ABC):
    """Abstract interface for the vault backing store.

    Implementations raise ``DocumentNotFoundError`` for missing paths,
    ``DocumentAlreadyExistsError`` when creating over an existing note and
    ``DocumentReadError`` for transient read failures.
    """

    @abstractmethod
    def list_all(self) -> list[Document]:
        """List every note in the store's native order."""
        ...

    @abstractmethod
    def read(self, path: str) -> str:
        """Read the full content of a note."""
        ...

    def read_prefix(self, path: str, max_chars: int) -> str:
        """Read at most ``max_chars`` characters from the start of a note.

        Stores that can stop reading early should override this.
        """
        return self.read(path)[:max_chars]

    @abstractmethod
    def create(self, path: str, content: str) -> None:
        """Create a new note. Never overwrites an existing one."""
        ...

    @abstractmethod
    def get_active(self) -> Document | None:
        """Return the note currently in focus, if any."""
        ...
