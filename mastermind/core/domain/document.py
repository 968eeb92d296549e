"""Vault document and context models."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Document:
    """A note in the vault, identified by its slash-separated path.

    The content is owned by the document store and read through
    ``DocumentStorePort``; a ``Document`` only names it.

    Attributes:
        path: Vault-relative path, unique within the vault (e.g. ``notes/fox.md``).
    """

    path: str

    @property
    def name(self) -> str:
        """Last path segment, extension included."""
        return self.path.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class ScoredCandidate:
    """A document paired with its relevance score for one query."""

    document: Document
    score: int


class BlockLabel(Enum):
    """Header label of a context block."""

    ACTIVE = "ACTIVE FILE"
    RELEVANT = "RELEVANT FILE"


@dataclass(frozen=True)
class ContextBlock:
    """A labeled, path-tagged segment of the assembled context.

    Attributes:
        label: Whether this is the active note or a relevant note.
        path: Path of the note the content came from.
        content: Full content (active) or truncated prefix (relevant).
    """

    label: BlockLabel
    path: str
    content: str

    @property
    def header(self) -> str:
        return f"--- {self.label.value}: {self.path} ---"

    def render(self) -> str:
        return f"{self.header}\n{self.content}\n\n"
