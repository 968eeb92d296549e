"""Assembles the vault context sent alongside a chat query."""

import logging
import threading
from collections.abc import Sequence

from ..domain import BlockLabel, ContextBlock, Document, ScoredCandidate
from ..domain.exceptions import DocumentStoreError
from ..ports.document_store_port import DocumentStorePort
from .relevance import RelevanceScorer
from .scan import fan_out

logger = logging.getLogger(__name__)

NO_CONTEXT_FOUND = "No immediate relevant context found. Mastermind may need to search the vault."
TRUNCATION_MARKER = "..."


class ContextAssembler:
    """Selects, ranks and truncates notes into a single context string.

    The active note is always included in full. Every note in the vault is
    then scored against the query, and the best few are appended as
    truncated RELEVANT FILE blocks.
    """

    def __init__(
        self,
        store: DocumentStorePort,
        scorer: RelevanceScorer | None = None,
        *,
        max_relevant_files: int = 5,
        min_score: int = 5,
        snippet_chars: int = 2000,
        max_workers: int = 16,
        read_timeout: float | None = None,
    ) -> None:
        """Initialize the assembler.

        Args:
            store: Store the notes are read from.
            scorer: Relevance scorer; defaults to one over ``store``.
            max_relevant_files: How many ranked candidates are considered.
            min_score: Candidates must score strictly above this.
            snippet_chars: Characters of content kept per relevant note.
            max_workers: Concurrent reads during the scoring scan.
            read_timeout: Per-note read timeout in seconds, or None.
        """
        self.store = store
        self.scorer = scorer or RelevanceScorer(store)
        self.max_relevant_files = max_relevant_files
        self.min_score = min_score
        self.snippet_chars = snippet_chars
        self.max_workers = max_workers
        self.read_timeout = read_timeout

    def rank(
        self,
        query: str,
        documents: Sequence[Document],
        cancel_event: threading.Event | None = None,
    ) -> list[ScoredCandidate]:
        """Score all documents and return the top candidates above threshold.

        Ties keep the order of ``documents``.
        """
        query_lower = query.lower()
        scores = fan_out(
            lambda document: self.scorer.score(document, query_lower),
            documents,
            max_workers=self.max_workers,
            read_timeout=self.read_timeout,
            cancel_event=cancel_event,
        )

        candidates = [
            ScoredCandidate(document=document, score=score or 0)
            for document, score in zip(documents, scores, strict=True)
        ]
        candidates = [c for c in candidates if c.score > self.min_score]
        candidates.sort(key=lambda c: c.score, reverse=True)
        return candidates[: self.max_relevant_files]

    def collect_blocks(
        self,
        query: str,
        active: Document | None = None,
        documents: Sequence[Document] | None = None,
        cancel_event: threading.Event | None = None,
    ) -> list[ContextBlock]:
        """Build the ordered context blocks for ``query``.

        Args:
            query: Free-text user query.
            active: Note currently in focus, included in full regardless of score.
            documents: Notes to rank; defaults to the whole store.
            cancel_event: Set by the caller to abandon the scan.

        Returns:
            The ACTIVE FILE block (if any) followed by RELEVANT FILE blocks
            in ranked order.
        """
        if documents is None:
            documents = self.store.list_all()

        ranked = self.rank(query, documents, cancel_event=cancel_event)
        relevant = [
            c.document.path for c in ranked if active is None or c.document.path != active.path
        ]
        paths = ([active.path] if active is not None else []) + relevant
        contents = dict(zip(paths, self._read_many(paths, cancel_event), strict=True))

        blocks: list[ContextBlock] = []
        if active is not None and contents[active.path] is not None:
            blocks.append(ContextBlock(BlockLabel.ACTIVE, active.path, contents[active.path]))

        for path in relevant:
            content = contents[path]
            if content is None:
                continue
            # The marker is appended even when nothing was cut.
            snippet = content[: self.snippet_chars] + TRUNCATION_MARKER
            blocks.append(ContextBlock(BlockLabel.RELEVANT, path, snippet))

        logger.debug(
            "Assembled %d context blocks from %d notes (%d ranked)",
            len(blocks),
            len(documents),
            len(ranked),
        )
        return blocks

    def _read_many(
        self, paths: Sequence[str], cancel_event: threading.Event | None
    ) -> list[str | None]:
        """Read notes under the same timeout as the scan. Failures yield None."""

        def read(path: str) -> str | None:
            try:
                return self.store.read(path)
            except (DocumentStoreError, OSError) as exc:
                logger.warning("Note %s could not be read: %s", path, exc)
                return None

        return fan_out(
            read,
            paths,
            max_workers=self.max_workers,
            read_timeout=self.read_timeout,
            cancel_event=cancel_event,
        )

    @staticmethod
    def render_blocks(blocks: Sequence[ContextBlock]) -> str:
        """Concatenate blocks, or return the no-context sentinel when empty."""
        if not blocks:
            return NO_CONTEXT_FOUND
        return "".join(block.render() for block in blocks)

    def assemble(
        self,
        query: str,
        active: Document | None = None,
        documents: Sequence[Document] | None = None,
        cancel_event: threading.Event | None = None,
    ) -> str:
        """Assemble the context string for ``query``.

        Returns:
            Rendered blocks, or ``NO_CONTEXT_FOUND`` when there is no active
            note and nothing scored above the threshold.
        """
        return self.render_blocks(self.collect_blocks(query, active, documents, cancel_event))
