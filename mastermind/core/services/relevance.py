"""Relevance scoring of a single note against a query."""

import logging

from ..domain import Document
from ..domain.exceptions import DocumentStoreError
from ..ports.document_store_port import DocumentStorePort

logger = logging.getLogger(__name__)

NAME_MATCH_SCORE = 10
PATH_MATCH_SCORE = 5
CONTENT_MATCH_SCORE = 20
MAX_SCORE = NAME_MATCH_SCORE + PATH_MATCH_SCORE + CONTENT_MATCH_SCORE


def score_signals(name: str, path: str, content_prefix: str, query_lower: str) -> int:
    """Sum the independent name, path and content signals.

    An empty query is a substring of everything, so every signal fires.
    """
    score = 0
    if query_lower in name.lower():
        score += NAME_MATCH_SCORE
    if query_lower in path.lower():
        score += PATH_MATCH_SCORE
    if query_lower in content_prefix.lower():
        score += CONTENT_MATCH_SCORE
    return score


class RelevanceScorer:
    """Scores notes by filename, path and leading content matches."""

    def __init__(self, store: DocumentStorePort, content_scan_chars: int = 5000) -> None:
        """Initialize the scorer.

        Args:
            store: Store the note content is read from.
            content_scan_chars: How many leading characters of content are inspected.
        """
        self.store = store
        self.content_scan_chars = content_scan_chars

    def score(self, document: Document, query_lower: str) -> int:
        """Score ``document`` against an already lower-cased query.

        Reads at most ``content_scan_chars`` characters. A note that cannot
        be read scores 0.
        """
        try:
            prefix = self.store.read_prefix(document.path, self.content_scan_chars)
        except (DocumentStoreError, OSError) as exc:
            logger.warning("Skipping unreadable note %s: %s", document.path, exc)
            return 0

        # The store may ignore the bound; never inspect more than asked.
        return score_signals(document.name, document.path, prefix[: self.content_scan_chars], query_lower)
