"""Text and path helpers shared across the vault engine.

Note content is never normalized: it is passed through exactly as the
store returns it. Only user queries and model output go through
``normalize_text``.
"""

import posixpath
import unicodedata
from collections.abc import Sequence

from .exceptions import InvalidDocumentPathError


def normalize_text(text: str | None) -> str:
    """Strip BOM markers and surrounding whitespace, apply NFKC."""
    if not text:
        return ""
    cleaned = text.replace("\ufeff", "")
    return unicodedata.normalize("NFKC", cleaned).strip()


def normalize_path(path: str) -> str:
    """Normalize a vault path to its canonical slash-separated form.

    Raises:
        InvalidDocumentPathError: If the path is empty, absolute, or
            climbs out of the vault root.
    """
    raw = (path or "").strip().replace("\\", "/")
    if not raw:
        raise InvalidDocumentPathError("Note path cannot be empty")
    if raw.startswith("/"):
        raise InvalidDocumentPathError("Note path must be relative to the vault", context={"path": path})

    normalized = posixpath.normpath(raw)
    if normalized == "." or normalized == ".." or normalized.startswith("../"):
        raise InvalidDocumentPathError("Note path escapes the vault root", context={"path": path})
    return normalized


def has_recognized_extension(path: str, extensions: Sequence[str]) -> bool:
    lowered = path.lower()
    return any(lowered.endswith(ext.lower()) for ext in extensions)


def resolve_note_path(path: str, extensions: Sequence[str] = (".md",), default_extension: str = ".md") -> str:
    """Return the path a new note is created at.

    Appends ``default_extension`` when the path does not already end with
    one of ``extensions``.

    Example:
        >>> resolve_note_path("notes/x")
        'notes/x.md'
    """
    normalized = normalize_path(path)
    if has_recognized_extension(normalized, extensions):
        return normalized
    return f"{normalized}{default_extension}"
