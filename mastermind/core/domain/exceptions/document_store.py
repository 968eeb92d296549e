"""Document store exceptions for Mastermind."""

from .base import MastermindError


class DocumentStoreError(MastermindError):
    """Base error for vault storage operations."""

    error_code = "MM_DOC_001"


class DocumentNotFoundError(DocumentStoreError):
    """No note exists at the requested path."""

    error_code = "MM_DOC_002"


class DocumentAlreadyExistsError(DocumentStoreError):
    """A note already exists at the path being created."""

    error_code = "MM_DOC_003"


class DocumentReadError(DocumentStoreError):
    """Transient failure while reading a note.

    Scans treat this as a non-match for the affected note only.
    """

    error_code = "MM_DOC_004"


class InvalidDocumentPathError(DocumentStoreError):
    """Path is empty, absolute, or escapes the vault root."""

    error_code = "MM_DOC_005"
