"""Note retrieval endpoints: list, search, read, create."""

from fastapi import APIRouter, Depends, Query, status

from .....composition.container import get_retrieval_service
from .....core.services.retrieval_service import RetrievalService
from ..models import (
    CreateNoteRequest,
    ErrorResponse,
    NoteListResponse,
    NoteResponse,
    SearchResponse,
)

router = APIRouter(prefix="/api/v1/notes", tags=["notes"])


@router.get("", response_model=NoteListResponse)
def list_notes(retrieval: RetrievalService = Depends(get_retrieval_service)) -> NoteListResponse:
    """List every note in the vault."""
    return NoteListResponse(paths=retrieval.list_documents())


@router.get("/search", response_model=SearchResponse)
def search_notes(
    q: str = Query("", description="Case-insensitive text to search for"),
    retrieval: RetrievalService = Depends(get_retrieval_service),
) -> SearchResponse:
    """Full-text search over note paths and content."""
    return SearchResponse(query=q, results=retrieval.search_documents(q))


@router.get(
    "/{path:path}",
    response_model=NoteResponse,
    responses={404: {"model": ErrorResponse, "description": "Note not found"}},
)
def read_note(path: str, retrieval: RetrievalService = Depends(get_retrieval_service)) -> NoteResponse:
    """Read a note by its exact vault path."""
    return NoteResponse(path=path, content=retrieval.get_document_content(path))


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse, "description": "Note already exists"}},
)
def create_note(
    request: CreateNoteRequest,
    retrieval: RetrievalService = Depends(get_retrieval_service),
) -> NoteResponse:
    """Create a new note; never overwrites."""
    path = retrieval.create_document(request.path, request.content)
    return NoteResponse(path=path, content=request.content)
