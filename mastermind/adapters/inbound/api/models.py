"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field


class QuestionRequest(BaseModel):
    """Request model for asking a question."""

    question: str = Field(
        ...,
        min_length=1,
        max_length=4000,
        description="Question about the vault",
        json_schema_extra={"example": "What did I decide about the garden layout?"},
    )
    active_path: str | None = Field(
        None,
        description="Vault path of the note currently open; defaults to the configured active note",
    )


class ToolCallInfo(BaseModel):
    """A tool call made by the model while answering."""

    name: str = Field(..., description="Tool name")
    arguments: dict = Field(default_factory=dict, description="Arguments the model supplied")
    failed: bool = Field(False, description="Whether the tool returned an error")


class AnswerResponse(BaseModel):
    """Response model for an answered question."""

    answer: str = Field(..., description="The AI-generated answer")
    question: str = Field(..., description="The question asked")
    sources: list[str] = Field(default_factory=list, description="Notes included in the context")
    tool_calls: list[ToolCallInfo] = Field(default_factory=list, description="Tools the model used")


class ContextRequest(BaseModel):
    """Request model for assembling context without calling the LLM."""

    query: str = Field("", max_length=4000, description="Free-text query; empty matches every note")
    active_path: str | None = Field(None, description="Vault path of the note currently open")


class ContextResponse(BaseModel):
    """Assembled context and the notes it includes."""

    context: str = Field(..., description="Context blocks, or the no-context message")
    sources: list[str] = Field(default_factory=list, description="Notes included, active note first")
    found: bool = Field(..., description="False when no context was found")


class NoteListResponse(BaseModel):
    paths: list[str] = Field(default_factory=list, description="Every note path in vault order")


class SearchResponse(BaseModel):
    query: str = Field(..., description="The search query")
    results: list[str] = Field(default_factory=list, description="Matching note paths (max 20)")


class NoteResponse(BaseModel):
    path: str = Field(..., description="Vault path of the note")
    content: str = Field(..., description="Full note content")


class CreateNoteRequest(BaseModel):
    path: str = Field(..., min_length=1, description="Vault path; '.md' is appended when missing")
    content: str = Field("", description="Note content")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    vault: str = Field(..., description="Vault status")


class ErrorDetail(BaseModel):
    """Structured error detail information."""

    type: str = Field(..., description="Exception type name")
    code: str = Field(..., description="Error code (e.g., MM_DOC_002)")
    message: str = Field(..., description="Human-readable error message")


class ErrorLocation(BaseModel):
    """Source location where error occurred."""

    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(..., alias="class", description="Class name or <module>")
    method: str = Field(..., description="Method/function name")
    file: str = Field(..., description="Source file name")
    line: int = Field(..., description="Line number")
    timestamp: str | None = Field(None, description="When the error occurred")


class ErrorResponse(BaseModel):
    """Response model for structured errors."""

    error: ErrorDetail = Field(..., description="Error type, code, and message")
    location: ErrorLocation | None = Field(None, description="Source location of the error")
    context: dict | None = Field(None, description="Additional debugging context")
    cause: dict | None = Field(None, description="Underlying exception that caused this error")
    stack_trace: list[str] | None = Field(None, description="Stack trace (debug mode only)")
