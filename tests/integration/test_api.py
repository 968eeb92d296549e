"""Integration tests for FastAPI endpoints."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from mastermind.adapters.inbound.api.main import app
from mastermind.adapters.outbound.memory_store import InMemoryDocumentStore
from mastermind.composition.container import get_chat_service, get_document_store, get_retrieval_service
from mastermind.core.domain.exceptions import LLMRateLimitError
from mastermind.core.services.chat_service import ChatService
from mastermind.core.services.context_service import NO_CONTEXT_FOUND, ContextAssembler
from mastermind.core.services.retrieval_service import RetrievalService


@pytest.fixture
def mock_llm():
    """Mock LLM that calls one tool before answering."""

    def fake_generate(prompt, system_prompt=None, tools=(), tool_handler=None):
        tool_handler("search_vault", {"query": "fox"})
        return "Foxes are mentioned in A.md and B.md."

    llm = MagicMock()
    llm.generate.side_effect = fake_generate
    return llm


@pytest.fixture
def store(sample_notes):
    return InMemoryDocumentStore(sample_notes, active_path="recipes/bread.md")


@pytest.fixture
def client(store, mock_llm):
    """Create test client with in-memory dependencies."""
    retrieval = RetrievalService(store)
    service = ChatService(store, ContextAssembler(store), retrieval, mock_llm)

    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_retrieval_service] = lambda: retrieval
    app.dependency_overrides[get_chat_service] = lambda: service
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.integration
    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"

    @pytest.mark.integration
    def test_readiness_counts_notes(self, client):
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["vault"] == "connected (4 notes)"


class TestChatEndpoints:
    """Tests for the question and context endpoints."""

    @pytest.mark.integration
    def test_ask_question(self, client, mock_llm):
        response = client.post("/api/v1/ask", json={"question": "Where are the foxes?"})

        assert response.status_code == 200
        data = response.json()
        assert data["answer"] == "Foxes are mentioned in A.md and B.md."
        assert data["question"] == "Where are the foxes?"
        assert data["tool_calls"] == [{"name": "search_vault", "arguments": {"query": "fox"}, "failed": False}]
        mock_llm.generate.assert_called_once()

    @pytest.mark.integration
    def test_ask_uses_active_note(self, client):
        response = client.post("/api/v1/ask", json={"question": "fox"})

        assert response.json()["sources"] == ["recipes/bread.md", "A.md", "B.md"]

    @pytest.mark.integration
    def test_ask_with_explicit_active_path(self, client):
        response = client.post("/api/v1/ask", json={"question": "fox", "active_path": "A.md"})

        assert response.json()["sources"] == ["A.md", "B.md"]

    @pytest.mark.integration
    def test_ask_empty_question_rejected(self, client):
        response = client.post("/api/v1/ask", json={"question": ""})

        assert response.status_code == 422

    @pytest.mark.integration
    def test_ask_whitespace_question_rejected(self, client):
        response = client.post("/api/v1/ask", json={"question": "   "})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MM_VAL_002"

    @pytest.mark.integration
    def test_ask_question_too_long(self, client):
        response = client.post("/api/v1/ask", json={"question": "x" * 4001})

        assert response.status_code == 422

    @pytest.mark.integration
    def test_rate_limit_maps_to_429(self, client, mock_llm):
        mock_llm.generate.side_effect = LLMRateLimitError("Rate limit reached")

        response = client.post("/api/v1/ask", json={"question": "fox"})

        assert response.status_code == 429
        assert response.json()["error"]["code"] == "MM_LLM_003"

    @pytest.mark.integration
    def test_unexpected_error_maps_to_500(self, client, mock_llm):
        mock_llm.generate.side_effect = RuntimeError("boom")

        response = client.post("/api/v1/ask", json={"question": "fox"})

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "PYTHON_ERR"

    @pytest.mark.integration
    def test_context(self, client):
        response = client.post("/api/v1/context", json={"query": "fox", "active_path": "B.md"})

        assert response.status_code == 200
        data = response.json()
        assert data["found"] is True
        assert data["sources"] == ["B.md", "A.md"]
        assert data["context"] == (
            "--- ACTIVE FILE: B.md ---\nfox jumps\n\n--- RELEVANT FILE: A.md ---\nthe quick fox...\n\n"
        )

    @pytest.mark.integration
    def test_context_not_found(self, client, store):
        store.set_active(None)

        response = client.post("/api/v1/context", json={"query": "zebra"})

        data = response.json()
        assert data["found"] is False
        assert data["context"] == NO_CONTEXT_FOUND
        assert data["sources"] == []


class TestNoteEndpoints:
    """Tests for list, search, read and create."""

    @pytest.mark.integration
    def test_list_notes(self, client, sample_notes):
        response = client.get("/api/v1/notes")

        assert response.status_code == 200
        assert response.json()["paths"] == list(sample_notes)

    @pytest.mark.integration
    def test_search_notes(self, client):
        response = client.get("/api/v1/notes/search", params={"q": "FOX"})

        assert response.json() == {"query": "FOX", "results": ["A.md", "B.md"]}

    @pytest.mark.integration
    def test_read_nested_note(self, client):
        response = client.get("/api/v1/notes/recipes/bread.md")

        assert response.status_code == 200
        assert response.json()["content"].startswith("Flour")

    @pytest.mark.integration
    def test_read_missing_note(self, client):
        response = client.get("/api/v1/notes/missing.md")

        assert response.status_code == 404
        data = response.json()
        assert data["error"]["code"] == "MM_DOC_002"
        assert data["error"]["type"] == "DocumentNotFoundError"

    @pytest.mark.integration
    def test_create_note(self, client, store):
        response = client.post("/api/v1/notes", json={"path": "notes/x", "content": "hello"})

        assert response.status_code == 201
        assert response.json() == {"path": "notes/x.md", "content": "hello"}
        assert store.read("notes/x.md") == "hello"

    @pytest.mark.integration
    def test_create_existing_note_conflicts(self, client):
        response = client.post("/api/v1/notes", json={"path": "A", "content": "again"})

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "MM_DOC_003"

    @pytest.mark.integration
    def test_create_outside_vault_rejected(self, client):
        response = client.post("/api/v1/notes", json={"path": "../escape", "content": ""})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MM_DOC_005"


class TestOpenAPI:
    @pytest.mark.integration
    def test_openapi_schema(self, client):
        response = client.get("/openapi.json")

        assert response.status_code == 200
        data = response.json()
        assert data["info"]["title"] == "Mastermind API"
        assert "/api/v1/notes/search" in data["paths"]
