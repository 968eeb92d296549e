"""Composition root wiring adapters to the application services."""

from __future__ import annotations

import logging
from functools import lru_cache

from ..adapters.outbound.filesystem_store import FilesystemDocumentStore
from ..adapters.outbound.llm import GeminiClient, GeminiLLMAdapter
from ..common.rate_limiter import RateLimiter
from ..config import settings
from ..core.services.chat_service import ChatService
from ..core.services.context_service import ContextAssembler
from ..core.services.relevance import RelevanceScorer
from ..core.services.retrieval_service import RetrievalService

logger = logging.getLogger(__name__)


@lru_cache
def get_document_store() -> FilesystemDocumentStore:
    logger.info("Opening vault at %s", settings.vault_dir)
    return FilesystemDocumentStore(
        settings.vault_dir,
        extensions=settings.note_extensions,
        active_path=settings.active_note,
    )


@lru_cache
def get_context_assembler() -> ContextAssembler:
    store = get_document_store()
    return ContextAssembler(
        store,
        RelevanceScorer(store, content_scan_chars=settings.content_scan_chars),
        max_relevant_files=settings.max_relevant_files,
        min_score=settings.min_relevance_score,
        snippet_chars=settings.relevant_snippet_chars,
        max_workers=settings.scan_workers,
        read_timeout=settings.note_read_timeout,
    )


@lru_cache
def get_retrieval_service() -> RetrievalService:
    return RetrievalService(
        get_document_store(),
        search_limit=settings.search_result_limit,
        extensions=settings.note_extensions,
        default_extension=settings.default_extension,
    )


@lru_cache
def get_llm() -> GeminiLLMAdapter:
    logger.info("Initializing GeminiLLMAdapter...")
    client = GeminiClient(
        api_key=settings.google_api_key,
        model=settings.llm_model,
        rate_limiter=RateLimiter(settings.llm_requests_per_minute),
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        max_tool_rounds=settings.max_tool_rounds,
    )
    return GeminiLLMAdapter(client)


@lru_cache
def get_chat_service() -> ChatService:
    logger.info("Initializing ChatService...")
    return ChatService(
        get_document_store(),
        get_context_assembler(),
        get_retrieval_service(),
        get_llm(),
    )


def reset_container() -> None:
    """Drop cached instances, e.g. after settings change."""
    for factory in (
        get_document_store,
        get_context_assembler,
        get_retrieval_service,
        get_llm,
        get_chat_service,
    ):
        factory.cache_clear()
