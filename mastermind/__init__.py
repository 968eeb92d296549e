"""Mastermind: relevance-ranked vault context and retrieval tools for chat assistants."""

__version__ = "1.0.0"
