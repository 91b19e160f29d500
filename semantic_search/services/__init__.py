"""
Services module for the Semantic Search Service.

This module contains the core search functionality:
- vector_store: Pinecone data-plane client (query, upsert, delete)
- embedder: OpenAI embedding generation
- normalizer: Content extraction and score ordering for raw hits
- titles: Title generation for search hits
- demo: Fixed offline dataset with keyword scoring
- search: Façade tying the above together per request
"""

from .vector_store import PineconeVectorStore
from .embedder import OpenAIEmbedder
from .normalizer import NO_CONTENT, extract_content, normalize_hit, sort_by_score
from .titles import FALLBACK_TITLE, TitleGenerator
from .demo import demo_results
from .search import SearchService
from .utils import clean_query, normalize_metadata

__all__ = [
    "PineconeVectorStore",
    "OpenAIEmbedder",
    "NO_CONTENT",
    "extract_content",
    "normalize_hit",
    "sort_by_score",
    "FALLBACK_TITLE",
    "TitleGenerator",
    "demo_results",
    "SearchService",
    "clean_query",
    "normalize_metadata",
]
