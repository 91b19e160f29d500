"""
API Routes module.

This module contains all FastAPI route handlers organized by resource:
- search: Semantic search, document storage/deletion, health and demo endpoints
"""

from .search import router

__all__ = [
    "router",
]
